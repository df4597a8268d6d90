import logging
from dataclasses import replace
from typing import Optional

from pcmstream.interfaces.stage import ABCStage
from pcmstream.interfaces.stream import ABCByteStream
from pcmstream.adapters.state import State
from pcmstream.core.config import StreamConfig
from pcmstream.core.exceptions import ConfigurationError
from pcmstream.core.format import SampleFormat, PlaybackRange
from pcmstream.core.metrics import metrics

logger = logging.getLogger(__name__)

class InputAdapter(ABCStage):
    """
    Pipeline source reading raw PCM from a byte stream.

    Raw audio has no descriptive header, so the sample format must be declared
    by the caller and match the actual byte layout. An optional playback range
    restricts streaming to a sub-range of sample frames.

    The stream is borrowed: the adapter reads and seeks it but never closes it.
    """

    def __init__(self,
                 stream: Optional[ABCByteStream] = None,
                 fmt: SampleFormat = None,
                 playback: PlaybackRange = None,
                 seekable: bool = False,
                 loop: bool = False,
                 config: StreamConfig = None):
        self.stream = stream
        self._fmt = fmt or SampleFormat()
        self._playback = playback or PlaybackRange()
        self._seekable = seekable
        self._loop = loop
        self.config = config or StreamConfig()
        self.state = State.IDLE

        # Owned read buffer: grows to the largest request, never shrinks
        self._buffer = bytearray(self.config.input_buffer_size)

        self._position = 0
        self._range_limited = False
        self.byte_size = -1
        self.total_samples = -1

    # Lifecycle

    @property
    def busy(self) -> bool:
        return self.state == State.BUSY

    def init(self) -> None:
        if self.busy:
            raise ConfigurationError("The input adapter is busy")
        if self.stream is None:
            raise ConfigurationError("Stream object not assigned")

        position = self.stream.position()
        byte_size = self.stream.size()
        sample_size = self._fmt.sample_size
        total_samples = byte_size // sample_size
        range_limited = not self._playback.is_default

        if range_limited:
            # Validate before touching the stream so a bad range leaves us idle
            start, end = self._playback.clip(total_samples)
            total_samples = end - start + 1
            byte_size = total_samples * sample_size

        if self._playback.start_sample > 0:
            self.seek(self._playback.start_sample)
            position = 0

        self._position = position
        self._range_limited = range_limited
        self.byte_size = byte_size
        self.total_samples = total_samples
        self.state = State.BUSY
        logger.info(f"Input adapter started: {self._fmt}, {total_samples} samples",
                    extra={"format": str(self._fmt), "total_samples": total_samples,
                           "start_sample": self._playback.start_sample,
                           "end_sample": self._playback.end_sample})

    def flush(self) -> None:
        # The stream position is left where it is
        if self.busy:
            logger.info("Input adapter flushed", extra={"position": self._position})
        self.state = State.IDLE

    # Data

    def pull(self, max_bytes: int) -> memoryview:
        """
        Read up to max_bytes from the stream.

        The returned view borrows the adapter's buffer and is only valid until
        the next pull; copy it (bytes(view)) to keep the data. Its length is
        the number of bytes actually read, zero at end of stream.
        """
        if not self.busy:
            raise ConfigurationError("The input adapter is not initialized")

        if max_bytes > len(self._buffer):
            logger.debug(f"Growing read buffer {len(self._buffer)} -> {max_bytes} bytes")
            self._buffer = bytearray(max_bytes)

        wanted = max_bytes
        if self._range_limited:
            wanted = max(0, min(wanted, self.byte_size - self._position))

        count = self.stream.read(self._buffer, wanted) if wanted > 0 else 0
        self._position += count
        metrics.increment("input.bytes_read", value=count)
        return memoryview(self._buffer)[:count]

    def seek(self, sample_index: int) -> bool:
        """
        Seek the stream to an absolute sample frame.

        Always reports success; whether the stream really supports seeking is
        declared by the seekable flag, which the pipeline driver consults.
        """
        if self.stream is None:
            raise ConfigurationError("Stream object not assigned")
        sample_size = self._fmt.sample_size
        self.stream.seek(sample_index * sample_size)
        self._position = max(0, sample_index - self._playback.start_sample) * sample_size
        logger.debug(f"Seeked to sample {sample_index}", extra={"sample": sample_index})
        return True

    # Declared properties

    def _check_idle(self, name: str):
        if self.busy:
            raise ConfigurationError(f"Cannot change {name} while the input adapter is busy")

    @property
    def fmt(self) -> SampleFormat:
        return self._fmt

    @fmt.setter
    def fmt(self, value: SampleFormat):
        self._check_idle("format")
        self._fmt = value

    @property
    def bits_per_sample(self) -> int:
        return self._fmt.bits_per_sample

    @bits_per_sample.setter
    def bits_per_sample(self, value: int):
        self._check_idle("bits_per_sample")
        self._fmt = replace(self._fmt, bits_per_sample=value)

    @property
    def channels(self) -> int:
        return self._fmt.channels

    @channels.setter
    def channels(self, value: int):
        self._check_idle("channels")
        self._fmt = replace(self._fmt, channels=value)

    @property
    def sample_rate(self) -> int:
        return self._fmt.sample_rate

    @sample_rate.setter
    def sample_rate(self, value: int):
        self._check_idle("sample_rate")
        self._fmt = replace(self._fmt, sample_rate=value)

    @property
    def playback(self) -> PlaybackRange:
        return self._playback

    @playback.setter
    def playback(self, value: PlaybackRange):
        self._check_idle("playback range")
        self._playback = value

    @property
    def start_sample(self) -> int:
        return self._playback.start_sample

    @start_sample.setter
    def start_sample(self, value: int):
        self._check_idle("start_sample")
        self._playback = replace(self._playback, start_sample=value)

    @property
    def end_sample(self) -> int:
        return self._playback.end_sample

    @end_sample.setter
    def end_sample(self, value: int):
        self._check_idle("end_sample")
        self._playback = replace(self._playback, end_sample=value)

    @property
    def seekable(self) -> bool:
        return self._seekable

    @seekable.setter
    def seekable(self, value: bool):
        self._check_idle("seekable")
        self._seekable = value

    @property
    def loop(self) -> bool:
        return self._loop

    @loop.setter
    def loop(self, value: bool):
        self._check_idle("loop")
        self._loop = value

    # Introspection

    @property
    def sample_size(self) -> int:
        return self._fmt.sample_size

    @property
    def capacity(self) -> int:
        return len(self._buffer)

    @property
    def position(self) -> int:
        """Bytes consumed, relative to the start of the playback range."""
        return self._position
