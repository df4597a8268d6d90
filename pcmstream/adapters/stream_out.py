import logging
from typing import Optional

from pcmstream.interfaces.stage import ABCStage
from pcmstream.interfaces.stream import ABCByteStream
from pcmstream.adapters.state import State
from pcmstream.core.config import StreamConfig
from pcmstream.core.exceptions import ConfigurationError
from pcmstream.core.format import SampleFormat
from pcmstream.core.metrics import metrics

logger = logging.getLogger(__name__)

class OutputAdapter:
    """
    Pipeline sink writing raw PCM samples to a byte stream.
    No header is written: the sink receives exactly the bytes the upstream produced.
    """

    def __init__(self,
                 stream: Optional[ABCByteStream] = None,
                 input: Optional[ABCStage] = None,
                 config: StreamConfig = None):
        self.stream = stream
        self.input = input
        self.config = config or StreamConfig()
        self.chunk_size = self.config.output_chunk_size
        self.state = State.IDLE
        self.bytes_written = 0

    @property
    def busy(self) -> bool:
        return self.state == State.BUSY

    def prepare(self) -> None:
        if self.busy:
            raise ConfigurationError("The output adapter is busy")
        if self.stream is None:
            raise ConfigurationError("Stream is not assigned.")
        self._require_input()

        self.input.init()
        self.bytes_written = 0
        self.state = State.BUSY
        logger.info("Output adapter prepared", extra={"chunk_size": self.chunk_size})

    def step(self, abort: bool = False) -> bool:
        """
        Move one chunk from upstream to the sink.
        Returns True while there may be more to write.
        """
        if not self.busy:
            return False
        if abort or not self.input.can_output:
            return False

        data = self.input.pull(self.chunk_size)
        length = len(data)
        if length == 0:
            logger.debug("Upstream exhausted")
            return False

        self.stream.write(data)
        self.bytes_written += length
        metrics.increment("output.chunks")
        metrics.increment("output.bytes_written", value=length)
        logger.debug(f"Wrote {length} bytes")
        return True

    def done(self) -> None:
        # Only the upstream is flushed; the sink stays open for its owner
        if self.input is not None:
            self.input.flush()
        if self.busy:
            logger.info(f"Output adapter done: {self.bytes_written} bytes written",
                        extra={"bytes_written": self.bytes_written})
        self.state = State.IDLE

    def _require_input(self) -> ABCStage:
        if self.input is None:
            raise ConfigurationError("Input is not assigned.")
        return self.input

    @property
    def sample_rate(self) -> int:
        return self._require_input().sample_rate

    @property
    def bits_per_sample(self) -> int:
        return self._require_input().bits_per_sample

    @property
    def channels(self) -> int:
        return self._require_input().channels

    @property
    def fmt(self) -> SampleFormat:
        stage = self._require_input()
        return SampleFormat(stage.bits_per_sample, stage.channels, stage.sample_rate)
