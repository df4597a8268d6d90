from dataclasses import dataclass
from typing import Tuple

import numpy as np

from pcmstream.core.exceptions import ConfigurationError

SUPPORTED_BITS = (8, 16, 24, 32)

# 24-bit has no native dtype and is unpacked by hand in to_array()
_DTYPES = {
    8: np.dtype(np.uint8),
    16: np.dtype("<i2"),
    32: np.dtype("<i4"),
}

@dataclass(frozen=True)
class SampleFormat:
    """
    Byte layout of a raw PCM stream.

    Raw streams carry no header, so this is the only source of truth for how
    the bytes are framed. Samples are interleaved and little-endian; 8-bit
    samples are unsigned.
    """
    bits_per_sample: int = 8
    channels: int = 1
    sample_rate: int = 8000

    def __post_init__(self):
        if self.bits_per_sample not in SUPPORTED_BITS:
            raise ConfigurationError(
                f"bits_per_sample must be one of {SUPPORTED_BITS}, got {self.bits_per_sample}")
        if self.channels < 1:
            raise ConfigurationError(f"channels must be >= 1, got {self.channels}")
        if self.sample_rate <= 0:
            raise ConfigurationError(f"sample_rate must be > 0, got {self.sample_rate}")

    @property
    def sample_size(self) -> int:
        """Size in bytes of one sample frame (one sample per channel)."""
        return self.channels * self.bits_per_sample // 8

    def frames(self, nbytes: int) -> int:
        return nbytes // self.sample_size

    def bytes_for(self, frames: int) -> int:
        return frames * self.sample_size

    def to_array(self, data) -> np.ndarray:
        """
        Interpret raw bytes as samples.

        Returns an array shaped (frames, channels). Trailing bytes that do not
        make up a whole frame are ignored.
        """
        view = memoryview(data).cast("B")
        nframes = self.frames(len(view))
        view = view[:self.bytes_for(nframes)]

        if self.bits_per_sample == 24:
            raw = np.frombuffer(view, dtype=np.uint8).reshape(-1, 3).astype(np.int32)
            values = raw[:, 0] | (raw[:, 1] << 8) | (raw[:, 2] << 16)
            values = np.where(values & 0x800000, values - 0x1000000, values).astype(np.int32)
        else:
            values = np.frombuffer(view, dtype=_DTYPES[self.bits_per_sample])

        return values.reshape(nframes, self.channels)

    def __str__(self) -> str:
        return f"{self.bits_per_sample}bit/{self.channels}ch/{self.sample_rate}Hz"

@dataclass(frozen=True)
class PlaybackRange:
    """Sub-range of a stream in sample frames. end_sample == -1 means up to the end."""
    start_sample: int = 0
    end_sample: int = -1

    def __post_init__(self):
        if self.start_sample < 0:
            raise ConfigurationError(f"start_sample must be >= 0, got {self.start_sample}")
        if self.end_sample < -1:
            raise ConfigurationError(f"end_sample must be >= -1, got {self.end_sample}")

    @property
    def is_default(self) -> bool:
        return self.start_sample == 0 and self.end_sample == -1

    def clip(self, total_samples: int) -> Tuple[int, int]:
        """
        Clip the range against a stream of total_samples frames.

        An end past the last frame is silently pulled back to it, so callers
        can pass a large end to mean "at least this many samples".
        Returns (start, effective_end), both inclusive.
        """
        last = total_samples - 1
        end = last if self.end_sample == -1 or self.end_sample > last else self.end_sample
        if self.start_sample > end:
            raise ConfigurationError(
                f"Playback range [{self.start_sample}, {self.end_sample}] is empty "
                f"for a stream of {total_samples} samples")
        return self.start_sample, end
