import numpy as np
import pytest
from pcmstream.core.format import SampleFormat, PlaybackRange
from pcmstream.core.exceptions import ConfigurationError

@pytest.mark.parametrize("bits,channels,expected", [
    (8, 1, 1),
    (16, 1, 2),
    (16, 2, 4),
    (24, 2, 6),
    (32, 6, 24),
])
def test_sample_size(bits, channels, expected):
    fmt = SampleFormat(bits_per_sample=bits, channels=channels, sample_rate=44100)
    assert fmt.sample_size == expected
    assert fmt.frames(expected * 10) == 10
    assert fmt.bytes_for(10) == expected * 10

def test_defaults_match_raw_stream_conventions():
    fmt = SampleFormat()
    assert (fmt.bits_per_sample, fmt.channels, fmt.sample_rate) == (8, 1, 8000)

@pytest.mark.parametrize("kwargs", [
    {"bits_per_sample": 12},
    {"bits_per_sample": 0},
    {"channels": 0},
    {"sample_rate": 0},
    {"sample_rate": -44100},
])
def test_invalid_format_fails_fast(kwargs):
    with pytest.raises(ConfigurationError):
        SampleFormat(**kwargs)

def test_to_array_16bit_stereo():
    fmt = SampleFormat(16, 2, 48000)
    samples = np.array([[1, -1], [32767, -32768]], dtype="<i2")
    out = fmt.to_array(samples.tobytes())
    assert out.shape == (2, 2)
    np.testing.assert_array_equal(out, samples)

def test_to_array_8bit_is_unsigned():
    fmt = SampleFormat(8, 1, 8000)
    out = fmt.to_array(bytes([0, 128, 255]))
    assert out.dtype == np.uint8
    assert out[:, 0].tolist() == [0, 128, 255]

def test_to_array_24bit_sign_extends():
    fmt = SampleFormat(24, 1, 96000)
    data = bytes([0x01, 0x00, 0x00,
                  0xff, 0xff, 0xff,
                  0xff, 0xff, 0x7f,
                  0x00, 0x00, 0x80])
    out = fmt.to_array(data)
    assert out.dtype == np.int32
    assert out[:, 0].tolist() == [1, -1, 0x7fffff, -0x800000]

def test_to_array_32bit():
    fmt = SampleFormat(32, 1, 8000)
    samples = np.array([0, 2**31 - 1, -2**31], dtype="<i4")
    np.testing.assert_array_equal(fmt.to_array(samples.tobytes())[:, 0], samples)

def test_to_array_ignores_partial_frame():
    fmt = SampleFormat(16, 2, 8000)
    out = fmt.to_array(bytes(9))
    assert out.shape == (2, 2)

def test_to_array_accepts_memoryview():
    fmt = SampleFormat(16, 1, 8000)
    view = memoryview(bytearray(np.array([5, 6], dtype="<i2").tobytes()))
    assert fmt.to_array(view[:2])[:, 0].tolist() == [5]

def test_playback_range_validation():
    with pytest.raises(ConfigurationError):
        PlaybackRange(start_sample=-1)
    with pytest.raises(ConfigurationError):
        PlaybackRange(end_sample=-2)
    assert PlaybackRange().is_default
    assert not PlaybackRange(end_sample=10).is_default

def test_playback_range_clip():
    assert PlaybackRange(100, -1).clip(1000) == (100, 999)
    assert PlaybackRange(100, 2000).clip(1000) == (100, 999)
    assert PlaybackRange(100, 499).clip(1000) == (100, 499)
    assert PlaybackRange(0, 999).clip(1000) == (0, 999)

def test_playback_range_empty_after_clip():
    with pytest.raises(ConfigurationError):
        PlaybackRange(1000, -1).clip(1000)
    with pytest.raises(ConfigurationError):
        PlaybackRange(50, 10).clip(1000)
