import pytest
from pcmstream.core.config import Config, StreamConfig
from pcmstream.core.exceptions import ConfigurationError

def test_defaults():
    config = Config.load({})
    assert config.logging.level == "INFO"
    assert config.logging.format == "json"
    assert config.stream.output_chunk_size == 0x4000
    assert config.stream.input_buffer_size == 0x8000

def test_load_from_environment():
    config = Config.load({
        "PCMSTREAM_LOG_LEVEL": "debug",
        "PCMSTREAM_LOG_FORMAT": "TEXT",
        "PCMSTREAM_OUTPUT_CHUNK_SIZE": "0x100",
        "PCMSTREAM_INPUT_BUFFER_SIZE": "2048",
    })
    assert config.logging.level == "DEBUG"
    assert config.logging.format == "text"
    assert config.stream.output_chunk_size == 256
    assert config.stream.input_buffer_size == 2048

def test_invalid_integer_in_environment():
    with pytest.raises(ConfigurationError):
        Config.load({"PCMSTREAM_OUTPUT_CHUNK_SIZE": "lots"})

def test_chunk_sizes_must_be_positive():
    with pytest.raises(ConfigurationError):
        StreamConfig(output_chunk_size=0)
    with pytest.raises(ConfigurationError):
        StreamConfig(input_buffer_size=-1)

def test_unknown_log_level_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        Config.load({"PCMSTREAM_LOG_LEVEL": "verbose"})

def test_unknown_log_format_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        Config.load({"PCMSTREAM_LOG_FORMAT": "xml"})
