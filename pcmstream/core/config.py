import logging
import os
from dataclasses import dataclass, field

from pcmstream.core.exceptions import ConfigurationError

ENV_PREFIX = "PCMSTREAM_"

@dataclass
class LoggingConfig:
    level: str = "INFO"
    format: str = "json" # "json" or "text"

    def __post_init__(self):
        # getLevelName maps unknown names to "Level <name>" rather than an int
        if not isinstance(logging.getLevelName(self.level.upper()), int):
            raise ConfigurationError(f"Unknown log level: {self.level!r}")
        if self.format not in ("json", "text"):
            raise ConfigurationError(f"Log format must be \"json\" or \"text\", got {self.format!r}")

@dataclass
class StreamConfig:
    output_chunk_size: int = 0x4000 # bytes pulled from upstream per step
    input_buffer_size: int = 0x8000 # initial read buffer capacity

    def __post_init__(self):
        if self.output_chunk_size <= 0:
            raise ConfigurationError(f"output_chunk_size must be positive, got {self.output_chunk_size}")
        if self.input_buffer_size <= 0:
            raise ConfigurationError(f"input_buffer_size must be positive, got {self.input_buffer_size}")

@dataclass
class Config:
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    stream: StreamConfig = field(default_factory=StreamConfig)

    @classmethod
    def load(cls, environ=None) -> "Config":
        env = os.environ if environ is None else environ
        logging_config = LoggingConfig(
            level=env.get(ENV_PREFIX + "LOG_LEVEL", LoggingConfig.level).upper(),
            format=env.get(ENV_PREFIX + "LOG_FORMAT", LoggingConfig.format).lower(),
        )
        stream_config = StreamConfig(
            output_chunk_size=_int_from_env(env, "OUTPUT_CHUNK_SIZE", StreamConfig.output_chunk_size),
            input_buffer_size=_int_from_env(env, "INPUT_BUFFER_SIZE", StreamConfig.input_buffer_size),
        )
        return cls(logging=logging_config, stream=stream_config)

def _int_from_env(env, name: str, default: int) -> int:
    raw = env.get(ENV_PREFIX + name)
    if raw is None:
        return default
    try:
        # Accepts hex ("0x4000") as well as decimal
        return int(raw, 0)
    except ValueError:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}")
