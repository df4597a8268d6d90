class PCMStreamError(Exception):
    """Base exception for all pcmstream errors."""
    pass

class ConfigurationError(PCMStreamError):
    """Missing stream or stage, invalid format or range, or a lifecycle violation."""
    pass

class IoError(PCMStreamError):
    """The underlying byte stream failed to read, write or seek."""
    pass
