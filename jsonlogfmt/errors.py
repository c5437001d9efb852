"""
Exception types raised while converting JSON log lines to logfmt.
"""


class LogfmtError(Exception):
    """Base class for all jsonlogfmt errors"""
    pass


class DecodeError(LogfmtError):
    """Input line is not a JSON object (recovered per line)"""
    pass


class LineTooLongError(LogfmtError):
    """Input line exceeds the reader's maximum line size"""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"line > {limit // 1024}K")


class UnsupportedValueError(LogfmtError):
    """Value has a type outside the JSON value model"""

    def __init__(self, value):
        self.value = value
        super().__init__(f"unsupported value type: {type(value).__name__}")


class ConfigError(LogfmtError):
    """Configuration validation error"""
    pass
