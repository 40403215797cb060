"""
Custom exceptions for the developer tools.
"""

class ToolError(ValueError):
    """Base exception for all tool errors."""
    pass

class ToolConfigError(ToolError):
    """Raised when tool configuration is invalid."""
    pass

class TimestampError(ToolError):
    """Raised when a timestamp tool input cannot be converted."""
    kind = 'TimestampError'

class InvalidDateFormat(TimestampError):
    """Raised when a local date-time string cannot be parsed."""
    kind = 'InvalidDateFormat'

class InvalidTimestamp(TimestampError):
    """Raised when a seconds timestamp cannot be parsed."""
    kind = 'InvalidTimestamp'

class InvalidMillisecondTimestamp(TimestampError):
    """Raised when a milliseconds timestamp cannot be parsed."""
    kind = 'InvalidMillisecondTimestamp'

class JsonToolError(ToolError):
    """Raised when JSON input is invalid."""
    pass

class Base64ToolError(ToolError):
    """Raised when Base64 encoding or decoding fails."""
    pass

class SqlToolError(ToolError):
    """Raised when SQL input cannot be processed."""
    pass

class HtmlToolError(ToolError):
    """Raised when HTML input cannot be processed."""
    pass

class DiffToolError(ToolError):
    """Raised when diff inputs cannot be prepared for comparison."""
    pass
