"""
Larder exceptions.
Each exception covers one failure mode of the cookie pipeline.
"""


class LarderException(Exception):
    """Base exception for all Larder errors."""

    def __init__(self, message: str = "An error occurred") -> None:
        self.message = message
        super().__init__(self.message)


class CookieError(LarderException):
    """Cookie-related errors."""
    pass


class ConfigurationError(CookieError):
    """Invalid construction-time parameters (prefix, lifetime, attributes)."""
    pass


class InvalidArgumentError(CookieError, ValueError):
    """A textual lifetime that cannot be parsed into a timestamp."""
    pass


class EncodingError(CookieError):
    """A cookie value that cannot be serialized to JSON."""
    pass


class DecodingError(CookieError):
    """A cookie value that cannot be decrypted or parsed from JSON."""
    pass


class NotInitializedError(LarderException, RuntimeError):
    """The process-wide cookie jar was requested before one was created."""

    def __init__(self, message: str = "No CookieJar instance is available") -> None:
        super().__init__(message)
