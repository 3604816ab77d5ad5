"""Exceptions raised by URL stores and the service layer."""

from typing import Optional


class URLShortenerError(Exception):
    """Base exception for URL shortener errors."""
    pass


class NotFoundError(URLShortenerError):
    """Raised when a short code does not exist in the store."""

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"Short code '{short_code}' not found")


class CodeSpaceExhaustedError(URLShortenerError):
    """Raised when no free short code was found within the retry bound.

    Seeing this in production means the code length or alphabet is too
    small for the number of stored URLs.
    """

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Unable to generate a unique short code after {attempts} attempts")


class InfrastructureError(URLShortenerError):
    """Raised when the storage backend fails (connection, timeout, I/O)."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(f"Storage error: {message}")


class InvalidURLError(URLShortenerError, ValueError):
    """Raised when the URL to shorten is empty or malformed."""

    def __init__(self, url: str, reason: str = "Invalid URL"):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url!r}")
