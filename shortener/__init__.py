"""Core logic for URL shortener: code generation, stores and service."""

from .shortcode import ShortCodeGenerator
from .service import URLShortenerService
from .models import ShortURLRecord
from .exceptions import (
    URLShortenerError,
    NotFoundError,
    CodeSpaceExhaustedError,
    InfrastructureError,
    InvalidURLError,
)

__all__ = [
    "ShortCodeGenerator",
    "URLShortenerService",
    "ShortURLRecord",
    "URLShortenerError",
    "NotFoundError",
    "CodeSpaceExhaustedError",
    "InfrastructureError",
    "InvalidURLError",
]
