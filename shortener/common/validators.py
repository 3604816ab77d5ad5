"""Validation utilities for URL shortener."""

import re
from urllib.parse import urlparse
from typing import Tuple


MAX_URL_LENGTH = 2048

# Upper bound for generated codes and for path segments accepted as codes
MAX_SHORT_CODE_LENGTH = 32

SHORT_CODE_PATTERN = re.compile(r'^[a-zA-Z0-9_-]+$')

# First path segments of fixed routes (/api/..., /stats/...); never issued as codes
RESERVED_CODES = {"api", "stats"}


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL to be shortened.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str) or not url.strip():
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    try:
        result = urlparse(url)
    except ValueError as e:
        return False, f"Invalid URL format: {e}"

    if result.scheme not in ("http", "https"):
        return False, "URL must use http or https protocol"

    if not result.netloc:
        return False, "URL must have a valid domain"

    return True, ""


def is_reserved_code(short_code: str) -> bool:
    """Whether a code collides with a fixed route segment (case-sensitive, as routing is)."""
    return short_code in RESERVED_CODES


def is_valid_short_code(short_code: str, max_length: int = MAX_SHORT_CODE_LENGTH) -> Tuple[bool, str]:
    """Check that a path segment can be a short code.

    Anything failing this check cannot exist in a store, so handlers answer
    404 without a store round trip.

    Args:
        short_code: The short code to validate
        max_length: Maximum length for short code

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"

    if len(short_code) > max_length:
        return False, f"Short code must be at most {max_length} characters"

    if not SHORT_CODE_PATTERN.match(short_code):
        return False, "Short code can only contain letters, numbers, hyphens, and underscores"

    if is_reserved_code(short_code):
        return False, f"'{short_code}' is a reserved word"

    return True, ""
