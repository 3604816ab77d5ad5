"""URL building utilities for URL shortener."""


def _join(base_url: str, path_prefix: str, *parts: str) -> str:
    segments = [base_url.rstrip("/")]
    prefix = path_prefix.strip("/")
    if prefix:
        segments.append(prefix)
    segments.extend(parts)
    return "/".join(segments)


def build_short_url(short_code: str, base_url: str, path_prefix: str = "") -> str:
    """Build the public redirect URL of a short code.

    Args:
        short_code: The short code
        base_url: Base URL (e.g., https://example.com)
        path_prefix: Optional path prefix (e.g., /s)

    Returns:
        Complete short URL
    """
    return _join(base_url, path_prefix, short_code)


def build_stats_url(short_code: str, base_url: str, path_prefix: str = "") -> str:
    """Build the public statistics URL of a short code."""
    return _join(base_url, path_prefix, "stats", short_code)
