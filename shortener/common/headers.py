"""Header parsing utilities for building public URLs behind a proxy."""

from typing import Mapping, Optional


def _lower_keys(headers: Mapping[str, str]) -> dict:
    return {k.lower(): v for k, v in headers.items()}


def build_base_url(
    headers: Mapping[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Build the public base URL of the service.

    Priority:
    1. X-Forwarded-Proto + X-Forwarded-Host
    2. Request scheme + host
    3. Fallback base URL from config

    Args:
        headers: Request headers
        fallback_base_url: Fallback base URL from configuration
        request_scheme: Request scheme (http/https)
        request_host: Request host

    Returns:
        Base URL without trailing slash (e.g., https://example.com)
    """
    headers_lower = _lower_keys(headers)
    forwarded_proto = headers_lower.get("x-forwarded-proto")
    forwarded_host = headers_lower.get("x-forwarded-host")

    if forwarded_proto and forwarded_host:
        return f"{forwarded_proto}://{forwarded_host}"

    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"

    return fallback_base_url.rstrip("/")


def get_forwarded_path_prefix(headers: Mapping[str, str]) -> str:
    """Get path prefix from X-Forwarded-Prefix (set by a proxy that strips it).

    Returns normalized prefix with leading slash, no trailing (e.g. '/s'), or '' if not set.
    """
    value = _lower_keys(headers).get("x-forwarded-prefix")
    if not value:
        return ""
    prefix = value.strip().strip("/")
    return "/" + prefix if prefix else ""
