"""Forwarded headers middleware."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable


class ForwardedHeadersMiddleware(BaseHTTPMiddleware):
    """Record the client address and public prefix seen by the proxy in request state."""

    async def dispatch(self, request: Request, call_next: Callable):
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            # First entry is the original client; the rest are proxies
            request.state.client_ip = forwarded_for.split(",")[0].strip()
        else:
            request.state.client_ip = request.client.host if request.client else "unknown"

        request.state.forwarded_prefix = request.headers.get("x-forwarded-prefix", "")

        return await call_next(request)
