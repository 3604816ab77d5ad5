"""API routes implementation."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request, HTTPException, status

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    StatsResponse,
    HealthResponse,
    ErrorResponse,
)
from shortener.common.url_builder import build_short_url, build_stats_url
from shortener.common.headers import build_base_url, get_forwarded_path_prefix
from shortener.common.validators import is_valid_short_code
from shortener.exceptions import (
    CodeSpaceExhaustedError,
    InfrastructureError,
    InvalidURLError,
    NotFoundError,
)

router = APIRouter()

logger = logging.getLogger("url_shortener.web")

INTERNAL_ERROR = "Internal server error"


def public_base(request: Request) -> tuple:
    """Base URL and path prefix the client sees (proxy headers first, then config)."""
    config = request.app.state.config
    headers = dict(request.headers)

    base_url = build_base_url(
        headers=headers,
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    path_prefix = get_forwarded_path_prefix(headers) or config.path_prefix
    return base_url, path_prefix


@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL from original URL",
    tags=["Short URL"],
)
async def create_short_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    service = request.app.state.service

    try:
        result = await service.create_short_url(body.original_url)
    except InvalidURLError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except (CodeSpaceExhaustedError, InfrastructureError) as e:
        logger.error(f"Failed to create short URL: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR)

    base_url, path_prefix = public_base(request)
    short_code = result["short_code"]

    return ShortenResponse(
        short_url=build_short_url(short_code, base_url, path_prefix),
        stats_url=build_stats_url(short_code, base_url, path_prefix),
    )


@router.get(
    "/stats/{short_code}",
    response_model=StatsResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Get stats about redirects",
    tags=["Stats"],
)
async def get_stats(request: Request, short_code: str):
    """Get the redirect count of a short URL."""
    service = request.app.state.service

    valid, _ = is_valid_short_code(short_code)
    if not valid:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Short code '{short_code}' not found")

    try:
        num_redirects = await service.get_stats(short_code)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InfrastructureError as e:
        logger.error(f"Failed to read stats for {short_code}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR)

    base_url, path_prefix = public_base(request)

    return StatsResponse(
        short_url=build_short_url(short_code, base_url, path_prefix),
        num_redirects=num_redirects,
    )


@router.get(
    "/api/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service and its store are healthy.",
    tags=["Health"],
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
