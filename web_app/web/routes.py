"""Redirect route implementation."""

import logging

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import RedirectResponse

from shortener.common.validators import is_valid_short_code
from shortener.exceptions import InfrastructureError, NotFoundError

router = APIRouter()

logger = logging.getLogger("url_shortener.web")


@router.get(
    "/{short_code}",
    status_code=status.HTTP_303_SEE_OTHER,
    responses={
        303: {"description": "Redirect to the original URL"},
        404: {"description": "Short code not found"},
        500: {"description": "Internal server error"},
    },
    summary="Redirect to original URL by short URL",
    tags=["Short URL"],
)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL (counts one hit)."""
    service = request.app.state.service

    valid, _ = is_valid_short_code(short_code)
    if not valid:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Short code '{short_code}' not found")

    try:
        original_url = await service.get_original_url(short_code)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InfrastructureError as e:
        logger.error(f"Failed to resolve {short_code}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")

    client_ip = getattr(request.state, "client_ip", "unknown")
    logger.debug(f"Redirecting {client_ip} from {short_code} to {original_url}")

    return RedirectResponse(url=original_url, status_code=status.HTTP_303_SEE_OTHER)
