"""Business logic service for URL shortener."""

import logging
from typing import Optional, Dict, Any

from .store.base import URLStore
from .exceptions import InvalidURLError, NotFoundError
from .common.validators import is_valid_url


class URLShortenerService:
    """Service layer between the HTTP handlers and the URL store.

    The store is injected once at startup; every store error is logged and
    re-raised unchanged.
    """

    def __init__(
        self,
        store: URLStore,
        logger: Optional[logging.Logger] = None,
        validate_urls: bool = True,
    ):
        """Initialize URL shortener service.

        Args:
            store: URL store instance
            logger: Optional logger
            validate_urls: Require http(s) URLs with a host before storing
        """
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self.validate_urls = validate_urls

    async def create_short_url(self, original_url: str) -> Dict[str, Any]:
        """Create a new short URL.

        Args:
            original_url: The original long URL

        Returns:
            Dictionary with short_code and original_url

        Raises:
            InvalidURLError: If validation fails
            CodeSpaceExhaustedError: If no free code was found
            InfrastructureError: If the store fails
        """
        if self.validate_urls:
            is_valid, error = is_valid_url(original_url)
            if not is_valid:
                raise InvalidURLError(original_url, error)

        short_code = await self.store.create(original_url)

        return {
            "short_code": short_code,
            "original_url": original_url,
        }

    async def get_original_url(self, short_code: str) -> str:
        """Get the original URL for a redirect and count the hit.

        Raises:
            NotFoundError: If the short code does not exist
        """
        try:
            return await self.store.resolve(short_code)
        except NotFoundError:
            self.logger.warning(f"Short code not found: {short_code}")
            raise

    async def get_stats(self, short_code: str) -> int:
        """Get the number of redirects for a short code.

        Raises:
            NotFoundError: If the short code does not exist
        """
        return await self.store.stats(short_code)

    async def get_url_info(self, short_code: str) -> Dict[str, Any]:
        """Get complete information about a short URL.

        Raises:
            NotFoundError: If the short code does not exist
        """
        record = await self.store.get_record(short_code)
        self.logger.debug(f"Retrieved URL info for {short_code}")
        return record.to_dict()

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.store.health_check()

        return {
            "database": db_healthy,
            "overall": db_healthy,
        }

    async def close(self) -> None:
        """Close service connections."""
        await self.store.close()
