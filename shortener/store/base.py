"""Abstract base class for URL store implementations."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..common.validators import MAX_SHORT_CODE_LENGTH, is_reserved_code
from ..exceptions import CodeSpaceExhaustedError, InvalidURLError
from ..models import ShortURLRecord
from ..shortcode import ShortCodeGenerator


DEFAULT_MAX_ATTEMPTS = 5


class URLStore(ABC):
    """Abstract base class for short URL storage.

    Subclasses provide the storage primitives (``_insert``, ``resolve``,
    ``stats``, ``get_record``); the collision retry loop of ``create`` is
    shared by every backend.

    Every operation either returns a result or raises exactly one of
    NotFoundError, CodeSpaceExhaustedError or InfrastructureError.
    """

    backend_name = "base"

    def __init__(
        self,
        generator: Optional[ShortCodeGenerator] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize store.

        Args:
            generator: Short code generator (7 character base62 if not specified)
            max_attempts: Number of candidate codes tried before giving up
            logger: Optional logger instance
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1 (given: {max_attempts})")

        self.generator = generator or ShortCodeGenerator()
        if self.generator.default_length > MAX_SHORT_CODE_LENGTH:
            raise ValueError(
                f"Code length must be at most {MAX_SHORT_CODE_LENGTH} (given: {self.generator.default_length})"
            )
        self.max_attempts = max_attempts
        self.logger = logger or logging.getLogger(__name__)

    async def create(self, original_url: str) -> str:
        """Store a new URL under a freshly generated short code.

        Args:
            original_url: The original long URL

        Returns:
            The assigned short code

        Raises:
            InvalidURLError: If original_url is empty
            CodeSpaceExhaustedError: If every candidate code was taken
            InfrastructureError: If the backend fails
        """
        if not isinstance(original_url, str) or not original_url.strip():
            raise InvalidURLError(original_url, "URL is required")

        for attempt in range(1, self.max_attempts + 1):
            code = self.generator.generate(original_url, attempt)
            record = ShortURLRecord(code=code, original_url=original_url)

            # Reserved route segments count as taken
            if not is_reserved_code(code) and await self._insert(record):
                self.logger.info(f"Created short URL: {record.code} -> {original_url}")
                return record.code

            self.logger.warning(
                f"Short code collision on {record.code} "
                f"(attempt {attempt}/{self.max_attempts})"
            )

        self.logger.error(f"Code space exhausted after {self.max_attempts} attempts")
        raise CodeSpaceExhaustedError(self.max_attempts)

    @abstractmethod
    async def _insert(self, record: ShortURLRecord) -> bool:
        """Atomically insert a record if its code is free.

        Of two concurrent inserts with the same code exactly one returns True.

        Args:
            record: The record to insert

        Returns:
            True if inserted, False if the code already exists
        """
        pass

    @abstractmethod
    async def resolve(self, short_code: str) -> str:
        """Return the original URL and count the hit.

        The lookup and the increment happen as one atomic operation.

        Args:
            short_code: The short code to lookup

        Returns:
            The original URL

        Raises:
            NotFoundError: If the short code does not exist
        """
        pass

    @abstractmethod
    async def stats(self, short_code: str) -> int:
        """Return the current hit count of a short code.

        Raises:
            NotFoundError: If the short code does not exist
        """
        pass

    @abstractmethod
    async def get_record(self, short_code: str) -> ShortURLRecord:
        """Return the full record without counting a hit.

        Raises:
            NotFoundError: If the short code does not exist
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the backend is reachable.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release backend connections."""
        pass
