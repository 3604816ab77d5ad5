"""Redis implementation of the URL store.

Each record is one hash at ``<prefix>:links:<code>`` with the fields ``url``,
``hits`` and ``created_at``. Inserts and resolves run as Lua scripts so the
existence check and the write happen atomically on the server.
"""

import functools
import logging
from datetime import datetime
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from .base import URLStore
from ..exceptions import InfrastructureError, NotFoundError
from ..models import ShortURLRecord
from ..shortcode import ShortCodeGenerator


# KEYS[1] = link key; ARGV[1] = original url, ARGV[2] = created_at (ISO 8601)
INSERT_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 1 then
    return 0
end
redis.call('HSET', KEYS[1], 'url', ARGV[1], 'hits', 0, 'created_at', ARGV[2])
return 1
"""

# KEYS[1] = link key
RESOLVE_SCRIPT = """
local url = redis.call('HGET', KEYS[1], 'url')
if not url then
    return false
end
redis.call('HINCRBY', KEYS[1], 'hits', 1)
return url
"""


def handle_redis_errors(method):
    """Wrap Redis-interacting store methods so client failures raise InfrastructureError."""

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        try:
            return await method(self, *args, **kwargs)
        except (RedisError, OSError) as e:
            self.logger.error(f"Redis error in {method.__name__}: {e}")
            raise InfrastructureError(f"Redis request failed: {type(e).__name__}", original_error=e) from e

    return wrapper


class RedisURLStore(URLStore):
    """Redis URL store, shareable by several service instances."""

    backend_name = "redis"

    def __init__(
        self,
        redis_url: str,
        generator: Optional[ShortCodeGenerator] = None,
        max_attempts: int = 5,
        key_prefix: str = "shortener",
        connection_timeout_seconds: int = 30,
        client: Optional[redis.Redis] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis store.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            generator: Short code generator
            max_attempts: Number of candidate codes tried per create
            key_prefix: Namespace for all keys written by this store
            connection_timeout_seconds: Socket connect and read timeout in seconds
            client: Pre-built client (used instead of redis_url when given)
            logger: Optional logger instance
        """
        super().__init__(generator=generator, max_attempts=max_attempts, logger=logger)

        self.redis_url = redis_url
        self.key_prefix = key_prefix.rstrip(":")
        self.client = client or redis.from_url(
            redis_url,
            encoding="utf-8",
            decode_responses=True,
            socket_timeout=connection_timeout_seconds,
            socket_connect_timeout=connection_timeout_seconds,
        )
        self._insert_script = self.client.register_script(INSERT_SCRIPT)
        self._resolve_script = self.client.register_script(RESOLVE_SCRIPT)

    def link_key(self, short_code: str) -> str:
        """Key of the hash holding one record."""
        return f"{self.key_prefix}:links:{short_code}"

    @handle_redis_errors
    async def _insert(self, record: ShortURLRecord) -> bool:
        inserted = await self._insert_script(
            keys=[self.link_key(record.code)],
            args=[record.original_url, record.created_at.isoformat()],
        )
        return int(inserted) == 1

    @handle_redis_errors
    async def resolve(self, short_code: str) -> str:
        original_url = await self._resolve_script(keys=[self.link_key(short_code)])

        if original_url is None:
            raise NotFoundError(short_code)

        self.logger.debug(f"Resolved {short_code} -> {original_url}")
        return original_url

    @handle_redis_errors
    async def stats(self, short_code: str) -> int:
        hits = await self.client.hget(self.link_key(short_code), "hits")

        if hits is None:
            raise NotFoundError(short_code)
        return int(hits)

    @handle_redis_errors
    async def get_record(self, short_code: str) -> ShortURLRecord:
        data = await self.client.hgetall(self.link_key(short_code))

        if not data:
            raise NotFoundError(short_code)
        return ShortURLRecord(
            code=short_code,
            original_url=data["url"],
            hit_count=int(data["hits"]),
            created_at=datetime.fromisoformat(data["created_at"]),
        )

    async def health_check(self) -> bool:
        try:
            await self.client.ping()
            return True
        except (RedisError, OSError) as e:
            self.logger.error(f"Health check failed: {e}")
            return False

    async def close(self) -> None:
        """Close Redis connection."""
        await self.client.aclose()
        self.logger.info("Redis connection closed")
