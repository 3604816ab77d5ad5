"""Storage layer for URL shortener."""

import logging
from typing import Optional

from .base import URLStore, DEFAULT_MAX_ATTEMPTS
from .memory import MemoryURLStore
from ..shortcode import ShortCodeGenerator

__all__ = ["URLStore", "MemoryURLStore", "create_store", "DEFAULT_MAX_ATTEMPTS"]


POSTGRES_SCHEMES = ("postgres://", "postgresql://")
REDIS_SCHEMES = ("redis://", "rediss://", "unix://")


def create_store(
    dsn: str,
    generator: Optional[ShortCodeGenerator] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    logger: Optional[logging.Logger] = None,
    pool_max_size: int = 10,
    connection_timeout_seconds: int = 30,
    create_tables: bool = True,
    redis_key_prefix: str = "shortener",
) -> URLStore:
    """Build the store selected by a DSN.

    Args:
        dsn: "memory", a postgres:// URL or a redis:// URL
        generator: Short code generator shared by the store
        max_attempts: Number of candidate codes tried per create
        logger: Optional logger instance
        pool_max_size: PostgreSQL connection pool size
        connection_timeout_seconds: PostgreSQL/Redis timeout in seconds
        create_tables: Create the PostgreSQL table on first connect
        redis_key_prefix: Namespace for Redis keys

    Returns:
        The configured store

    Raises:
        ValueError: If the DSN does not name a known backend
    """
    dsn = (dsn or "").strip()

    if dsn == "memory":
        return MemoryURLStore(generator=generator, max_attempts=max_attempts, logger=logger)

    if dsn.startswith(POSTGRES_SCHEMES):
        from .postgres import PostgresURLStore

        return PostgresURLStore(
            dsn,
            generator=generator,
            max_attempts=max_attempts,
            pool_max_size=pool_max_size,
            connection_timeout_seconds=connection_timeout_seconds,
            create_tables=create_tables,
            logger=logger,
        )

    if dsn.startswith(REDIS_SCHEMES):
        from .redis_store import RedisURLStore

        return RedisURLStore(
            dsn,
            generator=generator,
            max_attempts=max_attempts,
            key_prefix=redis_key_prefix,
            connection_timeout_seconds=connection_timeout_seconds,
            logger=logger,
        )

    raise ValueError(f'unknown store value in config: "{dsn}"')
