"""Pytest configuration and fixtures."""

import logging
import os
import uuid
from typing import AsyncGenerator

import httpx
import pytest

from config import Config
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.store import create_store
from shortener.store.base import URLStore
from shortener.store.memory import MemoryURLStore
from shortener.common.logging_config import get_logger
from web_app import create_app


# Shared backends are only exercised when a server is provided
TEST_POSTGRES_DSN = os.getenv("TEST_POSTGRES_DSN")
TEST_REDIS_URL = os.getenv("TEST_REDIS_URL")


def _store_params():
    params = [pytest.param("memory", id="memory")]
    params.append(pytest.param(
        "postgres",
        id="postgres",
        marks=pytest.mark.skipif(not TEST_POSTGRES_DSN, reason="TEST_POSTGRES_DSN not set"),
    ))
    params.append(pytest.param(
        "redis",
        id="redis",
        marks=pytest.mark.skipif(not TEST_REDIS_URL, reason="TEST_REDIS_URL not set"),
    ))
    return params


@pytest.fixture
def logger():
    """Logger for components under test."""
    return get_logger("url_shortener.tests")


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=7)


@pytest.fixture
async def memory_store(short_code_generator, logger) -> AsyncGenerator[MemoryURLStore, None]:
    """Create in-memory store."""
    store = MemoryURLStore(generator=short_code_generator, logger=logger)
    yield store
    await store.close()


@pytest.fixture(params=_store_params())
async def store(request, short_code_generator, logger) -> AsyncGenerator[URLStore, None]:
    """Every configured backend, for the shared contract tests."""
    if request.param == "memory":
        store = create_store("memory", generator=short_code_generator, logger=logger)
    elif request.param == "postgres":
        store = create_store(TEST_POSTGRES_DSN, generator=short_code_generator, logger=logger)
    else:
        store = create_store(
            TEST_REDIS_URL,
            generator=short_code_generator,
            logger=logger,
            redis_key_prefix=f"shortener-test-{uuid.uuid4().hex}",
        )

    yield store

    await store.close()


@pytest.fixture
def service(memory_store, logger) -> URLShortenerService:
    """Create service instance over the memory store."""
    return URLShortenerService(store=memory_store, logger=logger)


@pytest.fixture
def config() -> Config:
    """Configuration for the web app."""
    return Config(dsn="memory", base_url="http://testserver")


@pytest.fixture
def app(memory_store, service, config):
    """Create test FastAPI app."""
    return create_app(
        store_instance=memory_store,
        service_instance=service,
        config=config,
    )


@pytest.fixture
async def client(app) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Create test client."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]


@pytest.fixture
def reset_logging():
    """Undo setup_logging so later tests see default loggers."""
    yield
    for name in ("url_shortener", "shortener", "web_app"):
        package_logger = logging.getLogger(name)
        for handler in package_logger.handlers:
            handler.close()
        package_logger.handlers.clear()
        package_logger.propagate = True
        package_logger.setLevel(logging.NOTSET)
