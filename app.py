#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: the server handles many connections at once via async I/O
(FastAPI + asyncpg pool or redis.asyncio) in a single process. To scale out,
run several instances behind a load balancer with a shared store (PostgreSQL
or Redis); a memory store lives inside one process.

Usage:
    python app.py [--config PATH]

Environment variables:
    DSN - 'memory', postgres://... or redis://...
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    SHORT_CODE_STRATEGY - random or hash
    LOG_LEVEL - Logging level
    BUILD_COMMIT, BUILD_TIME - Build information logged at startup
"""

import argparse
import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortener.store import create_store
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the store on startup and close it on shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting URL shortener service...")

    generator = ShortCodeGenerator(
        default_length=config.short_code_length,
        strategy=config.short_code_strategy,
    )
    store = create_store(
        config.dsn,
        generator=generator,
        max_attempts=config.max_create_attempts,
        logger=logger,
        pool_max_size=config.db_pool_max_size,
        connection_timeout_seconds=config.db_timeout_seconds,
        create_tables=config.db_create_tables,
        redis_key_prefix=config.redis_key_prefix,
    )
    logger.info(f"Using {store.backend_name} store")

    service = URLShortenerService(
        store=store,
        logger=logger,
        validate_urls=config.validate_urls,
    )

    app.state.store = store
    app.state.service = service

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down URL shortener service...")
    await service.close()
    logger.info("Service stopped")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="URL shortener service")
    parser.add_argument("--config", default=None, help="Path to env file with configuration")
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except ValueError as e:
        print(f"error parsing config: {e}", file=sys.stderr)
        sys.exit(1)

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info(f"Build Commit: {config.build_commit}")
    logger.info(f"Build Time: {config.build_time}")
    # DSN may carry credentials
    logger.info(f"Configuration: {config.model_dump(exclude={'dsn'})}")

    app = create_app(
        store_instance=None,  # Set in lifespan
        service_instance=None,
        config=config,
    )
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,  # LoggingMiddleware logs every request
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except OSError as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
