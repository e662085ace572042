"""FastAPI application factory and entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from fastapi import FastAPI

from lingvoblog import __version__
from lingvoblog.api.middleware import add_exception_handlers, add_middleware
from lingvoblog.api.routes import discovery, indexing, messages, pages, posts, system
from lingvoblog.config import Settings
from lingvoblog.db import Database
from lingvoblog.logging import configure_logging

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = structlog.get_logger()

FUNCTIONS_PREFIX = "/functions/v1"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialize DB and settings on startup, cleanup on shutdown."""
    settings = Settings()
    if not settings.database_url:
        settings.ensure_data_dir()

    configure_logging(
        log_level=settings.log_level,
        log_format=settings.log_format,
    )

    db = Database(settings.db_url)
    db.init_schema()

    app.state.db = db
    app.state.settings = settings

    logger.info("Blog API started", host=settings.api_host, port=settings.api_port)
    yield

    db.close()
    logger.info("Blog API shut down")


def include_routes(app: FastAPI) -> None:
    """Mount the edge functions, crawler documents, pages and system endpoints."""
    app.include_router(posts.router, prefix=FUNCTIONS_PREFIX)
    app.include_router(indexing.router, prefix=FUNCTIONS_PREFIX)
    app.include_router(discovery.router, prefix=FUNCTIONS_PREFIX)
    app.include_router(messages.router, prefix=FUNCTIONS_PREFIX)
    app.include_router(system.router, prefix="/api/v1")
    app.include_router(discovery.public_router)
    app.include_router(pages.router)


def create_app() -> FastAPI:
    """Application factory."""
    app = FastAPI(
        title="lingvoblog",
        description="Multilingual content marketing blog: edge functions and server-rendered head",
        version=__version__,
        lifespan=lifespan,
    )

    add_middleware(app)
    add_exception_handlers(app)

    # Prometheus metrics endpoint
    from prometheus_client import make_asgi_app

    app.mount("/metrics", make_asgi_app())

    include_routes(app)
    return app


def main() -> None:
    """Entry point for `lingvoblog-api` command."""
    import uvicorn

    settings = Settings()
    uvicorn.run(
        "lingvoblog.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
    )
