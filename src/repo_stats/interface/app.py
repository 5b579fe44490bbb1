"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from repo_stats.infrastructure.config import Settings, get_settings
from repo_stats.interface.dependencies import shutdown, startup
from repo_stats.interface.error_handlers import register_error_handlers
from repo_stats.interface.routes import router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the badge service; *settings* defaults to the environment."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await startup(app, settings)
        logger.info(
            "Badge service ready (cache %d entries / %ds, scratch %s)",
            settings.stats_cache_capacity,
            settings.stats_cache_ttl_seconds,
            settings.scratch_root,
        )
        try:
            yield
        finally:
            await shutdown(app)

    app = FastAPI(
        title="Repository Code Statistics Badges",
        version="1.0.0",
        summary="Lines-of-code badges for public git repositories.",
        lifespan=lifespan,
    )
    register_error_handlers(app)
    app.include_router(router)
    return app
