"""FastAPI dependency injection wiring."""

from __future__ import annotations

import httpx
from fastapi import FastAPI, Request

from repo_stats.infrastructure.config import Settings, get_settings
from repo_stats.infrastructure.git_cli_adapter import GitCliTransport
from repo_stats.infrastructure.logo_fetcher import HttpxLogoFetcher
from repo_stats.infrastructure.pygments_counter import PygmentsLineCounter
from repo_stats.services.badge_renderer import BadgeRenderer
from repo_stats.services.render_badge import RenderBadgeUseCase
from repo_stats.services.repository_resolver import RepositoryResolver
from repo_stats.services.stats_cache import StatisticsCache
from repo_stats.services.stats_provider import StatisticsProvider


async def startup(app: FastAPI, settings: Settings | None = None) -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    settings = settings or get_settings()

    app.state.http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.logo_timeout_seconds))
    app.state.stats_cache = StatisticsCache(
        capacity=settings.stats_cache_capacity,
        ttl=settings.stats_cache_ttl_seconds,
    )
    app.state.transport = GitCliTransport(
        executable=settings.git_executable,
        timeout=settings.git_timeout_seconds,
    )
    app.state.line_counter = PygmentsLineCounter()


async def shutdown(app: FastAPI) -> None:
    """Release shared resources."""
    client: httpx.AsyncClient | None = getattr(app.state, "http_client", None)
    if client is not None:
        await client.aclose()
        app.state.http_client = None


def get_use_case(request: Request) -> RenderBadgeUseCase:
    """Build the use case around the application's shared resources."""
    state = request.app.state
    settings = get_settings()

    assert getattr(state, "stats_cache", None) is not None, "startup() was not called"

    provider = StatisticsProvider(
        transport=state.transport,
        counter=state.line_counter,
        cache=state.stats_cache,
        scratch_root=settings.scratch_root,
        scratch_prefix=settings.scratch_prefix,
        stale_after=settings.scratch_stale_seconds,
    )
    return RenderBadgeUseCase(
        resolver=RepositoryResolver(state.transport),
        provider=provider,
        renderer=BadgeRenderer(HttpxLogoFetcher(state.http_client, max_bytes=settings.logo_max_bytes)),
    )
