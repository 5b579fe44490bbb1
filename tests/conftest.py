"""Shared fixtures: fake transport / logo fetcher and a wired test application."""

from __future__ import annotations

from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from repo_stats.infrastructure.pygments_counter import PygmentsLineCounter
from repo_stats.interface.app import create_app
from repo_stats.interface.dependencies import get_use_case
from repo_stats.services.badge_renderer import BadgeRenderer
from repo_stats.services.render_badge import RenderBadgeUseCase
from repo_stats.services.repository_resolver import RepositoryResolver
from repo_stats.services.stats_cache import StatisticsCache
from repo_stats.services.stats_provider import StatisticsProvider

from fakes import FakeLogoFetcher, FakeTransport


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture(scope="session")
def line_counter() -> PygmentsLineCounter:
    return PygmentsLineCounter()


@pytest.fixture
def scratch_root(tmp_path: Path) -> Path:
    root = tmp_path / "scratch"
    root.mkdir()
    return root


@pytest.fixture
def stats_cache() -> StatisticsCache:
    return StatisticsCache(capacity=1000, ttl=24 * 60 * 60)


@pytest.fixture
def provider(
    transport: FakeTransport,
    line_counter: PygmentsLineCounter,
    stats_cache: StatisticsCache,
    scratch_root: Path,
) -> StatisticsProvider:
    return StatisticsProvider(
        transport=transport,
        counter=line_counter,
        cache=stats_cache,
        scratch_root=scratch_root,
    )


@pytest.fixture
def logo_fetcher() -> FakeLogoFetcher:
    return FakeLogoFetcher()


@pytest.fixture
def app(transport, line_counter, stats_cache, scratch_root, logo_fetcher):
    """Application whose use case is wired to the fakes and a fresh cache."""
    application = create_app()

    def _use_case() -> RenderBadgeUseCase:
        provider = StatisticsProvider(
            transport=transport,
            counter=line_counter,
            cache=stats_cache,
            scratch_root=scratch_root,
        )
        return RenderBadgeUseCase(
            resolver=RepositoryResolver(transport),
            provider=provider,
            renderer=BadgeRenderer(logo_fetcher),
        )

    application.dependency_overrides[get_use_case] = _use_case
    return application


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as ac:
        yield ac
