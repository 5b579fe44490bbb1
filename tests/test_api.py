"""End-to-end tests through the ASGI app with fake ports."""

from __future__ import annotations

import pytest

from repo_stats.interface import error_handlers
from repo_stats.interface.dependencies import get_use_case
from repo_stats.services.badge_renderer import BadgeRenderer
from repo_stats.services.render_badge import RenderBadgeUseCase
from repo_stats.services.repository_resolver import RepositoryResolver
from repo_stats.services.stats_cache import StatisticsCache
from repo_stats.services.stats_provider import StatisticsProvider

BADGE = "/tokei/github/octocat/hello"


@pytest.mark.asyncio
async def test_svg_badge(client, transport) -> None:
    resp = await client.get(BADGE)

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("image/svg+xml")
    assert resp.headers["cache-control"] == "s-maxage=60, stale-while-revalidate=300"
    assert "lines of code: 3" in resp.text
    assert transport.list_calls == ["https://github.com/octocat/hello"]


@pytest.mark.asyncio
async def test_cache_seconds_header(client) -> None:
    resp = await client.get(BADGE, params={"cacheSeconds": "120"})
    assert resp.headers["cache-control"] == "s-maxage=120, stale-while-revalidate=600"


@pytest.mark.asyncio
async def test_json_statistics(client) -> None:
    resp = await client.get(BADGE, params={"format": "json", "style": "social"})

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/json")
    body = resp.json()
    assert (body["code"], body["comments"], body["blanks"]) == (3, 2, 4)
    assert body["reports"][0]["name"] == "src/main.py"


@pytest.mark.asyncio
async def test_head_skips_the_pipeline(client, transport) -> None:
    resp = await client.head(BADGE, params={"category": "bogus"})

    assert resp.status_code == 200
    assert resp.content == b""
    assert transport.list_calls == []


@pytest.mark.asyncio
async def test_repeat_request_is_cached(client, transport) -> None:
    first = await client.get(BADGE)
    second = await client.get(BADGE, params={"category": "lines"})

    assert first.status_code == second.status_code == 200
    assert "total lines: 9" in second.text
    assert len(transport.list_calls) == 2
    assert len(transport.clones) == 1


@pytest.mark.asyncio
async def test_invalid_category(client, transport) -> None:
    resp = await client.get(BADGE, params={"category": "words"})

    assert resp.status_code == 400
    assert resp.text.startswith("Invalid category parameter. Choices are 'blanks'")
    assert transport.list_calls == []


@pytest.mark.asyncio
async def test_unknown_branch(client) -> None:
    resp = await client.get(BADGE, params={"branch": "missing"})

    assert resp.status_code == 400
    assert resp.text == "Branch 'missing' not found in https://github.com/octocat/hello"


@pytest.mark.asyncio
async def test_unknown_language_fails_before_any_git_work(client, transport) -> None:
    resp = await client.get(BADGE, params={"language": "python"})

    assert resp.status_code == 400
    assert "Invalid language type(s): python" in resp.text
    assert transport.list_calls == []
    assert transport.clones == []


@pytest.mark.asyncio
async def test_unexpected_error_is_opaque(client, transport) -> None:
    transport.list_error = RuntimeError("secret token in message")

    resp = await client.get(BADGE)

    assert resp.status_code == 500
    assert resp.text == "Internal Server Error"


@pytest.mark.asyncio
async def test_scratch_exhaustion_terminates(
    app, client, transport, line_counter, logo_fetcher, tmp_path, monkeypatch
) -> None:
    exits: list[int] = []
    monkeypatch.setattr(error_handlers.os, "_exit", exits.append)

    def _use_case() -> RenderBadgeUseCase:
        provider = StatisticsProvider(
            transport, line_counter, StatisticsCache(), scratch_root=tmp_path / "gone"
        )
        return RenderBadgeUseCase(RepositoryResolver(transport), provider, BadgeRenderer(logo_fetcher))

    app.dependency_overrides[get_use_case] = _use_case

    resp = await client.get(BADGE)

    assert exits == [error_handlers.EXIT_RESOURCE_EXHAUSTED]
    assert resp.status_code == 503


@pytest.mark.asyncio
async def test_health(client) -> None:
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


class _BrokenCounter:
    def __init__(self, inner) -> None:
        self._inner = inner

    def known_languages(self):
        return self._inner.known_languages()

    def count(self, root, languages=None):
        raise ValueError("unreadable tree")


@pytest.mark.asyncio
async def test_counting_failure_is_bad_request(
    app, client, transport, line_counter, logo_fetcher, scratch_root
) -> None:
    def _use_case() -> RenderBadgeUseCase:
        provider = StatisticsProvider(
            transport, _BrokenCounter(line_counter), StatisticsCache(), scratch_root=scratch_root
        )
        return RenderBadgeUseCase(RepositoryResolver(transport), provider, BadgeRenderer(logo_fetcher))

    app.dependency_overrides[get_use_case] = _use_case

    resp = await client.get(BADGE)

    assert resp.status_code == 400
    assert resp.text == "Error counting lines: unreadable tree"
    assert list(scratch_root.iterdir()) == []


@pytest.mark.asyncio
async def test_domain_is_decoded_once(client, transport) -> None:
    resp = await client.get("/tokei/gitlab%252Ecom/group/project")

    assert resp.status_code == 200
    assert transport.list_calls == ["https://gitlab%2Ecom.com/group/project"]
