"""Tests for process configuration and startup wiring."""

from __future__ import annotations

import pytest
from fastapi import FastAPI

from repo_stats.infrastructure.config import Settings
from repo_stats.infrastructure.git_cli_adapter import GitCliTransport
from repo_stats.interface.dependencies import shutdown, startup


def test_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.stats_cache_capacity == 1000
    assert settings.stats_cache_ttl_seconds == 86400
    assert settings.scratch_prefix == "repo-stats-"


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("REPO_STATS_STATS_CACHE_CAPACITY", "5")
    monkeypatch.setenv("REPO_STATS_SCRATCH_ROOT", "/var/tmp/badges")
    settings = Settings(_env_file=None)
    assert settings.stats_cache_capacity == 5
    assert settings.scratch_root == "/var/tmp/badges"


@pytest.mark.asyncio
async def test_startup_and_shutdown_manage_shared_state(tmp_path) -> None:
    app = FastAPI()
    await startup(app, Settings(_env_file=None, stats_cache_capacity=3, scratch_root=str(tmp_path)))

    assert isinstance(app.state.transport, GitCliTransport)
    assert len(app.state.stats_cache) == 0
    assert "Python" in app.state.line_counter.known_languages()
    client = app.state.http_client

    await shutdown(app)
    assert client.is_closed
    assert app.state.http_client is None
