"""Tests for clone-and-count behind the cache, including scratch handling."""

from __future__ import annotations

import os
import time
from pathlib import Path

import pytest

from repo_stats.domain.entities import BadgeSettings, Category, ResolvedCommit
from repo_stats.domain.exceptions import (
    ComputationError,
    ResourceExhaustionError,
    SettingsValidationError,
)
from repo_stats.services.stats_cache import StatisticsCache
from repo_stats.services.stats_provider import StatisticsProvider

from fakes import DEV_SHA, HEAD_SHA, SAMPLE_RS, FakeTransport

COMMIT = ResolvedCommit(url="https://github.com/octocat/hello", commit_id=HEAD_SHA)


@pytest.mark.asyncio
async def test_counts_cloned_tree(provider, transport) -> None:
    stats = await provider.get_statistics(COMMIT, BadgeSettings())

    assert (stats.blanks, stats.code, stats.comments) == (4, 3, 2)
    assert stats.files == 1
    assert [r.name for r in stats.reports] == ["src/main.py"]
    assert [lang.name for lang in stats.languages] == ["Python"]
    assert transport.clones[0][:2] == (COMMIT.url, None)


@pytest.mark.asyncio
async def test_second_call_is_served_from_cache(provider, transport) -> None:
    await provider.get_statistics(COMMIT, BadgeSettings())
    await provider.get_statistics(COMMIT, BadgeSettings(category=Category.LINES))

    assert len(transport.clones) == 1


@pytest.mark.asyncio
async def test_new_commit_is_recomputed(provider, transport) -> None:
    await provider.get_statistics(COMMIT, BadgeSettings())
    await provider.get_statistics(
        ResolvedCommit(url=COMMIT.url, commit_id=DEV_SHA, branch="dev"), BadgeSettings()
    )

    assert len(transport.clones) == 2
    assert transport.clones[1][1] == "dev"


@pytest.mark.asyncio
async def test_language_filter_is_part_of_the_key(line_counter, scratch_root) -> None:
    transport = FakeTransport(files={"src/main.py": "x = 1\n", "src/main.rs": SAMPLE_RS})
    provider = StatisticsProvider(transport, line_counter, StatisticsCache(), scratch_root=scratch_root)

    everything = await provider.get_statistics(COMMIT, BadgeSettings())
    rust_only = await provider.get_statistics(COMMIT, BadgeSettings(languages=frozenset({"Rust"})))

    assert len(transport.clones) == 2
    assert everything.code == 4
    assert rust_only.code == 3
    assert [r.name for r in rust_only.reports] == ["src/main.rs"]


@pytest.mark.asyncio
async def test_scratch_directory_is_removed(provider, scratch_root: Path) -> None:
    await provider.get_statistics(COMMIT, BadgeSettings())
    assert list(scratch_root.iterdir()) == []


@pytest.mark.asyncio
async def test_stale_scratch_is_swept(provider, scratch_root: Path) -> None:
    stale = scratch_root / "repo-stats-leftover"
    stale.mkdir()
    old = time.time() - 3600
    os.utime(stale, (old, old))
    fresh = scratch_root / "repo-stats-inflight"
    fresh.mkdir()
    unrelated = scratch_root / "someone-else"
    unrelated.mkdir()
    os.utime(unrelated, (old, old))

    await provider.get_statistics(COMMIT, BadgeSettings())

    assert not stale.exists()
    assert fresh.exists()
    assert unrelated.exists()


@pytest.mark.asyncio
async def test_missing_scratch_root_is_resource_exhaustion(transport, line_counter, tmp_path) -> None:
    provider = StatisticsProvider(
        transport, line_counter, StatisticsCache(), scratch_root=tmp_path / "does-not-exist"
    )
    with pytest.raises(ResourceExhaustionError):
        await provider.get_statistics(COMMIT, BadgeSettings())
    assert transport.clones == []


@pytest.mark.asyncio
async def test_clone_failure_is_not_cached(line_counter, scratch_root) -> None:
    transport = FakeTransport(clone_error=ComputationError("Error cloning repo: boom"))
    cache = StatisticsCache()
    provider = StatisticsProvider(transport, line_counter, cache, scratch_root=scratch_root)

    with pytest.raises(ComputationError, match="boom"):
        await provider.get_statistics(COMMIT, BadgeSettings())

    assert len(cache) == 0
    assert list(scratch_root.iterdir()) == []


class TestValidateLanguages:
    def test_no_filter(self, provider) -> None:
        provider.validate_languages(None)
        provider.validate_languages(frozenset())

    def test_known_names(self, provider) -> None:
        provider.validate_languages(frozenset({"Python", "Rust"}))

    def test_names_are_case_sensitive(self, provider) -> None:
        with pytest.raises(SettingsValidationError) as exc_info:
            provider.validate_languages(frozenset({"python", "Rust", "Klingon"}))
        message = str(exc_info.value)
        assert message.startswith("Invalid language type(s): Klingon, python.")
        assert "case-sensitive" in message
