"""Statistics provider — clone-and-count behind the statistics cache."""

from __future__ import annotations

import asyncio
import logging
import shutil
import tempfile
import time
from pathlib import Path
from typing import AbstractSet

from repo_stats.domain.entities import BadgeSettings, LanguageStats, ResolvedCommit
from repo_stats.domain.exceptions import (
    ComputationError,
    RepoStatsError,
    ResourceExhaustionError,
    SettingsValidationError,
)
from repo_stats.domain.ports.line_counter import LineCounter
from repo_stats.domain.ports.vcs_transport import VcsTransport
from repo_stats.services.stats_cache import StatisticsCache, fingerprint

logger = logging.getLogger(__name__)


class StatisticsProvider:
    """Returns line counts for a resolved commit, computing them at most once.

    Parameters
    ----------
    transport:
        Performs the shallow clone.
    counter:
        Counts lines in the cloned tree.
    cache:
        Memoization table shared by every request of this process.
    scratch_root:
        Directory under which per-computation scratch directories are made.
    scratch_prefix:
        Name prefix identifying scratch directories owned by this service.
    stale_after:
        Age in seconds after which a leftover scratch directory is swept.
    """

    def __init__(
        self,
        transport: VcsTransport,
        counter: LineCounter,
        cache: StatisticsCache,
        scratch_root: str | Path | None = None,
        scratch_prefix: str = "repo-stats-",
        stale_after: float = 60.0,
    ) -> None:
        self._transport = transport
        self._counter = counter
        self._cache = cache
        self._scratch_root = Path(scratch_root or tempfile.gettempdir())
        self._scratch_prefix = scratch_prefix
        self._stale_after = stale_after

    # ── Public entry points ─────────────────────────────────────────────

    def validate_languages(self, languages: AbstractSet[str] | None) -> None:
        """Reject unknown language names before any network or disk work."""
        if not languages:
            return
        unknown = sorted(set(languages) - set(self._counter.known_languages()))
        if unknown:
            raise SettingsValidationError(
                f"Invalid language type(s): {', '.join(unknown)}. Language names are "
                "case-sensitive and capitalized, e.g. 'Python' or 'Rust'."
            )

    async def get_statistics(self, commit: ResolvedCommit, settings: BadgeSettings) -> LanguageStats:
        """Cached statistics for *commit*; computes them on a miss."""
        key = fingerprint(commit, settings.languages)
        return await self._cache.get_or_compute(
            key,
            lambda: asyncio.to_thread(self._compute, commit, settings.languages),
        )

    # ── Clone and count (blocking) ──────────────────────────────────────

    def _compute(self, commit: ResolvedCommit, languages: AbstractSet[str] | None) -> LanguageStats:
        self._sweep_stale_scratch()
        scratch = self._allocate_scratch()
        try:
            self._transport.shallow_clone(commit.url, commit.branch, scratch)
            try:
                stats = self._counter.count(scratch, languages)
            except RepoStatsError:
                raise
            except Exception as exc:
                raise ComputationError(f"Error counting lines: {exc}") from exc
        finally:
            shutil.rmtree(scratch, ignore_errors=True)

        logger.info(
            "Counted %s@%s: %d code, %d comments, %d blanks in %d files",
            commit.url,
            commit.commit_id[:12],
            stats.code,
            stats.comments,
            stats.blanks,
            stats.files,
        )
        return stats.relative_to(str(scratch))

    def _allocate_scratch(self) -> Path:
        try:
            return Path(tempfile.mkdtemp(prefix=self._scratch_prefix, dir=self._scratch_root))
        except OSError as exc:
            raise ResourceExhaustionError(
                f"Unable to create a scratch directory under {self._scratch_root}: {exc}"
            ) from exc

    def _sweep_stale_scratch(self) -> None:
        """Best-effort removal of scratch directories left by earlier computations."""
        cutoff = time.time() - self._stale_after
        try:
            candidates = list(self._scratch_root.glob(f"{self._scratch_prefix}*"))
        except OSError:
            logger.debug("Could not list %s for sweeping", self._scratch_root, exc_info=True)
            return

        for path in candidates:
            try:
                if path.is_dir() and path.stat().st_mtime < cutoff:
                    logger.info("Removing stale scratch directory %s", path)
                    shutil.rmtree(path, ignore_errors=True)
            except OSError:
                logger.debug("Could not inspect %s", path, exc_info=True)
