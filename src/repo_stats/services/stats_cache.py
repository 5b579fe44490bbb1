"""Statistics cache — bounded, time-limited memoization of line counts.

Entries expire after a fixed TTL and the table holds at most ``capacity``
entries (least-recently-used goes first).  Every cache miss in the process
runs under one lock, so at most one clone-and-count is in flight at any time,
even for unrelated keys.  Cache hits never wait on that lock.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import AbstractSet, Awaitable, Callable

from cachetools import TTLCache

from repo_stats.domain.entities import LanguageStats, ResolvedCommit

logger = logging.getLogger(__name__)

DAY_IN_SECONDS = 24 * 60 * 60


def fingerprint(commit: ResolvedCommit, languages: AbstractSet[str] | None = None) -> str:
    """Deterministic cache key for a commit and the language filter applied to it."""
    key = f"{commit.url}#{commit.commit_id}"
    if languages:
        key += "#" + ",".join(sorted(languages))
    return key


class StatisticsCache:
    """Process-local ``key → LanguageStats`` table with single-flight misses."""

    def __init__(
        self,
        capacity: int = 1000,
        ttl: float = DAY_IN_SECONDS,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._table: TTLCache[str, LanguageStats] = TTLCache(maxsize=capacity, ttl=ttl, timer=timer)
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._table)

    def get(self, key: str) -> LanguageStats | None:
        return self._table.get(key)

    async def get_or_compute(
        self,
        key: str,
        compute: Callable[[], Awaitable[LanguageStats]],
    ) -> LanguageStats:
        """Return the cached value for *key*, computing and storing it on a miss.

        Failed computations are not stored.  If the caller is cancelled while
        the computation runs, the lock stays held until it finishes.
        """
        cached = self._table.get(key)
        if cached is not None:
            logger.info("Serving from cache: %s", key)
            return cached

        async with self._lock:
            # Another request may have filled the entry while we waited.
            cached = self._table.get(key)
            if cached is not None:
                logger.info("Serving from cache: %s", key)
                return cached

            logger.info("Cache miss: %s", key)
            task = asyncio.ensure_future(compute())
            try:
                value = await asyncio.shield(task)
            except asyncio.CancelledError:
                # The blocking work cannot be interrupted; keep the lock until it ends.
                if not task.done():
                    logger.info("Caller for %s went away, finishing computation", key)
                    await asyncio.wait([task])
                if not task.cancelled() and task.exception() is None:
                    self._table[key] = task.result()
                raise
            self._table[key] = value
            return value
