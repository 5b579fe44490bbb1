"""Port: line counter — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from pathlib import Path
from typing import AbstractSet, Protocol

from repo_stats.domain.entities import LanguageStats


class LineCounter(Protocol):
    """Abstract contract for classifying and counting lines in a source tree."""

    def known_languages(self) -> AbstractSet[str]:
        """Return every language name accepted by :meth:`count`'s filter."""
        ...

    def count(self, root: Path, languages: AbstractSet[str] | None = None) -> LanguageStats:
        """Count lines under *root*, restricted to *languages* when given."""
        ...
