"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import PurePath
from typing import Iterable

from repo_stats.domain.value_objects import Color


class Category(str, Enum):
    """Which statistic the badge displays."""

    BLANKS = "blanks"
    CODE = "code"
    COMMENTS = "comments"
    FILES = "files"
    LINES = "lines"

    @property
    def description(self) -> str:
        return CATEGORY_DESCRIPTIONS[self]


CATEGORY_DESCRIPTIONS: dict[Category, str] = {
    Category.BLANKS: "blank lines",
    Category.CODE: "lines of code",
    Category.COMMENTS: "comments",
    Category.FILES: "files",
    Category.LINES: "total lines",
}


class ContentType(str, Enum):
    """Output document format."""

    SVG = "svg"
    JSON = "json"

    @property
    def media_type(self) -> str:
        return CONTENT_MEDIA_TYPES[self]


CONTENT_MEDIA_TYPES: dict[ContentType, str] = {
    ContentType.SVG: "image/svg+xml",
    ContentType.JSON: "application/json",
}


class Style(str, Enum):
    """Visual badge style (shields.io naming)."""

    FLAT = "flat"
    FLAT_SQUARE = "flat-square"
    PLASTIC = "plastic"
    FOR_THE_BADGE = "for-the-badge"
    SOCIAL = "social"


@dataclass(frozen=True, slots=True)
class Theme:
    """Badge style plus its two colors."""

    style: Style = Style.FLAT
    label_color: Color = Color.named("grey")
    color: Color = Color.named("blue")


@dataclass(frozen=True, slots=True)
class BadgeSettings:
    """Request-scoped display settings, derived entirely from the query string."""

    category: Category = Category.CODE
    content_type: ContentType = ContentType.SVG
    theme: Theme = field(default_factory=Theme)
    label: str | None = None
    logo: str | None = None
    logo_as_label: bool = False
    cache_seconds: int = 60
    branch: str | None = None
    languages: frozenset[str] | None = None


@dataclass(frozen=True, slots=True)
class RemoteRef:
    """A single ref advertised by a remote, e.g. ``refs/heads/main``."""

    name: str
    commit_id: str


@dataclass(frozen=True, slots=True)
class ResolvedCommit:
    """A fetchable repository URL pinned to one commit."""

    url: str
    commit_id: str
    branch: str | None = None


@dataclass(frozen=True, slots=True)
class FileReport:
    """Line counts for a single file."""

    name: str
    language: str
    blanks: int = 0
    code: int = 0
    comments: int = 0

    @property
    def lines(self) -> int:
        return self.blanks + self.code + self.comments


@dataclass(frozen=True, slots=True)
class LanguageSummary:
    """Line counts for every file of one language."""

    name: str
    blanks: int = 0
    code: int = 0
    comments: int = 0
    files: int = 0


@dataclass(frozen=True, slots=True)
class LanguageStats:
    """Aggregate line counts for a scanned tree."""

    blanks: int = 0
    code: int = 0
    comments: int = 0
    languages: tuple[LanguageSummary, ...] = ()
    reports: tuple[FileReport, ...] = ()

    @property
    def lines(self) -> int:
        return self.blanks + self.code + self.comments

    @property
    def files(self) -> int:
        return len(self.reports)

    @classmethod
    def from_reports(cls, reports: Iterable[FileReport]) -> LanguageStats:
        """Aggregate per-file reports into totals and a per-language breakdown."""
        ordered = tuple(sorted(reports, key=lambda r: r.name))
        by_language: dict[str, list[FileReport]] = defaultdict(list)
        for report in ordered:
            by_language[report.language].append(report)

        summaries = tuple(
            LanguageSummary(
                name=name,
                blanks=sum(r.blanks for r in group),
                code=sum(r.code for r in group),
                comments=sum(r.comments for r in group),
                files=len(group),
            )
            for name, group in sorted(by_language.items())
        )
        return cls(
            blanks=sum(r.blanks for r in ordered),
            code=sum(r.code for r in ordered),
            comments=sum(r.comments for r in ordered),
            languages=summaries,
            reports=ordered,
        )

    def relative_to(self, root: str) -> LanguageStats:
        """Return a copy whose report paths no longer carry the *root* prefix."""
        return replace(
            self,
            reports=tuple(replace(r, name=_strip_root(r.name, root)) for r in self.reports),
        )


def _strip_root(name: str, root: str) -> str:
    try:
        return PurePath(name).relative_to(root).as_posix()
    except ValueError:
        return name
