"""Badge renderer — maps display settings and line counts to the output document."""

from __future__ import annotations

import logging

from pydantic import TypeAdapter

from repo_stats.domain.entities import BadgeSettings, Category, ContentType, LanguageStats
from repo_stats.domain.ports.logo_fetcher import LogoFetcher
from repo_stats.services.badge_template import Badge, render_svg

logger = logging.getLogger(__name__)

THOUSAND = 1_000
MILLION = 1_000_000
BILLION = 1_000_000_000

_STATS_JSON = TypeAdapter(LanguageStats)


def category_amount(category: Category, stats: LanguageStats) -> int:
    """The number a badge of *category* displays."""
    if category is Category.BLANKS:
        return stats.blanks
    if category is Category.CODE:
        return stats.code
    if category is Category.COMMENTS:
        return stats.comments
    if category is Category.FILES:
        return stats.files
    return stats.lines


def format_amount(amount: int) -> str:
    """Abbreviate *amount* with one decimal and a K / M / B suffix.

    >>> format_amount(999), format_amount(1000), format_amount(999_999)
    ('999', '1.0K', '1000.0K')
    """
    for threshold, suffix in ((BILLION, "B"), (MILLION, "M"), (THOUSAND, "K")):
        if amount >= threshold:
            return f"{amount / threshold:.1f}{suffix}"
    return str(amount)


class BadgeRenderer:
    """Produces an SVG badge or a JSON statistics document."""

    def __init__(self, logo_fetcher: LogoFetcher) -> None:
        self._logos = logo_fetcher

    async def render(self, settings: BadgeSettings, stats: LanguageStats) -> str:
        if settings.content_type is ContentType.JSON:
            return _STATS_JSON.dump_json(stats).decode()

        label = settings.label if settings.label is not None else settings.category.description
        message = format_amount(category_amount(settings.category, stats))

        badge = Badge(
            label=label,
            message=message,
            label_color=str(settings.theme.label_color),
            message_color=str(settings.theme.color),
            logo=await self._resolve_logo(settings.logo),
            logo_as_label=settings.logo_as_label,
            label_title=label,
            message_title=message,
        )
        return render_svg(settings.theme.style, badge)

    async def _resolve_logo(self, logo: str | None) -> str | None:
        if not logo:
            return None
        # Data URLs are already inline and cannot be re-embedded.
        if logo.startswith("data:"):
            return logo
        return await self._logos.fetch_data_url(logo)
