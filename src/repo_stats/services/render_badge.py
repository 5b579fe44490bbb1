"""Render-badge use case — the resolve → cache → compute → render pipeline.

This is the single entry point for the business logic.  It depends only on
the ports and the service components; the interface layer injects concrete
adapters at runtime.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Mapping

from repo_stats.domain.entities import BadgeSettings
from repo_stats.domain.value_objects import RepositoryReference
from repo_stats.services.badge_renderer import BadgeRenderer
from repo_stats.services.repository_resolver import RepositoryResolver
from repo_stats.services.settings_parser import parse_settings
from repo_stats.services.stats_provider import StatisticsProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RenderedBadge:
    """The rendered document together with the settings that shaped it."""

    settings: BadgeSettings
    body: str


class RenderBadgeUseCase:
    """Orchestrates one badge request from query string to document."""

    def __init__(
        self,
        resolver: RepositoryResolver,
        provider: StatisticsProvider,
        renderer: BadgeRenderer,
    ) -> None:
        self._resolver = resolver
        self._provider = provider
        self._renderer = renderer

    async def execute(self, reference: RepositoryReference, query: Mapping[str, str]) -> RenderedBadge:
        """Run the full pipeline for *reference* with the caller's *query*."""
        settings = parse_settings(query)
        self._provider.validate_languages(settings.languages)

        commit = await asyncio.to_thread(self._resolver.resolve, reference, settings.branch)
        stats = await self._provider.get_statistics(commit, settings)
        body = await self._renderer.render(settings, stats)
        return RenderedBadge(settings=settings, body=body)
