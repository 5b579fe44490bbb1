"""Port: logo fetcher — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol


class LogoFetcher(Protocol):
    """Abstract contract for turning a logo reference into an embeddable data URL."""

    async def fetch_data_url(self, logo: str) -> str:
        """Download *logo* and return it as a ``data:`` URL."""
        ...
