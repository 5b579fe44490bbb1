"""Port: VCS transport — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from repo_stats.domain.entities import RemoteRef


class VcsTransport(Protocol):
    """Abstract contract for talking to a remote repository.

    Both methods block; callers run them off the event loop.
    """

    def list_refs(self, url: str) -> list[RemoteRef]:
        """Return the refs the remote advertises, in advertised order."""
        ...

    def shallow_clone(self, url: str, branch: str | None, dest: Path) -> None:
        """Clone the tip of *branch* (or the remote HEAD) into *dest* at depth 1."""
        ...
