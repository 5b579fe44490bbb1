"""Repository resolver — pins a repository reference to a single commit."""

from __future__ import annotations

import logging

from repo_stats.domain.entities import ResolvedCommit
from repo_stats.domain.exceptions import ResolutionError
from repo_stats.domain.ports.vcs_transport import VcsTransport
from repo_stats.domain.value_objects import RepositoryReference

logger = logging.getLogger(__name__)


class RepositoryResolver:
    """Lists the remote's refs and selects the commit to count.

    Without a branch the first advertised ref wins.  Most servers advertise
    ``HEAD`` first, which makes this the default branch, but nothing in the
    protocol guarantees that ordering.
    """

    def __init__(self, transport: VcsTransport) -> None:
        self._transport = transport

    def resolve(self, reference: RepositoryReference, branch: str | None = None) -> ResolvedCommit:
        """Blocking: contacts the remote."""
        url = reference.url
        logger.info("Getting info for %s", url)

        refs = self._transport.list_refs(url)
        if not refs:
            raise ResolutionError("Repo contains no refs")

        if branch:
            wanted = f"refs/heads/{branch}"
            match = next((ref for ref in refs if ref.name == wanted), None)
            if match is None:
                raise ResolutionError(f"Branch '{branch}' not found in {url}")
            commit_id = match.commit_id
        else:
            commit_id = refs[0].commit_id

        logger.info("Repo sha: %s", commit_id)
        return ResolvedCommit(url=url, commit_id=commit_id, branch=branch)
