"""``git`` command-line adapter — implements the VcsTransport port."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from repo_stats.domain.entities import RemoteRef
from repo_stats.domain.exceptions import ComputationError, ResolutionError

logger = logging.getLogger(__name__)


class GitCliTransport:
    """Concrete VcsTransport that shells out to the ``git`` binary."""

    def __init__(self, executable: str = "git", timeout: float = 120.0) -> None:
        self._git = executable
        self._timeout = timeout
        # Never block on a credential prompt for private or missing repos.
        self._env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}

    def list_refs(self, url: str) -> list[RemoteRef]:
        """``git ls-remote <url>`` → [RemoteRef] in advertised order."""
        try:
            result = self._run(["ls-remote", url])
        except subprocess.CalledProcessError as exc:
            raise ResolutionError(
                f"Error listing repo contents: {_stderr(exc)}"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise ResolutionError(
                f"Error connecting to repository: timed out after {self._timeout:g}s"
            ) from exc

        refs: list[RemoteRef] = []
        for line in result.stdout.splitlines():
            commit_id, _, name = line.partition("\t")
            if commit_id and name:
                refs.append(RemoteRef(name=name.strip(), commit_id=commit_id.strip()))
        return refs

    def shallow_clone(self, url: str, branch: str | None, dest: Path) -> None:
        """``git clone --depth 1`` of *branch* (or the remote HEAD) into *dest*."""
        cmd = ["clone", "--depth=1", "--single-branch", "--no-tags", "--quiet"]
        if branch:
            cmd.extend(["--branch", branch])
        cmd.extend([url, str(dest)])

        logger.info("Cloning %s into %s", url, dest)
        try:
            self._run(cmd)
        except subprocess.CalledProcessError as exc:
            raise ComputationError(f"Error cloning repo: {_stderr(exc)}") from exc
        except subprocess.TimeoutExpired as exc:
            raise ComputationError(
                f"Error cloning repo: timed out after {self._timeout:g}s"
            ) from exc

    def _run(self, args: list[str]) -> subprocess.CompletedProcess[str]:
        try:
            return subprocess.run(
                [self._git, *args],
                capture_output=True,
                text=True,
                check=True,
                timeout=self._timeout,
                env=self._env,
            )
        except FileNotFoundError as exc:
            raise RuntimeError(
                f"git executable '{self._git}' not found. Ensure Git is installed and on PATH."
            ) from exc


def _stderr(exc: subprocess.CalledProcessError) -> str:
    return (exc.stderr or "").strip() or f"git exited with status {exc.returncode}"
