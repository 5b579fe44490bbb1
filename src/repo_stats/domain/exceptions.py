"""Domain exception hierarchy.

Each exception maps to a specific HTTP outcome at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class RepoStatsError(Exception):
    """Base exception for the entire application."""


# ── Caller-facing (400) ─────────────────────────────────────────────────────


class SettingsValidationError(RepoStatsError):
    """A query parameter is malformed; the message lists the valid choices."""


class ResolutionError(RepoStatsError):
    """The repository could not be reached, has no refs, or lacks the branch."""


class ComputationError(RepoStatsError):
    """Cloning or counting failed, almost always because of the repository."""


class BadgeRenderError(RepoStatsError):
    """The badge could not be built from the requested display settings."""


# ── Fatal ───────────────────────────────────────────────────────────────────


class ResourceExhaustionError(RepoStatsError):
    """Scratch space could not be allocated; the process must be replaced."""
