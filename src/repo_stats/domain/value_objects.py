"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

# Named colors from https://github.com/badges/shields/blob/7d45247/badge-maker/lib/color.js
NAMED_COLORS: dict[str, str] = {
    "brightgreen": "#4c1",
    "green": "#97ca00",
    "yellow": "#dfb317",
    "yellowgreen": "#a4a61d",
    "orange": "#fe7d37",
    "red": "#e05d44",
    "blue": "#007ec6",
    "grey": "#555",
    "lightgrey": "#9f9f9f",
}

_BARE_HEX_RE = re.compile(r"^([\da-f]{3}){1,2}$", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class Color:
    """A badge color, always held in its final SVG-ready form."""

    value: str

    @classmethod
    def named(cls, name: str) -> Color:
        return cls(NAMED_COLORS[name])

    @classmethod
    def parse(cls, raw: str) -> Color:
        """Resolve a palette name, a bare hex token, or any other CSS value.

        ``green`` → ``#97ca00``; ``ff00aa`` → ``#ff00aa``; anything else is
        passed through untouched.
        """
        named = NAMED_COLORS.get(raw.lower())
        if named is not None:
            return cls(named)
        if _BARE_HEX_RE.match(raw):
            return cls(f"#{raw}")
        return cls(raw)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class RepositoryReference:
    """A ``(domain, user, repo)`` triple as taken from the request path.

    *domain* is taken as already percent-decoded (the router decodes path
    parameters exactly once).  When it has no dot it is treated as a short
    form of ``<domain>.com`` (``github`` → ``github.com``).
    """

    domain: str
    user: str
    repo: str

    @classmethod
    def from_path(cls, domain: str, user: str, repo: str) -> RepositoryReference:
        if "." not in domain:
            domain = f"{domain}.com"
        return cls(domain=domain, user=user, repo=repo)

    @property
    def url(self) -> str:
        return f"https://{self.domain}/{self.user}/{self.repo}"
