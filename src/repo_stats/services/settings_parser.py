"""Settings parser — turns query parameters into :class:`BadgeSettings`.

Enum parameters are strict: an unknown value fails the request with a message
listing the valid choices.  Numeric parameters are permissive: anything that
does not parse falls back to the default.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping, TypeVar

from repo_stats.domain.entities import BadgeSettings, Category, ContentType, Style, Theme
from repo_stats.domain.exceptions import SettingsValidationError
from repo_stats.domain.value_objects import Color

DEFAULT_CACHE_SECONDS = 60
MAX_CACHE_SECONDS = 2**32 - 1

_E = TypeVar("_E", bound=Enum)


def parse_settings(query: Mapping[str, str]) -> BadgeSettings:
    """Build settings from *query*; keys are matched case-insensitively."""
    params = {key.lower(): value for key, value in query.items()}

    category = _parse_choice(params, "category", Category, Category.CODE)
    content_type = _parse_choice(params, "format", ContentType, ContentType.SVG)
    theme = Theme(
        style=_parse_choice(params, "style", Style, Style.FLAT),
        label_color=_parse_color(params, "labelcolor", Color.named("grey")),
        color=_parse_color(params, "color", Color.named("blue")),
    )

    return BadgeSettings(
        category=category,
        content_type=content_type,
        theme=theme,
        label=params.get("label"),
        logo=params.get("logo"),
        logo_as_label=_parse_flag(params.get("logoaslabel")),
        cache_seconds=_parse_cache_seconds(params.get("cacheseconds")),
        branch=params.get("branch") or None,
        languages=_parse_languages(params.get("language")),
    )


def choices_text(enum_type: type[Enum]) -> str:
    """``'a', 'b', and 'c'`` for the values of *enum_type*."""
    quoted = [f"'{member.value}'" for member in enum_type]
    if len(quoted) == 2:
        return f"{quoted[0]} and {quoted[1]}"
    return ", ".join(quoted[:-1]) + f", and {quoted[-1]}"


def _parse_choice(params: Mapping[str, str], key: str, enum_type: type[_E], default: _E) -> _E:
    raw = params.get(key)
    if raw is None:
        return default
    try:
        return enum_type(raw.lower())
    except ValueError:
        raise SettingsValidationError(
            f"Invalid {key} parameter. Choices are {choices_text(enum_type)}"
        ) from None


def _parse_color(params: Mapping[str, str], key: str, default: Color) -> Color:
    raw = params.get(key)
    return Color.parse(raw) if raw else default


def _parse_flag(raw: str | None) -> bool:
    return raw is not None and (raw == "1" or raw.lower() == "true")


def _parse_cache_seconds(raw: str | None) -> int:
    # Unsigned 32-bit decimal only; signs, spaces, underscores and overflow fall back.
    if raw is None or not (raw.isascii() and raw.isdigit()):
        return DEFAULT_CACHE_SECONDS
    seconds = int(raw)
    if seconds > MAX_CACHE_SECONDS:
        return DEFAULT_CACHE_SECONDS
    return max(seconds, DEFAULT_CACHE_SECONDS)


def _parse_languages(raw: str | None) -> frozenset[str] | None:
    if raw is None:
        return None
    names = frozenset(part.strip() for part in raw.split(",") if part.strip())
    return names or None
