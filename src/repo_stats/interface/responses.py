"""Response builder — status, content type and caching headers."""

from __future__ import annotations

from fastapi.responses import PlainTextResponse, Response

from repo_stats.domain.entities import BadgeSettings

REVALIDATE_FACTOR = 5
INTERNAL_ERROR_BODY = "Internal Server Error"


def cache_control(cache_seconds: int) -> str:
    return (
        f"s-maxage={cache_seconds}, "
        f"stale-while-revalidate={cache_seconds * REVALIDATE_FACTOR}"
    )


def badge_response(settings: BadgeSettings, body: str) -> Response:
    """200 with the rendered document."""
    return Response(
        content=body,
        status_code=200,
        media_type=settings.content_type.media_type,
        headers={"Cache-Control": cache_control(settings.cache_seconds)},
    )


def bad_request(message: str) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=400)


def internal_server_error() -> PlainTextResponse:
    return PlainTextResponse(INTERNAL_ERROR_BODY, status_code=500)
