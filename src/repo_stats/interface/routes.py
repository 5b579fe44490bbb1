"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from repo_stats.domain.value_objects import RepositoryReference
from repo_stats.interface.dependencies import get_use_case
from repo_stats.interface.responses import badge_response
from repo_stats.services.render_badge import RenderBadgeUseCase

router = APIRouter()


@router.api_route(
    "/tokei/{domain}/{user}/{repo}",
    methods=["GET", "HEAD"],
    responses={
        200: {
            "content": {"image/svg+xml": {}, "application/json": {}},
            "description": "Badge SVG or raw statistics JSON",
        },
        400: {"description": "Invalid parameter, unreachable repository or unknown branch"},
        500: {"description": "Internal error"},
    },
)
async def repository_badge(
    request: Request,
    domain: str,
    user: str,
    repo: str,
    use_case: RenderBadgeUseCase = Depends(get_use_case),
) -> Response:
    """Render a code-statistics badge for ``https://{domain}/{user}/{repo}``."""
    # Health checks probe with HEAD; answer before touching the repository.
    if request.method == "HEAD":
        return Response(status_code=200)

    reference = RepositoryReference.from_path(domain, user, repo)
    result = await use_case.execute(reference, dict(request.query_params))
    return badge_response(result.settings, result.body)


@router.get("/health", include_in_schema=False)
async def health() -> dict[str, str]:
    return {"status": "ok"}
