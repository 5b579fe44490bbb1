"""Global exception handlers — translate domain errors to HTTP responses.

Caller-attributable failures become a 400 carrying the message as plain text.
Anything unexpected becomes a generic 500; its detail only reaches the log.
"""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response

from repo_stats.domain.exceptions import (
    BadgeRenderError,
    ComputationError,
    ResolutionError,
    ResourceExhaustionError,
    SettingsValidationError,
)
from repo_stats.interface.responses import bad_request, internal_server_error

logger = logging.getLogger(__name__)

# EX_TEMPFAIL: tells the supervisor this instance is unhealthy and should be replaced.
EXIT_RESOURCE_EXHAUSTED = 75

_BAD_REQUEST_ERRORS: tuple[type[Exception], ...] = (
    SettingsValidationError,
    ResolutionError,
    ComputationError,
    BadgeRenderError,
)


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Caller-facing failures ──────────────────────────────────────────

    async def bad_request_handler(request: Request, exc: Exception) -> Response:
        logger.warning("%s: %s", type(exc).__name__, exc)
        return bad_request(str(exc))

    for exc_type in _BAD_REQUEST_ERRORS:
        app.add_exception_handler(exc_type, bad_request_handler)

    # ── Degraded execution environment ──────────────────────────────────

    @app.exception_handler(ResourceExhaustionError)
    async def resource_exhaustion_handler(request: Request, exc: ResourceExhaustionError) -> Response:
        logger.critical("Scratch space exhausted, terminating process: %s", exc)
        os._exit(EXIT_RESOURCE_EXHAUSTED)
        return PlainTextResponse("Service Unavailable", status_code=503)

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> Response:
        logger.exception("Unhandled exception")
        return internal_server_error()
