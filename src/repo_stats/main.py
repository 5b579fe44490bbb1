"""Entry point: ``repo-stats`` (or ``python -m repo_stats.main``)."""

from __future__ import annotations

import logging

import uvicorn

from repo_stats.infrastructure.config import get_settings

# Chatty third-party loggers that only matter when debugging.
_QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
    if level.upper() != "DEBUG":
        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def main() -> None:
    """Serve the badge API with uvicorn."""
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "repo_stats.interface.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        # The statistics cache and its lock live in this process only.
        workers=1,
    )


if __name__ == "__main__":
    main()
