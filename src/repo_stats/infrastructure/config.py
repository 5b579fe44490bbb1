"""Process configuration — loaded from ``REPO_STATS_*`` environment variables."""

from __future__ import annotations

import tempfile
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service-wide settings; per-request display options live in ``BadgeSettings``."""

    model_config = SettingsConfigDict(
        env_prefix="REPO_STATS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    # Statistics cache
    stats_cache_capacity: int = Field(default=1000, gt=0)
    stats_cache_ttl_seconds: int = Field(default=24 * 60 * 60, gt=0)

    # Scratch directories for clones
    scratch_root: str = tempfile.gettempdir()
    scratch_prefix: str = "repo-stats-"
    scratch_stale_seconds: int = 60

    # git
    git_executable: str = "git"
    git_timeout_seconds: float = 120.0

    # Logo embedding
    logo_timeout_seconds: float = 10.0
    logo_max_bytes: int = 1024 * 1024


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
