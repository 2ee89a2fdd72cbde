"""Environment-driven configuration."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_LOG_DIR = os.path.join(os.path.dirname(__file__), "..", "logs")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FANTAF1_",
        case_sensitive=False,
        extra="ignore",
    )

    openf1_base_url: str = "https://api.openf1.org/v1"
    http_timeout: float = 30.0
    provider_max_retries: int = 2
    sync_timeout: float | None = None
    log_dir: str = _DEFAULT_LOG_DIR
    season: int = 2026


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""
    return Settings()
