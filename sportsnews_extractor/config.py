"""Configuration for sportsnews-extractor using pydantic-settings.

All settings are driven by environment variables with the SPORTSNEWS_ prefix.
See .env.example for the full list of configurable options.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Extractor configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SPORTSNEWS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    user_agent: str = (
        "Mozilla/5.0 (X11; Linux x86_64; rv:127.0) Gecko/20100101 Firefox/127.0"
    )
    accept_language: str = "en-US,en;q=0.9"

    timeout_total: float = 120.0

    cache_backend: Literal["memory", "file", "redis"] = "memory"
    cache_prefix: str = "sportsnews-extractor"
    cache_dir: Path = Path(".cache")

    redis_url: str = "redis://localhost:6379"
    redis_db: int = 1

    article_cache_ttl: int = 60 * 60 * 8
    failure_cache_ttl: int = 60 * 10

    summary_min: int = 140
    summary_max: int = 250

    max_attempts: int = 5
    backoff_multiplier: float = 0.1
    backoff_min: float = 0.1
    backoff_max: float = 5.0

    def ensure_dirs(self) -> None:
        """Create the file-cache directory if the file backend is selected."""
        if self.cache_backend == "file":
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            logger.debug("Ensured directory: %s", self.cache_dir)


def get_settings() -> Settings:
    """Load settings from environment and ensure cache directories exist."""
    s = Settings()
    s.ensure_dirs()
    return s
