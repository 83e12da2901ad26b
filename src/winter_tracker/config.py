"""
Application settings loaded from environment variables (and ``.env``).

Usage::

    from winter_tracker.config import get_settings

    settings = get_settings()
    settings.rapidapi_key
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PRODUCTION = "production"
DEVELOPMENT = "development"

# Runtime-written cache location on read-only production hosts
PRODUCTION_DYNAMIC_CACHE_DIR = Path("/tmp/dynamic-cache")  # noqa: S108


class Settings(BaseSettings):
    """Runtime configuration for the tracker."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    app_name: str = "winter-tracker"
    app_env: str = DEVELOPMENT
    debug: bool = False
    log_level: str = "INFO"

    # Upstream weather provider (Meteostat on RapidAPI)
    rapidapi_key: str = ""
    rapidapi_host: str = "meteostat.p.rapidapi.com"
    station: str = Field(default="71624", validation_alias="METEOSTAT_STATION")

    # Cache locations
    static_base_url: str | None = None
    static_cache_dir: Path = Path("cache")
    dynamic_cache_dir: Path | None = None

    # Aggregation
    start_year: int = 2001
    freshness_ttl_seconds: int = 3600

    # Presentation
    warm_label: str = "neomonk"
    cold_label: str = "pajaro"

    # Local server
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == PRODUCTION

    @property
    def resolved_dynamic_cache_dir(self) -> Path:
        """Dynamic cache directory, defaulting by environment."""
        if self.dynamic_cache_dir is not None:
            return self.dynamic_cache_dir
        if self.is_production:
            return PRODUCTION_DYNAMIC_CACHE_DIR
        return Path("dynamic-cache")

    @property
    def static_cache_url(self) -> str | None:
        """Base URL for static cache files, only used in production."""
        if self.is_production and self.static_base_url:
            return self.static_base_url.rstrip("/") + "/cache"
        return None


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
