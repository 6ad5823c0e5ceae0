"""
Settings - Application configuration using Pydantic Settings.

Loads from environment variables and .env files.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Corpus: None means the bundled JSON corpus shipped with the package
    data_dir: Path | None = None

    # Search
    search_excerpt_length: int = 150
    search_default_page_size: int = 20
    search_max_page_size: int = 100
    empty_term_baseline: float = 0.5

    # Suggestions
    suggestion_min_length: int = 2
    suggestion_limit: int = 8

    # Recommendations
    recommendation_excerpt_length: int = 120

    # Logging
    log_level: str = "INFO"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    api_rate_limit_rpm: int = 60

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
