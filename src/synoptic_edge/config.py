"""Environment-driven configuration helpers for Synoptic Edge."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or .env files."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    kelly_fraction: float = Field(default=0.25, ge=0.0, le=1.0)
    max_bet_fraction: float = Field(default=0.05, ge=0.0, le=1.0)
    parlay_kelly_base: float = Field(default=0.1, ge=0.0, le=1.0)

    market_data_ttl_seconds: float = Field(default=15 * 60, ge=0.0)
    analysis_ttl_seconds: float = Field(default=5 * 60, ge=0.0)
    fetch_max_attempts: int = Field(default=3, ge=1, le=10)
    fetch_backoff_seconds: float = Field(default=0.2, ge=0.0)

    projection_bias: float = Field(default=1.02, gt=0.0)
    projection_std_ratio: float = Field(default=0.25, gt=0.0)

    export_dir: Path = Field(default=Path("exports"))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()  # type: ignore[call-arg]
