"""Application settings with environment variable support.

Uses pydantic-settings for typed configuration validation.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """Engine configuration loaded from environment variables."""

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool = Field(default=False, description="Render log events as JSON")

    # Horizon bounds
    default_horizon_years: int = Field(default=25, ge=1, le=40)
    max_horizon_years: int = Field(default=40, ge=1, le=60)

    # Market assumptions handed to the engine by callers
    livret_rate_pct: float = Field(default=1.0, ge=0, le=100, description="Baseline savings rate %")
    scpi_revaluation_pct: float = Field(default=1.0, ge=0, le=100, description="Annual SCPI share revaluation %")

    model_config = {
        "env_prefix": "PATRIMOINE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()
