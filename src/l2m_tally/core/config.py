"""
Configuration management for l2m-tally.

Uses Pydantic settings for type-safe configuration with environment variable support.
Every setting can be overridden via an `L2M_`-prefixed environment variable
(e.g. L2M_SEASON=2021) or a local .env file.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Run settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="L2M_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # Upstream feeds
    # ==========================================================================
    data_base_url: str = Field(
        default="http://data.nba.net/prod/v2",
        description="Base URL for the teams.json / schedule.json season feeds",
    )
    report_base_url: str = Field(
        default="https://official.nba.com/l2m/json",
        description="Base URL for Last Two Minutes report documents",
    )
    request_timeout: float = Field(default=30.0, gt=0, description="HTTP timeout (seconds)")

    # ==========================================================================
    # Run
    # ==========================================================================
    season: int = Field(default=2022, description="Season start year (2022 for 2022-23)")
    concurrency: int = Field(default=1, ge=1, le=32, description="Parallel report fetches")

    # ==========================================================================
    # Output
    # ==========================================================================
    output_path: str = "out.csv"
    output_format: Literal["csv", "json"] = "csv"
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
