"""
Configuration management for the parks directory data pipeline.

Environment variables use the PARKS_ prefix and may also come from a .env file.

Only ambient, operational settings live in ``Settings``. The source priority
tiers and scoring weights below are policy constants: changing them is a
reviewed code change, never an environment override.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PipelineSettings(BaseSettings):
    """Operational settings, read from PARKS_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PARKS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Directories
    data_dir: Path = Field(default=Path("./data"))

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    log_json: bool = False  # JSON lines in the log file

    # Processing settings
    batch_size: int = 500
    low_quality_threshold: int = 40  # reports flag records scoring below this

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_level(cls, v):
        """Accept log levels in any case."""
        return str(v).upper()

    @field_validator("low_quality_threshold")
    @classmethod
    def within_score_range(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError("low_quality_threshold must be between 0 and 100")
        return v


class Settings(BaseSettings):
    """Top-level settings container."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)


@lru_cache()
def get_settings() -> Settings:
    """
    Settings are read from the environment once per process.
    """
    return Settings()


settings = get_settings()


# =============================================================================
# Data Quality Policy
# =============================================================================

# Source priorities - higher number = more trustworthy data
SOURCE_PRIORITIES = {
    "NPS_API": 100,                  # National Park Service API
    "RECREATION_GOV_API": 95,        # Recreation.gov API
    "STATE_PARK_API": 90,            # Official state park APIs
    "MANUAL_CURATION": 80,           # Manually verified
    "EMAIL_RESPONSE": 75,            # Park staff sent the data
    "OFFICIAL_WEBSITE_SCRAPE": 60,   # Scraped from .gov sites
    "WEB_SEARCH_SCRAPE": 40,         # General web scraping
    "USER_GENERATED": 20,            # User submissions
}

# Stored records at or above this priority cannot be overwritten by lower tiers
PROTECTED_PRIORITY = 90

# Records from sources at or above this priority earn the official-source bonus
OFFICIAL_SOURCE_PRIORITY = 90


def priority_for_tier(tier: str) -> int:
    """Look up a named tier, e.g. ``priority_for_tier("user_generated") == 20``.

    Raises:
        KeyError: if the tier is not defined
    """
    return SOURCE_PRIORITIES[tier.strip().upper()]
