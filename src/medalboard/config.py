"""Application configuration utilities."""
from __future__ import annotations

from datetime import date
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralized configuration loaded from environment or .env file."""

    athletes_source: str = Field(default="data/athletes.csv", alias="MEDALBOARD_ATHLETES_SOURCE")
    medals_source: str = Field(default="data/medals.csv", alias="MEDALBOARD_MEDALS_SOURCE")
    reference_date: date = Field(default=date(2024, 8, 11), alias="MEDALBOARD_REFERENCE_DATE")
    top_group_count: int = Field(default=4, ge=1, alias="MEDALBOARD_TOP_GROUP_COUNT")
    bar_country_limit: int = Field(default=20, ge=1, alias="MEDALBOARD_BAR_COUNTRY_LIMIT")
    fetch_timeout: int = Field(default=30, ge=1, alias="MEDALBOARD_FETCH_TIMEOUT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
