from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .rules import DEFAULT_FILE_NAME


class Settings(BaseSettings):
    """Service settings, overridable through WINTER_XLSX_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="WINTER_XLSX_")

    fetch_timeout: float = Field(default=30.0, description="Seconds to wait for a CSV location")
    default_file_name: str = Field(default=DEFAULT_FILE_NAME, description="Download name when none is given")
    log_level: str = Field(default="INFO", description="Root log level")


@lru_cache
def get_settings() -> Settings:
    return Settings()
