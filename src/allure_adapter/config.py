"""Configuration settings for allure_adapter."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from .serializers import ReportFormat
from .storage import DEFAULT_OUTPUT_DIRECTORY


class Settings(BaseSettings):
    """Settings loaded from ``ALLURE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ALLURE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Output
    output_directory: Path = DEFAULT_OUTPUT_DIRECTORY
    clean_output: bool = False
    report_format: ReportFormat = ReportFormat.XML

    # Logging
    log_level: str = "WARNING"
    log_json_format: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
