"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from allure_adapter.config import Settings, get_settings
from allure_adapter.serializers import ReportFormat


class TestSettings:
    """Tests for Settings defaults and environment overrides."""

    def test_defaults(self, monkeypatch):
        for name in ("OUTPUT_DIRECTORY", "CLEAN_OUTPUT", "REPORT_FORMAT", "LOG_LEVEL"):
            monkeypatch.delenv(f"ALLURE_{name}", raising=False)

        settings = Settings(_env_file=None)

        assert settings.output_directory == Path("allure-report")
        assert settings.clean_output is False
        assert settings.report_format is ReportFormat.XML
        assert settings.log_level == "WARNING"
        assert settings.log_json_format is False

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ALLURE_OUTPUT_DIRECTORY", str(tmp_path))
        monkeypatch.setenv("ALLURE_CLEAN_OUTPUT", "true")
        monkeypatch.setenv("ALLURE_REPORT_FORMAT", "json")

        settings = Settings(_env_file=None)

        assert settings.output_directory == tmp_path
        assert settings.clean_output is True
        assert settings.report_format is ReportFormat.JSON

    def test_env_file_is_read(self, monkeypatch, tmp_path):
        monkeypatch.delenv("ALLURE_LOG_LEVEL", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("ALLURE_LOG_LEVEL=DEBUG\nUNRELATED=1\n")

        settings = Settings(_env_file=env_file)

        assert settings.log_level == "DEBUG"

    def test_invalid_format_is_rejected(self, monkeypatch):
        monkeypatch.setenv("ALLURE_REPORT_FORMAT", "yaml")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
