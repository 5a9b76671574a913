"""Tests for Settings configuration class."""

import os
from pathlib import Path

import pytest


class TestSettingsDefaults:
    """Test that Settings loads sensible defaults."""

    def test_settings_loads_with_defaults(self):
        """Settings should load with default values when no env vars are set."""
        env_vars_to_clear = ["CLAIMS_PATH", "OUTPUT_DIR", "LOG_LEVEL", "LOG_FILE"]
        original_values = {}
        for var in env_vars_to_clear:
            original_values[var] = os.environ.pop(var, None)

        try:
            from job_filter.config.settings import Settings

            settings = Settings(_env_file=None)  # type: ignore[call-arg]

            assert settings.claims_path == Path("./data/claims.json")
            assert settings.output_dir == Path("./artifacts")
            assert settings.log_level == "INFO"
            assert settings.log_file is None
        finally:
            for var, value in original_values.items():
                if value is not None:
                    os.environ[var] = value


class TestSettingsEnvOverrides:
    """Test that environment variables override defaults."""

    def test_paths_from_env(self, monkeypatch, tmp_path):
        from job_filter.config.settings import Settings

        monkeypatch.setenv("CLAIMS_PATH", str(tmp_path / "claims.json"))
        monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "out"))

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.claims_path == tmp_path / "claims.json"
        assert settings.output_dir == tmp_path / "out"

    def test_home_paths_expanded(self, monkeypatch, tmp_path):
        """A leading ~ in path settings resolves to the home directory."""
        from job_filter.config.settings import Settings

        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setenv("CLAIMS_PATH", "~/claims.json")
        monkeypatch.setenv("LOG_FILE", "~/logs/run.log")

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.claims_path == tmp_path / "claims.json"
        assert settings.log_file == tmp_path / "logs" / "run.log"

    def test_log_level_normalized(self, monkeypatch):
        """Log level should be upper-cased."""
        from job_filter.config.settings import Settings

        monkeypatch.setenv("LOG_LEVEL", "debug")

        assert Settings(_env_file=None).log_level == "DEBUG"  # type: ignore[call-arg]

    def test_invalid_log_level_rejected(self, monkeypatch):
        from pydantic import ValidationError

        from job_filter.config.settings import Settings

        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]


class TestSettingsSingleton:
    """Test the settings singleton accessors."""

    def test_get_settings_returns_same_instance(self, monkeypatch, tmp_path):
        from job_filter.config.settings import get_settings, reset_settings

        monkeypatch.chdir(tmp_path)
        reset_settings()
        try:
            assert get_settings() is get_settings()
        finally:
            reset_settings()
