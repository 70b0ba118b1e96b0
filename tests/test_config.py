"""Tests for configuration and cache location."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from herdmetrics.core.config import Settings, get_cache_dir


class TestGetCacheDir:
    """Tests for the get_cache_dir function."""

    def test_returns_path_object(self):
        """Verify get_cache_dir returns a Path object."""
        result = get_cache_dir()
        assert isinstance(result, Path)

    def test_returns_cache_dir(self):
        result = get_cache_dir()
        assert result.name == ".cache"

    def test_cache_dir_exists_after_call(self):
        """Verify the cache directory is created if it doesn't exist."""
        result = get_cache_dir()
        assert result.exists()
        assert result.is_dir()

    def test_returns_same_path_on_multiple_calls(self):
        """Verify function returns consistent path (cached)."""
        result1 = get_cache_dir()
        result2 = get_cache_dir()
        assert result1 == result2

    def test_modules_use_same_cache_dir(self):
        """Verify the loader and CLI resolve the same cache directory."""
        from herdmetrics.cli import get_cache_dir as cli_get_cache_dir
        from herdmetrics.data.records import get_cache_dir as records_get_cache_dir

        assert cli_get_cache_dir() == records_get_cache_dir() == get_cache_dir()


class TestSettings:
    """Tests for Settings defaults and environment overrides."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in (
            "DEFAULT_DAILY_GAIN_KG",
            "WEIGHT_GAIN_WINDOW_MONTHS",
            "FCR_PERIOD_MONTHS",
            "SNAPSHOT_FILE",
            "DISPLAY_UNITS",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        s = Settings(_env_file=None)
        assert s.default_daily_gain_kg == 0.5
        assert s.weight_gain_window_months == 12
        assert s.fcr_period_months == 6
        assert s.snapshot_file == "herd_snapshot.json"
        assert s.display_units == "metric"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("FCR_PERIOD_MONTHS", "3")
        monkeypatch.setenv("DEFAULT_DAILY_GAIN_KG", "0.75")
        monkeypatch.setenv("DISPLAY_UNITS", "imperial")

        s = Settings(_env_file=None)

        assert s.fcr_period_months == 3
        assert s.default_daily_gain_kg == 0.75
        assert s.display_units == "imperial"

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("WEIGHT_GAIN_WINDOW_MONTHS=24\nUNRELATED_SETTING=ignored\n")

        s = Settings(_env_file=env_file)

        assert s.weight_gain_window_months == 24

    def test_invalid_display_units_rejected(self, monkeypatch):
        monkeypatch.setenv("DISPLAY_UNITS", "furlongs")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)
