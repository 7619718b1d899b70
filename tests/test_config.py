"""
Tests for configuration loading.
"""

import pytest
from pydantic import ValidationError

from state_monitor.config import MonitorSettings, get_config, reload_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("LOG_LEVEL", "DEFAULT_IGNORED_PATHS", "IGNORE_FILE"):
        monkeypatch.delenv(f"STATE_MONITOR_{name}", raising=False)
    yield
    monkeypatch.undo()
    reload_config()


class TestMonitorSettings:
    """Test environment-driven settings."""

    def test_defaults(self):
        settings = MonitorSettings()
        assert settings.log_level == "INFO"
        assert settings.default_ignored_paths == []
        assert settings.ignore_file is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("STATE_MONITOR_LOG_LEVEL", "debug")
        monkeypatch.setenv("STATE_MONITOR_DEFAULT_IGNORED_PATHS", '["a.b", "c[0]"]')
        monkeypatch.setenv("STATE_MONITOR_IGNORE_FILE", "/etc/ignore.yaml")

        settings = MonitorSettings()

        assert settings.log_level == "DEBUG"
        assert settings.default_ignored_paths == ["a.b", "c[0]"]
        assert settings.ignore_file == "/etc/ignore.yaml"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("STATE_MONITOR_LOG_LEVEL", "verbose")
        with pytest.raises(ValidationError):
            MonitorSettings()

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_reload_config(self, monkeypatch):
        first = get_config()
        monkeypatch.setenv("STATE_MONITOR_LOG_LEVEL", "warning")

        reloaded = reload_config()

        assert reloaded is not first
        assert reloaded.log_level == "WARNING"
