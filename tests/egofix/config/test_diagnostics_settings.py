"""
Tests for DiagnosticsSettings and display names.
"""

from datetime import timedelta

import pytest

from egofix.config.diagnostics import DiagnosticsSettings
from egofix.config.display import context_display_name, weekday_name
from egofix.lib.exceptions import ConfigurationError


class TestDiagnosticsSettings:

    def test_defaults(self):
        settings = DiagnosticsSettings()

        assert settings.cooldown == timedelta(days=14)
        assert settings.run_interval == timedelta(days=7)

    @pytest.mark.parametrize("field", ["pattern_cooldown_days", "run_interval_days"])
    @pytest.mark.parametrize("value", [0, -3])
    def test_non_positive_rejected(self, field, value):
        with pytest.raises(ConfigurationError, match=field):
            DiagnosticsSettings(**{field: value})

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("EGOFIX_PATTERN_COOLDOWN_DAYS", "21")
        monkeypatch.setenv("EGOFIX_RUN_INTERVAL_DAYS", "3")

        settings = DiagnosticsSettings.from_env()

        assert settings.pattern_cooldown_days == 21
        assert settings.run_interval_days == 3

    def test_from_env_defaults(self, monkeypatch):
        monkeypatch.delenv("EGOFIX_PATTERN_COOLDOWN_DAYS", raising=False)
        monkeypatch.setenv("EGOFIX_RUN_INTERVAL_DAYS", "  ")

        assert DiagnosticsSettings.from_env() == DiagnosticsSettings()

    def test_from_env_not_an_integer(self, monkeypatch):
        monkeypatch.setenv("EGOFIX_PATTERN_COOLDOWN_DAYS", "two weeks")

        with pytest.raises(ConfigurationError, match="EGOFIX_PATTERN_COOLDOWN_DAYS"):
            DiagnosticsSettings.from_env()

    def test_from_env_negative(self, monkeypatch):
        monkeypatch.setenv("EGOFIX_RUN_INTERVAL_DAYS", "-1")

        with pytest.raises(ConfigurationError):
            DiagnosticsSettings.from_env()


class TestDisplayNames:

    @pytest.mark.parametrize(
        ("day", "name"),
        [(1, "Sunday"), (2, "Monday"), (7, "Saturday"), (0, "Unknown"), (8, "Unknown")],
    )
    def test_weekday_name(self, day, name):
        assert weekday_name(day) == name

    def test_context_display_name(self):
        assert context_display_name("work") == "Work"
        assert context_display_name("gym") == "Gym"
