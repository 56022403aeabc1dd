"""
Diagnostics run configuration for EgoFix.

Settings are read from the environment once by the host and passed to the
DiagnosticEngine. Detector thresholds are class constants on each detector
and are not configurable at runtime.

Environment:
    EGOFIX_PATTERN_COOLDOWN_DAYS: Days a pattern type stays suppressed after
        it was last detected (default 14)
    EGOFIX_RUN_INTERVAL_DAYS: Days between scheduled diagnostics runs
        (default 7)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta

from egofix.lib.exceptions import ConfigurationError

DEFAULT_PATTERN_COOLDOWN_DAYS = 14
DEFAULT_RUN_INTERVAL_DAYS = 7


@dataclass(frozen=True)
class DiagnosticsSettings:
    """Tunable knobs for the diagnostic engine."""

    pattern_cooldown_days: int = DEFAULT_PATTERN_COOLDOWN_DAYS
    run_interval_days: int = DEFAULT_RUN_INTERVAL_DAYS

    def __post_init__(self) -> None:
        if self.pattern_cooldown_days <= 0:
            raise ConfigurationError("pattern_cooldown_days must be positive")
        if self.run_interval_days <= 0:
            raise ConfigurationError("run_interval_days must be positive")

    @property
    def cooldown(self) -> timedelta:
        return timedelta(days=self.pattern_cooldown_days)

    @property
    def run_interval(self) -> timedelta:
        return timedelta(days=self.run_interval_days)

    @classmethod
    def from_env(cls) -> DiagnosticsSettings:
        """
        Build settings from environment variables.

        Raises:
            ConfigurationError: If a variable is set but not a positive integer
        """
        return cls(
            pattern_cooldown_days=_int_from_env(
                "EGOFIX_PATTERN_COOLDOWN_DAYS", DEFAULT_PATTERN_COOLDOWN_DAYS
            ),
            run_interval_days=_int_from_env(
                "EGOFIX_RUN_INTERVAL_DAYS", DEFAULT_RUN_INTERVAL_DAYS
            ),
        )


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e
