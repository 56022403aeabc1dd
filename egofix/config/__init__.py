"""
Configuration for EgoFix Diagnostics.
"""

from egofix.config.diagnostics import (
    DEFAULT_PATTERN_COOLDOWN_DAYS,
    DEFAULT_RUN_INTERVAL_DAYS,
    DiagnosticsSettings,
)
from egofix.config.display import (
    CONTEXT_DISPLAY_NAMES,
    UNNAMED_BUG,
    WEEKDAY_NAMES,
    context_display_name,
    weekday_name,
)

__all__ = [
    "DiagnosticsSettings",
    "DEFAULT_PATTERN_COOLDOWN_DAYS",
    "DEFAULT_RUN_INTERVAL_DAYS",
    "WEEKDAY_NAMES",
    "CONTEXT_DISPLAY_NAMES",
    "UNNAMED_BUG",
    "weekday_name",
    "context_display_name",
]
