"""
Display names used in pattern titles and bodies.

Weekdays follow the 1 = Sunday ... 7 = Saturday numbering stored on
analytics events.
"""

from __future__ import annotations

WEEKDAY_NAMES: dict[int, str] = {
    1: "Sunday",
    2: "Monday",
    3: "Tuesday",
    4: "Wednesday",
    5: "Thursday",
    6: "Friday",
    7: "Saturday",
}

CONTEXT_DISPLAY_NAMES: dict[str, str] = {
    "work": "Work",
    "home": "Home",
    "social": "Social",
    "family": "Family",
    "online": "Online",
    "unknown": "Unknown",
}

# Fallback when a bug id is missing from the caller's name lookup
UNNAMED_BUG = "This bug"


def weekday_name(day_of_week: int) -> str:
    """
    Get the display name for a stored weekday number.

    Example:
        >>> weekday_name(2)
        'Monday'
    """
    return WEEKDAY_NAMES.get(day_of_week, "Unknown")


def context_display_name(context: str) -> str:
    return CONTEXT_DISPLAY_NAMES.get(context, context.capitalize())
