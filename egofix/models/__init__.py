"""
Models package for EgoFix Diagnostics.

This package exports all SQLAlchemy models, their frozen data twins and
the enums they use.

Usage:
    from egofix.models import AnalyticsEventData, WeeklyDiagnosticData
    from egofix.models import DetectedPattern, PatternType, PatternSeverity
"""

from egofix.models.base import Base
from egofix.models.bug import Bug
from egofix.models.diagnostic import (
    BugDiagnosticResponse,
    BugIntensity,
    WeeklyDiagnostic,
    WeeklyDiagnosticData,
)
from egofix.models.event import (
    AnalyticsEvent,
    AnalyticsEventData,
    EventContext,
    EventType,
    calendar_fields,
)
from egofix.models.pattern import (
    DetectedPattern,
    DetectedPatternData,
    PatternSeverity,
    PatternType,
)
from egofix.models.user import UserProfile

__all__ = [
    # Base
    "Base",
    # Models
    "AnalyticsEvent",
    "WeeklyDiagnostic",
    "DetectedPattern",
    "Bug",
    "UserProfile",
    # Data twins
    "AnalyticsEventData",
    "WeeklyDiagnosticData",
    "BugDiagnosticResponse",
    "DetectedPatternData",
    # Enums
    "EventType",
    "EventContext",
    "BugIntensity",
    "PatternType",
    "PatternSeverity",
    # Helpers
    "calendar_fields",
]
