"""
Services for EgoFix Diagnostics.

Services:
    - DiagnosticEngine: runs detectors, applies the cooldown, persists patterns
    - PatternSurfacingService / select_pattern_to_surface: one pattern per session
    - generate_recommendations / recommendations_for: pattern -> next steps
    - bug_intensity_trend / trend_direction: per-bug weekly trends
    - DiagnosticStore / SQLAlchemyDiagnosticStore: storage boundary
"""

from .diagnostic_engine import DiagnosticEngine
from .diagnostic_store import DiagnosticStore, SQLAlchemyDiagnosticStore
from .pattern_surfacing import PatternSurfacingService, select_pattern_to_surface
from .recommendations import (
    GENERIC_RECOMMENDATIONS,
    RECOMMENDATIONS,
    TYPE_DEFAULTS,
    Recommendation,
    RecommendationAction,
    RecommendationTemplate,
    generate_recommendations,
    recommendations_for,
)
from .trends import TrendDirection, TrendPoint, bug_intensity_trend, trend_direction

__all__ = [
    # Engine
    "DiagnosticEngine",
    # Storage
    "DiagnosticStore",
    "SQLAlchemyDiagnosticStore",
    # Surfacing
    "PatternSurfacingService",
    "select_pattern_to_surface",
    # Recommendations
    "Recommendation",
    "RecommendationAction",
    "RecommendationTemplate",
    "RECOMMENDATIONS",
    "TYPE_DEFAULTS",
    "GENERIC_RECOMMENDATIONS",
    "generate_recommendations",
    "recommendations_for",
    # Trends
    "TrendDirection",
    "TrendPoint",
    "bug_intensity_trend",
    "trend_direction",
]
