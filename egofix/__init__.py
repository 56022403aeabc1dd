"""
EgoFix Diagnostics.

Mines a user's bug/fix event history and weekly check-ins for recurring
behavioral patterns, throttles what is surfaced, and maps each detected
pattern to concrete recommendations.

Subpackages:
    - models: SQLAlchemy entities and their immutable data twins
    - detectors: the six statistical pattern detectors
    - services: diagnostic engine, surfacing policy, recommendations, trends
    - config: runtime settings and display names
    - lib: logging setup and exception hierarchy
"""

__version__ = "1.0.0"
