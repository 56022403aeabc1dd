"""
Recommendation Mapper for EgoFix Diagnostics.

Turns a detected pattern into an ordered list of concrete next steps.
Pure lookup: no state, no I/O.

Lookup order:
1. RECOMMENDATIONS[(pattern_type, severity)] for combinations the detectors emit
2. TYPE_DEFAULTS[pattern_type] for every pattern type, including the
   reserved REGRESSION type
3. GENERIC_RECOMMENDATIONS

Priority 1 = act first.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import StrEnum

from egofix.models.pattern import DetectedPatternData, PatternSeverity, PatternType

# ============================================================================
# Enums and Data Classes
# ============================================================================

class RecommendationAction(StrEnum):
    """What a recommendation asks the user to do."""

    ADJUST_PRIORITY = "adjust_priority"        # Raise priority for this bug
    PRACTICE_MORE = "practice_more"            # More practice with this kind of fix
    AVOID_CONTEXT = "avoid_context"            # Be aware of triggers in a context
    CELEBRATE_PROGRESS = "celebrate_progress"  # Acknowledge progress
    SEEK_SUPPORT = "seek_support"              # Get outside support
    REVIEW_TIME = "review_time"                # Try fixes at a different time
    SLOW_DOWN = "slow_down"                    # Take more time with fixes
    FOCUS_ON_ONE = "focus_on_one"              # One bug at a time
    CHANGE_APPROACH = "change_approach"        # Try a different approach
    MAINTAIN_COURSE = "maintain_course"        # Keep doing what works


@dataclass(frozen=True)
class Recommendation:
    """A single actionable recommendation."""

    action_type: RecommendationAction
    title: str
    description: str
    priority: int = 1
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass(frozen=True)
class RecommendationTemplate:
    """Table entry; materialized into a Recommendation with a fresh id."""

    action_type: RecommendationAction
    title: str
    description: str
    priority: int

    def build(self) -> Recommendation:
        return Recommendation(
            action_type=self.action_type,
            title=self.title,
            description=self.description,
            priority=self.priority,
        )


# ============================================================================
# Recommendation Tables
# ============================================================================

_FACE_IT = RecommendationTemplate(
    action_type=RecommendationAction.ADJUST_PRIORITY,
    title="Face it",
    description="The ones you skip are usually the ones that matter. Make this bug top priority.",
    priority=1,
)

_FIRST_STEP = RecommendationTemplate(
    action_type=RecommendationAction.PRACTICE_MORE,
    title="Just the first step",
    description="Don't commit to the whole fix. Just the first step. See what happens.",
    priority=2,
)

_SCHEDULE_AROUND_IT = RecommendationTemplate(
    action_type=RecommendationAction.REVIEW_TIME,
    title="Schedule around it",
    description="No important decisions during your crash window. Move the meeting. Delay the text.",
    priority=1,
)

_PRE_GAME = RecommendationTemplate(
    action_type=RecommendationAction.SLOW_DOWN,
    title="Pre-game",
    description="Five minutes before your usual crash time. Just notice you're entering the danger zone.",
    priority=2,
)

_KNOW_BEFORE_YOU_GO = RecommendationTemplate(
    action_type=RecommendationAction.AVOID_CONTEXT,
    title="Know before you go",
    description="Before entering that context, name the bug out loud. It helps.",
    priority=1,
)

_LOWER_THE_STAKES = RecommendationTemplate(
    action_type=RecommendationAction.PRACTICE_MORE,
    title="Lower the stakes",
    description="Practice in that context when nothing's on the line. Build tolerance.",
    priority=2,
)

_PICK_ONE = RecommendationTemplate(
    action_type=RecommendationAction.FOCUS_ON_ONE,
    title="Pick one",
    description="They move together. Fix one, the other usually follows.",
    priority=1,
)

_DIG_DEEPER = RecommendationTemplate(
    action_type=RecommendationAction.SEEK_SUPPORT,
    title="Dig deeper",
    description="Two bugs, same root. Worth asking what's underneath both.",
    priority=2,
)

_TRY_SOMETHING_ELSE = RecommendationTemplate(
    action_type=RecommendationAction.CHANGE_APPROACH,
    title="Try something else",
    description="Same approach, same result. Time for a different angle.",
    priority=1,
)

_OUTSIDE_EYES = RecommendationTemplate(
    action_type=RecommendationAction.SEEK_SUPPORT,
    title="Get outside eyes",
    description="Blind spots are called that for a reason. Someone else might see what you can't.",
    priority=2,
)

_IT_HAPPENS = RecommendationTemplate(
    action_type=RecommendationAction.SLOW_DOWN,
    title="It happens",
    description="Regression is data, not failure. Something triggered the old pattern. Find out what.",
    priority=1,
)

_BACK_TO_BASICS = RecommendationTemplate(
    action_type=RecommendationAction.PRACTICE_MORE,
    title="Back to basics",
    description="The simple fixes that worked before. Do those again.",
    priority=2,
)

_STILL_RUNNING = RecommendationTemplate(
    action_type=RecommendationAction.CELEBRATE_PROGRESS,
    title="Still running",
    description="Whatever you're doing, it's working. Don't overthink it.",
    priority=1,
)

_STAY_THE_COURSE = RecommendationTemplate(
    action_type=RecommendationAction.MAINTAIN_COURSE,
    title="Stay the course",
    description="Don't fix what isn't broken.",
    priority=2,
)

# Combinations the six detectors actually emit
RECOMMENDATIONS: dict[tuple[PatternType, PatternSeverity], list[RecommendationTemplate]] = {
    (PatternType.AVOIDANCE, PatternSeverity.INSIGHT): [_FACE_IT, _FIRST_STEP],
    # Weekday clusters: plan the day around it
    (PatternType.TEMPORAL_CRASH, PatternSeverity.ALERT): [_SCHEDULE_AROUND_IT, _PRE_GAME],
    # Time-of-day clusters: a short check-in before the window
    (PatternType.TEMPORAL_CRASH, PatternSeverity.INSIGHT): [
        RecommendationTemplate(
            action_type=RecommendationAction.SLOW_DOWN,
            title="Pre-game",
            description="Five minutes before that part of the day. Just notice you're entering the danger zone.",
            priority=1,
        ),
        RecommendationTemplate(
            action_type=RecommendationAction.REVIEW_TIME,
            title="Move your fix",
            description="Do the daily fix before your crash window, not after it.",
            priority=2,
        ),
    ],
    (PatternType.CONTEXTUAL_SPIKE, PatternSeverity.INSIGHT): [_KNOW_BEFORE_YOU_GO, _LOWER_THE_STAKES],
    (PatternType.CORRELATED_BUGS, PatternSeverity.INSIGHT): [_PICK_ONE, _DIG_DEEPER],
    (PatternType.PLATEAU, PatternSeverity.ALERT): [_TRY_SOMETHING_ELSE, _OUTSIDE_EYES],
    (PatternType.IMPROVEMENT, PatternSeverity.OBSERVATION): [_STILL_RUNNING, _STAY_THE_COURSE],
}

# Per-type fallback for any severity not listed above
TYPE_DEFAULTS: dict[PatternType, list[RecommendationTemplate]] = {
    PatternType.AVOIDANCE: [_FACE_IT, _FIRST_STEP],
    PatternType.TEMPORAL_CRASH: [_SCHEDULE_AROUND_IT, _PRE_GAME],
    PatternType.CONTEXTUAL_SPIKE: [_KNOW_BEFORE_YOU_GO, _LOWER_THE_STAKES],
    PatternType.CORRELATED_BUGS: [_PICK_ONE, _DIG_DEEPER],
    PatternType.PLATEAU: [_TRY_SOMETHING_ELSE, _OUTSIDE_EYES],
    PatternType.REGRESSION: [_IT_HAPPENS, _BACK_TO_BASICS],
    PatternType.IMPROVEMENT: [_STILL_RUNNING, _STAY_THE_COURSE],
}

GENERIC_RECOMMENDATIONS: list[RecommendationTemplate] = [
    RecommendationTemplate(
        action_type=RecommendationAction.MAINTAIN_COURSE,
        title="Keep logging",
        description="Keep running your fixes and check-ins. The picture gets clearer with data.",
        priority=1,
    ),
]


# ============================================================================
# Mapper
# ============================================================================

def generate_recommendations(pattern: DetectedPatternData) -> list[Recommendation]:
    """
    Map a pattern to recommendations, highest priority first.

    Args:
        pattern: The detected pattern

    Returns:
        One or more recommendations; never empty
    """
    templates = (
        RECOMMENDATIONS.get((pattern.pattern_type, pattern.severity))
        or TYPE_DEFAULTS.get(pattern.pattern_type)
        or GENERIC_RECOMMENDATIONS
    )
    return [template.build() for template in sorted(templates, key=lambda t: t.priority)]


def recommendations_for(pattern: DetectedPatternData) -> list[Recommendation]:
    """Public entry point used by the host when a pattern is displayed."""
    return generate_recommendations(pattern)
