"""
Numeric helpers shared by the detectors.

Degenerate inputs return defined sentinels instead of raising.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from egofix.models.diagnostic import BugIntensity

# Correlation timeline scale
INTENSITY_WEIGHTS: dict[BugIntensity, float] = {
    BugIntensity.QUIET: 0.0,
    BugIntensity.PRESENT: 0.5,
    BugIntensity.LOUD: 1.0,
}


def pearson_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson product-moment correlation of two equal-length series.

    Returns 0.0 for empty or mismatched series and when either series has
    zero variance.

    Example:
        >>> pearson_correlation([0.0, 0.5, 1.0], [0.0, 1.0, 2.0])
        1.0
    """
    if len(x) != len(y) or not x:
        return 0.0
    # Constant series have no variance, whatever rounding the sums pick up
    if len(set(x)) == 1 or len(set(y)) == 1:
        return 0.0

    n = len(x)
    mean_x = math.fsum(x) / n
    mean_y = math.fsum(y) / n
    dx = [a - mean_x for a in x]
    dy = [b - mean_y for b in y]

    sxx = math.fsum(d * d for d in dx)
    syy = math.fsum(d * d for d in dy)
    if sxx == 0 or syy == 0:
        return 0.0

    sxy = math.fsum(a * b for a, b in zip(dx, dy))
    return max(-1.0, min(1.0, sxy / math.sqrt(sxx * syy)))
