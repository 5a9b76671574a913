"""Score rounding and fit-label bands."""

from __future__ import annotations

import math

from job_filter.scoring.models import FitLabel

PURSUE_MIN = 70
MAYBE_MIN = 40


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def clamp_score(score: float) -> int:
    """Round and clamp a raw score into 0-100. NaN becomes 0."""
    if math.isnan(score):
        return 0
    if math.isinf(score):
        return 100 if score > 0 else 0
    return max(0, min(100, round_half_up(score)))


def fit_label(
    score: float, *, pursue_min: int = PURSUE_MIN, maybe_min: int = MAYBE_MIN
) -> FitLabel:
    """Map a score to Pursue / Maybe / Pass."""
    normalized = clamp_score(score)
    if normalized >= pursue_min:
        return "Pursue"
    if normalized >= maybe_min:
        return "Maybe"
    return "Pass"
