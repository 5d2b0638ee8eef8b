"""Difficulty tiers, time-to-mastery table and gap priorities."""

import math

from career_engine.models.schemas.skill_gap import Priority
from career_engine.models.schemas.skill_recommendation import Difficulty

# Hours to master a skill, keyed by difficulty tier 1-4
MASTERY_HOURS = {1: 40, 2: 100, 3: 200, 4: 400}
DEFAULT_MASTERY_HOURS = 400

# gap * importance thresholds
CRITICAL_GAP_SCORE = 12
HIGH_GAP_SCORE = 8
MEDIUM_GAP_SCORE = 4


def difficulty_tier(value: float) -> Difficulty:
    if value <= 1:
        return "beginner"
    if value <= 2:
        return "intermediate"
    if value <= 3:
        return "advanced"
    return "expert"


def estimate_time_to_mastery(difficulty: float) -> int:
    """Hours to master a skill of the given raw difficulty (or required level)."""
    key = min(math.ceil(difficulty), 4)
    return MASTERY_HOURS.get(key, DEFAULT_MASTERY_HOURS)


def gap_priority(gap: float, importance: float) -> Priority:
    score = gap * importance
    if score >= CRITICAL_GAP_SCORE:
        return "critical"
    if score >= HIGH_GAP_SCORE:
        return "high"
    if score >= MEDIUM_GAP_SCORE:
        return "medium"
    return "low"


def round_half_up(value: float, digits: int = 0) -> float:
    """Round .5 away from zero for positives, unlike round()'s banker's rounding."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor
