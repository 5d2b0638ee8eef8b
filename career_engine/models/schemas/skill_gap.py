"""Skill Gap Analyzer output."""

from typing import Literal

from pydantic import BaseModel, Field

Priority = Literal["critical", "high", "medium", "low"]

PRIORITY_ORDER: dict[str, int] = {"critical": 0, "high": 1, "medium": 2, "low": 3}


class SkillGap(BaseModel):
    """Deficit on one skill required by the target role. gap is always > 0."""
    skill: str
    current_level: float = 0.0
    required_level: float
    gap: float = Field(gt=0.0)
    priority: Priority
    estimated_time_to_learn_hours: int
    recommended_resources: list[str] = []
