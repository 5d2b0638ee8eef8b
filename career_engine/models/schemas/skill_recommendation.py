"""Skill Recommender output: ranked skills the user does not hold yet."""

from typing import Literal

from pydantic import BaseModel, Field

Difficulty = Literal["beginner", "intermediate", "advanced", "expert"]
ResourceType = Literal["course", "book", "tutorial", "certification", "project", "mentorship"]


class LearningResource(BaseModel):
    type: ResourceType = "course"
    title: str
    provider: str = ""
    duration_hours: float = 0.0
    cost: float = 0.0
    rating: float = 0.0
    url: str | None = None


class SkillRecommendation(BaseModel):
    """A single recommended skill with catalog metadata.

    relevance_score blends market demand, peer frequency and role
    requirements and is capped at 100.
    """
    skill: str
    relevance_score: float = Field(ge=0.0, le=100.0)
    difficulty: Difficulty = "beginner"
    market_demand: float = 50.0
    salary_boost: float = 5000.0
    prerequisite_skills: list[str] = []
    time_to_mastery_hours: int = 40
    learning_resources: list[LearningResource] = []
