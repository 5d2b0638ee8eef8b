"""Typed rows returned by the collaborator stores.

The user, market and transition stores live outside the engine; these models
are the boundary they hand data across.
"""

from datetime import date

from pydantic import BaseModel

from career_engine.models.schemas.skill_recommendation import ResourceType


class UserRecord(BaseModel):
    id: str
    name: str = ""
    email: str = ""


class UserSkillRecord(BaseModel):
    skill_name: str
    level: float | None = None  # 0-5 proficiency, None if never assessed
    is_certified: bool = False


class ExperienceRecord(BaseModel):
    """A single employment history entry."""
    title: str = ""
    company: str = ""
    start_date: date
    end_date: date | None = None  # None means current role


class UserProfileRecord(BaseModel):
    target_role: str | None = None
    industry_preferences: list[str] = []
    salary_expectation: float = 0.0
    work_style: str | None = None
    learning_style: str | None = None
    project_experience: dict[str, float] = {}


class TrendingSkill(BaseModel):
    skill_name: str
    industry: str = "general"
    demand_score: float = 0.0  # 0-100


class RoleRequirement(BaseModel):
    skill_name: str
    required_level: float = 0.0  # 0-5
    importance: float = 0.0  # 1-5


class LearningResourceRecord(BaseModel):
    skill_name: str
    type: ResourceType = "course"
    title: str
    provider: str = ""
    duration: float = 0.0  # hours
    cost: float = 0.0
    rating: float = 0.0
    url: str | None = None


class SkillCatalogEntry(BaseModel):
    name: str
    difficulty: float | None = None  # raw 1-4
    market_demand: float | None = None
    salary_boost: float | None = None
    prerequisite_skills: list[str] = []


class RoleCatalogEntry(BaseModel):
    name: str
    required_skills: list[str] = []
    average_salary: float | None = None


class CareerTransition(BaseModel):
    """A recorded move from one role to another by a single user."""
    user_id: str
    from_role: str
    to_role: str
    years_to_transition: float = 0.0
    transition_date: date | None = None
