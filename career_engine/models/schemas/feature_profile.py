"""Feature profile: the normalized summary of a user fed to every scorer."""

from pydantic import BaseModel, ConfigDict, model_validator

NOT_SPECIFIED = "not-specified"


class UserFeatureProfile(BaseModel):
    """Immutable snapshot of a user's skills, tenure and preferences.

    Rebuilt on every request from the user store. ``certifications`` is
    always a subset of ``skills``.
    """
    model_config = ConfigDict(frozen=True)

    user_id: str
    skills: tuple[str, ...] = ()
    skill_levels: dict[str, float] = {}
    experience_level: float = 0.0  # mean proficiency, 0-5
    years_of_experience: float = 0.0
    target_role: str = NOT_SPECIFIED
    industry_preferences: tuple[str, ...] = ()
    certifications: tuple[str, ...] = ()
    salary_expectation: float = 0.0
    work_style: str = "flexible"
    learning_style: str = "mixed"
    project_experience: dict[str, float] = {}

    @model_validator(mode="after")
    def _certifications_are_held(self) -> "UserFeatureProfile":
        unknown = set(self.certifications) - set(self.skills)
        if unknown:
            raise ValueError(f"certifications not in skills: {sorted(unknown)}")
        if self.years_of_experience < 0:
            raise ValueError("years_of_experience must be non-negative")
        return self

    @property
    def has_target_role(self) -> bool:
        return self.target_role != NOT_SPECIFIED
