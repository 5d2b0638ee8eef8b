"""Career Path Predictor output."""

from pydantic import BaseModel, Field


class PredictedRole(BaseModel):
    """A likely next role derived from peers' historical transitions."""
    role: str
    probability: float = Field(ge=0.0, le=100.0)  # percent
    years_to_achieve: float = 0.0
    required_skills: list[str] = []
    salary: float = 0.0


class CareerPathStep(BaseModel):
    step: int
    role: str
    duration_years: int = 0
    cumulative_years: float = 0.0
    skills_to_learn: list[str] = []
    salary: float = 0.0


class CareerPrediction(BaseModel):
    """Predicted trajectory for one user.

    career_path[0] is always the current-state node (step 0, duration 0).
    """
    user_id: str
    current_role: str
    predicted_roles: list[PredictedRole] = Field(default=[], max_length=5)
    career_path: list[CareerPathStep] = []
    confidence_score: int = Field(ge=30, le=100)
