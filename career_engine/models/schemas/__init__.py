"""Typed results and collaborator records of the career intelligence engine."""

from career_engine.models.schemas.career_prediction import (
    CareerPathStep,
    CareerPrediction,
    PredictedRole,
)
from career_engine.models.schemas.feature_profile import NOT_SPECIFIED, UserFeatureProfile
from career_engine.models.schemas.similarity import SimilarityScore
from career_engine.models.schemas.skill_gap import SkillGap
from career_engine.models.schemas.skill_recommendation import (
    LearningResource,
    SkillRecommendation,
)

__all__ = [
    "NOT_SPECIFIED",
    "UserFeatureProfile",
    "SimilarityScore",
    "SkillRecommendation",
    "LearningResource",
    "SkillGap",
    "PredictedRole",
    "CareerPathStep",
    "CareerPrediction",
]
