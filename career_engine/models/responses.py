from pydantic import BaseModel

from career_engine.models.schemas import SimilarityScore, SkillGap, SkillRecommendation


class HealthResponse(BaseModel):
    status: str = "ok"
    cache_backend: str = "memory"


class SimilarUsersResponse(BaseModel):
    user_id: str
    peers: list[SimilarityScore] = []


class BulkRecommendationResponse(BaseModel):
    results: dict[str, list[SkillRecommendation]] = {}
    missing_user_ids: list[str] = []


class BulkSkillGapResponse(BaseModel):
    results: dict[str, list[SkillGap]] = {}
    missing_user_ids: list[str] = []


class InvalidationResponse(BaseModel):
    user_id: str
    removed_entries: int = 0
