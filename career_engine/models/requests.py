from pydantic import BaseModel, Field


class BulkRecommendationRequest(BaseModel):
    user_ids: list[str] = Field(..., min_length=1, max_length=100)
    top_n: int = Field(10, ge=1, le=50, description="Recommendations per user")


class BulkSkillGapRequest(BaseModel):
    user_ids: list[str] = Field(..., min_length=1, max_length=100)
    target_role: str | None = Field(
        None, min_length=2, max_length=100, description="Overrides each user's own target role"
    )
