from fastapi import APIRouter, Depends, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from career_engine.api.dependencies import get_engine
from career_engine.config import settings
from career_engine.models.requests import BulkRecommendationRequest, BulkSkillGapRequest
from career_engine.models.responses import (
    BulkRecommendationResponse,
    BulkSkillGapResponse,
    HealthResponse,
    InvalidationResponse,
    SimilarUsersResponse,
)
from career_engine.models.schemas import (
    CareerPrediction,
    SkillGap,
    SkillRecommendation,
    UserFeatureProfile,
)
from career_engine.services.career.engine import CareerIntelligenceEngine
from career_engine.services.errors import NotFoundError

router = APIRouter()
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(cache_backend=settings.cache_backend)


@router.get("/users/{user_id}/features", response_model=UserFeatureProfile)
@limiter.limit(settings.rate_limit)
async def user_features(
    request: Request,
    user_id: str,
    engine: CareerIntelligenceEngine = Depends(get_engine),
):
    return await engine.extract_features(user_id)


@router.get("/users/{user_id}/similar-users", response_model=SimilarUsersResponse)
@limiter.limit(settings.rate_limit)
async def similar_users(
    request: Request,
    user_id: str,
    limit: int = Query(5, ge=1, le=50),
    engine: CareerIntelligenceEngine = Depends(get_engine),
):
    peers = await engine.find_similar_users(user_id, limit)
    return SimilarUsersResponse(user_id=user_id, peers=peers)


@router.get("/users/{user_id}/skill-recommendations", response_model=list[SkillRecommendation])
@limiter.limit(settings.rate_limit)
async def skill_recommendations(
    request: Request,
    user_id: str,
    top_n: int = Query(10, ge=1, le=50),
    engine: CareerIntelligenceEngine = Depends(get_engine),
):
    return await engine.recommend_skills(user_id, top_n)


@router.get("/users/{user_id}/skill-gaps", response_model=list[SkillGap])
@limiter.limit(settings.rate_limit)
async def skill_gaps(
    request: Request,
    user_id: str,
    target_role: str | None = Query(None, min_length=2, max_length=100),
    engine: CareerIntelligenceEngine = Depends(get_engine),
):
    return await engine.calculate_skill_gaps(user_id, target_role)


@router.get("/users/{user_id}/career-prediction", response_model=CareerPrediction)
@limiter.limit(settings.rate_limit)
async def career_prediction(
    request: Request,
    user_id: str,
    engine: CareerIntelligenceEngine = Depends(get_engine),
):
    return await engine.predict_career_path(user_id)


@router.delete("/users/{user_id}/cache", response_model=InvalidationResponse)
@limiter.limit(settings.rate_limit)
async def invalidate_cache(
    request: Request,
    user_id: str,
    engine: CareerIntelligenceEngine = Depends(get_engine),
):
    removed = await engine.invalidate_user(user_id)
    return InvalidationResponse(user_id=user_id, removed_entries=removed)


@router.post("/skill-recommendations/bulk", response_model=BulkRecommendationResponse)
@limiter.limit(settings.rate_limit)
async def bulk_skill_recommendations(
    request: Request,
    body: BulkRecommendationRequest,
    engine: CareerIntelligenceEngine = Depends(get_engine),
):
    response = BulkRecommendationResponse()
    for user_id in dict.fromkeys(body.user_ids):
        try:
            response.results[user_id] = await engine.recommend_skills(user_id, body.top_n)
        except NotFoundError:
            response.missing_user_ids.append(user_id)
    return response


@router.post("/skill-gaps/bulk", response_model=BulkSkillGapResponse)
@limiter.limit(settings.rate_limit)
async def bulk_skill_gaps(
    request: Request,
    body: BulkSkillGapRequest,
    engine: CareerIntelligenceEngine = Depends(get_engine),
):
    response = BulkSkillGapResponse()
    for user_id in dict.fromkeys(body.user_ids):
        try:
            response.results[user_id] = await engine.calculate_skill_gaps(user_id, body.target_role)
        except NotFoundError as e:
            # An unknown role fails the whole batch
            if e.resource != "User":
                raise
            response.missing_user_ids.append(user_id)
    return response
