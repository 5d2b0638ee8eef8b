"""Career intelligence engine: wires the components together.

Flow per entry point:
    user_id
      ├─ FeatureExtractor.extract_features       → UserFeatureProfile
      ├─ SimilarityEngine.find_similar_users     → [SimilarityScore]
      │        ↓
      ├─ SkillRecommender.recommend              → [SkillRecommendation]   (cached 24h)
      ├─ SkillGapAnalyzer.calculate_gaps         → [SkillGap]              (cached 1h)
      └─ CareerPathPredictor.predict             → CareerPrediction        (cached 7d)

Cached results are not invalidated when a user's skills change; call
invalidate_user() for an explicit refresh.
"""

import logging
from collections.abc import Callable
from datetime import date

from pydantic import TypeAdapter

from career_engine.config import Settings
from career_engine.models.schemas.career_prediction import CareerPrediction
from career_engine.models.schemas.feature_profile import UserFeatureProfile
from career_engine.models.schemas.similarity import SimilarityScore
from career_engine.models.schemas.skill_gap import SkillGap
from career_engine.models.schemas.skill_recommendation import SkillRecommendation
from career_engine.services.cache import cache_key, compute_or_cache, user_key_prefix
from career_engine.services.career.career_predictor import CareerPathPredictor
from career_engine.services.career.feature_extractor import FeatureExtractor
from career_engine.services.career.gap_analyzer import SkillGapAnalyzer
from career_engine.services.career.similarity_engine import SimilarityEngine
from career_engine.services.career.skill_recommender import SkillRecommender
from career_engine.services.errors import CacheUnavailableError
from career_engine.services.stores import CacheBackend, MarketStore, TransitionStore, UserStore

logger = logging.getLogger(__name__)

_RECOMMENDATIONS = TypeAdapter(list[SkillRecommendation])
_GAPS = TypeAdapter(list[SkillGap])
_PREDICTION = TypeAdapter(CareerPrediction)


class CareerIntelligenceEngine:
    def __init__(
        self,
        user_store: UserStore,
        market_store: MarketStore,
        transition_store: TransitionStore,
        cache: CacheBackend,
        settings: Settings | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.settings = settings or Settings()
        self.cache = cache
        self.extractor = FeatureExtractor(user_store, today=today)
        self.similarity = SimilarityEngine(
            user_store,
            self.extractor,
            scan_limit=self.settings.similarity_scan_limit,
            scan_timeout=self.settings.similarity_scan_timeout_seconds,
            max_concurrency=self.settings.scan_max_concurrency,
        )
        self.recommender = SkillRecommender(market_store, user_store)
        self.gap_analyzer = SkillGapAnalyzer(market_store)
        self.predictor = CareerPathPredictor(
            market_store,
            transition_store,
            scan_limit=self.settings.transition_scan_limit,
            scan_timeout=self.settings.transition_scan_timeout_seconds,
        )

    async def extract_features(self, user_id: str) -> UserFeatureProfile:
        return await self.extractor.extract_features(user_id)

    async def find_similar_users(self, user_id: str, limit: int = 5) -> list[SimilarityScore]:
        return await self.similarity.find_similar_users(user_id, limit)

    async def recommend_skills(self, user_id: str, top_n: int = 10) -> list[SkillRecommendation]:
        async def _compute() -> list[SkillRecommendation]:
            profile = await self.extractor.extract_features(user_id)
            peers = await self.similarity.find_similar_users(
                user_id, self.settings.peer_count, profile=profile
            )
            return await self.recommender.recommend(profile, peers, top_n)

        return await compute_or_cache(
            self.cache,
            cache_key("skill_recommendations", user_id, top_n=top_n),
            self.settings.recommendation_ttl_seconds,
            _compute,
            _RECOMMENDATIONS,
        )

    async def calculate_skill_gaps(
        self, user_id: str, target_role: str | None = None
    ) -> list[SkillGap]:
        async def _compute() -> list[SkillGap]:
            profile = await self.extractor.extract_features(user_id)
            return await self.gap_analyzer.calculate_gaps(profile, target_role)

        return await compute_or_cache(
            self.cache,
            cache_key("skill_gaps", user_id, target_role=target_role),
            self.settings.gap_ttl_seconds,
            _compute,
            _GAPS,
        )

    async def predict_career_path(self, user_id: str) -> CareerPrediction:
        async def _compute() -> CareerPrediction:
            profile = await self.extractor.extract_features(user_id)
            peers = await self.similarity.find_similar_users(
                user_id, self.settings.career_peer_count, profile=profile
            )
            return await self.predictor.predict(profile, peers)

        return await compute_or_cache(
            self.cache,
            cache_key("career_prediction", user_id),
            self.settings.prediction_ttl_seconds,
            _compute,
            _PREDICTION,
        )

    async def invalidate_user(self, user_id: str) -> int:
        """Drop every cached result for a user. Returns the number of keys removed."""
        try:
            removed = await self.cache.delete_prefix(user_key_prefix(user_id))
        except CacheUnavailableError as e:
            logger.warning("Could not invalidate cache for user %s: %s", user_id, e)
            return 0
        logger.info("Invalidated %d cached results for user %s", removed, user_id)
        return removed
