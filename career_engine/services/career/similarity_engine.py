"""Similarity Engine: nearest peers over the user population.

Composite similarity between two feature profiles:

    0.5 * skill overlap (Jaccard)
  + 0.3 * experience proximity, exp(-|years_a - years_b| / 5)
  + 0.2 * role match (1 if target roles are identical)
"""

import logging

import numpy as np

from career_engine.models.schemas.feature_profile import UserFeatureProfile
from career_engine.models.schemas.similarity import SimilarityScore
from career_engine.services.career.feature_extractor import FeatureExtractor
from career_engine.services.scan import best_effort_collect
from career_engine.services.stores import UserStore

logger = logging.getLogger(__name__)

W_SKILLS = 0.5
W_EXPERIENCE = 0.3
W_ROLE = 0.2

# Smoothing constant for experience proximity, in years
EXPERIENCE_DECAY_YEARS = 5.0


def skill_overlap(a: UserFeatureProfile, b: UserFeatureProfile) -> float:
    skills_a, skills_b = set(a.skills), set(b.skills)
    union = len(skills_a | skills_b)
    if union == 0:
        return 0.0
    return len(skills_a & skills_b) / union


def experience_proximity(a: UserFeatureProfile, b: UserFeatureProfile) -> float:
    diff = abs(a.years_of_experience - b.years_of_experience)
    return float(np.exp(-diff / EXPERIENCE_DECAY_YEARS))


def role_match(a: UserFeatureProfile, b: UserFeatureProfile) -> float:
    return 1.0 if a.target_role == b.target_role else 0.0


def composite_similarity(a: UserFeatureProfile, b: UserFeatureProfile) -> float:
    """Weighted similarity from ``a`` to ``b``, always within [0, 1]."""
    raw = (
        W_SKILLS * skill_overlap(a, b)
        + W_EXPERIENCE * experience_proximity(a, b)
        + W_ROLE * role_match(a, b)
    )
    return float(np.clip(raw, 0.0, 1.0))


class SimilarityEngine:
    def __init__(
        self,
        user_store: UserStore,
        extractor: FeatureExtractor,
        scan_limit: int = 1000,
        scan_timeout: float | None = None,
        max_concurrency: int = 50,
    ) -> None:
        self._users = user_store
        self._extractor = extractor
        self.scan_limit = scan_limit
        self.scan_timeout = scan_timeout
        self.max_concurrency = max_concurrency

    async def find_similar_users(
        self,
        user_id: str,
        limit: int = 5,
        profile: UserFeatureProfile | None = None,
    ) -> list[SimilarityScore]:
        """Rank the first ``scan_limit`` users by similarity to ``user_id``.

        Pass ``profile`` when the caller already extracted it. Peers whose
        features cannot be extracted are skipped.
        """
        if profile is None:
            profile = await self._extractor.extract_features(user_id)
        if limit <= 0:
            return []

        candidates = [
            uid for uid in await self._users.list_user_ids(self.scan_limit)
            if uid != user_id
        ]
        peers = await best_effort_collect(
            candidates,
            self._extractor.extract_features,
            timeout=self.scan_timeout,
            max_concurrency=self.max_concurrency,
            label="peer",
        )
        if not peers:
            logger.info("No comparable peers found for user %s", user_id)
            return []

        scores = np.array([composite_similarity(profile, peer) for _, peer in peers])
        # Stable sort keeps scan order among equal scores
        order = np.argsort(-scores, kind="stable")[:limit]
        return [
            SimilarityScore(peer_id=peers[i][0], score=float(scores[i]))
            for i in order
        ]
