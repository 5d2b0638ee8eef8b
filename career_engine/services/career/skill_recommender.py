"""Skill Recommender: blends three signals into ranked skill suggestions.

    market demand    0.40 * demand_score of trending skills in the user's industries
    peer frequency   0.35 * share of similar peers holding the skill
    role requirement 0.25 * importance / 5 for skills the target role needs

Skills the user already holds never enter the score map.
"""

import asyncio
import logging
from collections import Counter

from career_engine.models.schemas.feature_profile import UserFeatureProfile
from career_engine.models.schemas.similarity import SimilarityScore
from career_engine.models.schemas.skill_recommendation import LearningResource, SkillRecommendation
from career_engine.services.career.mastery import difficulty_tier, estimate_time_to_mastery
from career_engine.services.scan import best_effort_collect
from career_engine.services.stores import MarketStore, UserStore

logger = logging.getLogger(__name__)

W_MARKET = 0.4
W_PEERS = 0.35
W_ROLE = 0.25

GENERAL = "general"
TRENDING_LIMIT = 50
RESOURCES_PER_SKILL = 5
MAX_RELEVANCE = 100.0

# Catalog fallbacks for skills without metadata
DEFAULT_DIFFICULTY = 1
DEFAULT_MARKET_DEMAND = 50.0
DEFAULT_SALARY_BOOST = 5000.0


class SkillRecommender:
    def __init__(self, market_store: MarketStore, user_store: UserStore) -> None:
        self._market = market_store
        self._users = user_store

    async def score_skills(
        self,
        profile: UserFeatureProfile,
        peers: list[SimilarityScore],
    ) -> dict[str, float]:
        """Accumulate raw scores for every candidate skill, in first-seen order."""
        held = set(profile.skills)
        scores: dict[str, float] = {}

        def _add(skill: str, amount: float) -> None:
            if skill not in held:
                scores[skill] = scores.get(skill, 0.0) + amount

        for industry in profile.industry_preferences or (GENERAL,):
            for trend in await self._market.get_trending_skills(industry, TRENDING_LIMIT):
                _add(trend.skill_name, trend.demand_score * W_MARKET)

        if peers:
            peer_skills = await best_effort_collect(
                [p.peer_id for p in peers],
                self._users.get_user_skills,
                label="peer skill set",
            )
            tally: Counter[str] = Counter()
            for _, rows in peer_skills:
                tally.update(dict.fromkeys((r.skill_name for r in rows), 1))
            for skill, frequency in tally.most_common():
                _add(skill, (frequency / len(peers)) * W_PEERS)

        role = profile.target_role if profile.has_target_role else GENERAL
        for req in await self._market.get_role_required_skills(role):
            _add(req.skill_name, (req.importance / 5) * W_ROLE)

        return scores

    async def recommend(
        self,
        profile: UserFeatureProfile,
        peers: list[SimilarityScore],
        top_n: int = 10,
    ) -> list[SkillRecommendation]:
        scores = await self.score_skills(profile, peers)
        ranked = sorted(scores.items(), key=lambda kv: kv[1], reverse=True)[:top_n]
        logger.debug(
            "Scored %d candidate skills for user %s, keeping %d",
            len(scores), profile.user_id, len(ranked),
        )
        return list(await asyncio.gather(*(self._enrich(skill, score) for skill, score in ranked)))

    async def _enrich(self, skill: str, score: float) -> SkillRecommendation:
        entry, resources = await asyncio.gather(
            self._market.get_skill(skill),
            self._market.get_learning_resources(skill, RESOURCES_PER_SKILL),
        )
        difficulty = (entry.difficulty if entry else None) or DEFAULT_DIFFICULTY
        return SkillRecommendation(
            skill=skill,
            relevance_score=max(0.0, min(score, MAX_RELEVANCE)),
            difficulty=difficulty_tier(difficulty),
            market_demand=(entry.market_demand if entry else None) or DEFAULT_MARKET_DEMAND,
            salary_boost=(entry.salary_boost if entry else None) or DEFAULT_SALARY_BOOST,
            prerequisite_skills=list(entry.prerequisite_skills) if entry else [],
            time_to_mastery_hours=estimate_time_to_mastery(difficulty),
            learning_resources=[
                LearningResource(
                    type=r.type,
                    title=r.title,
                    provider=r.provider,
                    duration_hours=r.duration,
                    cost=r.cost,
                    rating=r.rating,
                    url=r.url,
                )
                for r in resources
            ],
        )
