"""Skill Gap Analyzer: per-skill deficits against a target role."""

import asyncio
import logging

from career_engine.models.schemas.feature_profile import UserFeatureProfile
from career_engine.models.schemas.records import RoleRequirement
from career_engine.models.schemas.skill_gap import PRIORITY_ORDER, SkillGap
from career_engine.services.career.mastery import estimate_time_to_mastery, gap_priority
from career_engine.services.errors import NotFoundError
from career_engine.services.stores import MarketStore

logger = logging.getLogger(__name__)

RESOURCES_PER_GAP = 3


class SkillGapAnalyzer:
    def __init__(self, market_store: MarketStore) -> None:
        self._market = market_store

    async def resolve_role(self, profile: UserFeatureProfile, target_role: str | None) -> str:
        """Explicit roles must exist; the profile's own role is taken as is."""
        if target_role:
            if not await self._market.role_exists(target_role):
                raise NotFoundError("Role", target_role)
            return target_role
        return profile.target_role

    async def calculate_gaps(
        self,
        profile: UserFeatureProfile,
        target_role: str | None = None,
    ) -> list[SkillGap]:
        role = await self.resolve_role(profile, target_role)
        requirements = await self._market.get_role_required_skills(role)
        if not requirements:
            logger.info("No requirements recorded for role %r", role)
            return []

        deficits = []
        for req in requirements:
            current = profile.skill_levels.get(req.skill_name, 0.0)
            if req.required_level > current:
                deficits.append((req, current))

        gaps = await asyncio.gather(*(self._build_gap(req, current) for req, current in deficits))
        # sorted() is stable: equal priorities keep requirement order
        return sorted(gaps, key=lambda g: PRIORITY_ORDER[g.priority])

    async def _build_gap(self, req: RoleRequirement, current: float) -> SkillGap:
        gap = req.required_level - current
        resources = await self._market.get_learning_resources(req.skill_name, RESOURCES_PER_GAP)
        return SkillGap(
            skill=req.skill_name,
            current_level=current,
            required_level=req.required_level,
            gap=gap,
            priority=gap_priority(gap, req.importance),
            estimated_time_to_learn_hours=estimate_time_to_mastery(req.required_level),
            recommended_resources=[r.title for r in resources],
        )
