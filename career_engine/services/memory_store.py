"""In-memory collaborator stores backed by a JSON population snapshot.

Used by the demo service and the test suite in place of the real user,
market and transition services.
"""

import logging
from datetime import date
from pathlib import Path

from pydantic import BaseModel

from career_engine.models.schemas.records import (
    CareerTransition,
    ExperienceRecord,
    LearningResourceRecord,
    RoleCatalogEntry,
    RoleRequirement,
    SkillCatalogEntry,
    TrendingSkill,
    UserProfileRecord,
    UserRecord,
    UserSkillRecord,
)

logger = logging.getLogger(__name__)


class PopulationSnapshot(BaseModel):
    """Everything the in-memory stores serve, keyed the way the stores query it."""
    users: list[UserRecord] = []
    user_skills: dict[str, list[UserSkillRecord]] = {}
    experience: dict[str, list[ExperienceRecord]] = {}
    profiles: dict[str, UserProfileRecord] = {}
    trending_skills: list[TrendingSkill] = []
    role_requirements: dict[str, list[RoleRequirement]] = {}
    skills: list[SkillCatalogEntry] = []
    roles: list[RoleCatalogEntry] = []
    learning_resources: list[LearningResourceRecord] = []
    transitions: list[CareerTransition] = []


def load_snapshot(path: str | Path) -> PopulationSnapshot:
    """Parse a population snapshot from a JSON file."""
    path = Path(path)
    snapshot = PopulationSnapshot.model_validate_json(path.read_text(encoding="utf-8"))
    logger.info(
        "Loaded population snapshot from %s (%d users, %d transitions)",
        path, len(snapshot.users), len(snapshot.transitions),
    )
    return snapshot


class InMemoryUserStore:
    def __init__(self, snapshot: PopulationSnapshot) -> None:
        self._snapshot = snapshot
        self._users = {u.id: u for u in snapshot.users}

    async def get_user(self, user_id: str) -> UserRecord | None:
        return self._users.get(user_id)

    async def get_user_skills(self, user_id: str) -> list[UserSkillRecord]:
        return list(self._snapshot.user_skills.get(user_id, []))

    async def get_user_experience_history(self, user_id: str) -> list[ExperienceRecord]:
        history = self._snapshot.experience.get(user_id, [])
        return sorted(history, key=lambda e: e.start_date, reverse=True)

    async def get_user_profile(self, user_id: str) -> UserProfileRecord | None:
        return self._snapshot.profiles.get(user_id)

    async def list_user_ids(self, limit: int) -> list[str]:
        return [u.id for u in self._snapshot.users[:limit]]


class InMemoryMarketStore:
    def __init__(self, snapshot: PopulationSnapshot) -> None:
        self._snapshot = snapshot
        self._skills = {s.name: s for s in snapshot.skills}
        self._roles = {r.name: r for r in snapshot.roles}

    async def get_trending_skills(self, industry: str, limit: int) -> list[TrendingSkill]:
        matching = [t for t in self._snapshot.trending_skills if t.industry == industry]
        matching.sort(key=lambda t: t.demand_score, reverse=True)
        return matching[:limit]

    async def get_role_required_skills(self, role: str) -> list[RoleRequirement]:
        return list(self._snapshot.role_requirements.get(role, []))

    async def get_skill(self, name: str) -> SkillCatalogEntry | None:
        return self._skills.get(name)

    async def get_role(self, name: str) -> RoleCatalogEntry | None:
        return self._roles.get(name)

    async def get_learning_resources(self, skill: str, limit: int) -> list[LearningResourceRecord]:
        matching = [r for r in self._snapshot.learning_resources if r.skill_name == skill]
        matching.sort(key=lambda r: r.rating, reverse=True)
        return matching[:limit]

    async def role_exists(self, role: str) -> bool:
        return role in self._roles or role in self._snapshot.role_requirements


class InMemoryTransitionStore:
    def __init__(self, snapshot: PopulationSnapshot) -> None:
        self._snapshot = snapshot

    async def get_career_transitions(
        self, peer_ids: list[str], limit: int
    ) -> list[CareerTransition]:
        wanted = set(peer_ids)
        matching = [t for t in self._snapshot.transitions if t.user_id in wanted]
        # Undated transitions sort last
        matching.sort(key=lambda t: t.transition_date or date.min, reverse=True)
        return matching[:limit]
