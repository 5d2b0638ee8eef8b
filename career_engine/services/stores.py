"""Collaborator interfaces consumed by the engine.

Implemented elsewhere (user service, market-data layer, transition history,
cache); the engine only depends on these protocols and receives concrete
instances through its constructor.
"""

from typing import Protocol

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


class UserStore(Protocol):
    async def get_user(self, user_id: str) -> UserRecord | None: ...

    async def get_user_skills(self, user_id: str) -> list[UserSkillRecord]: ...

    async def get_user_experience_history(self, user_id: str) -> list[ExperienceRecord]:
        """Employment history, most recent start first."""
        ...

    async def get_user_profile(self, user_id: str) -> UserProfileRecord | None: ...

    async def list_user_ids(self, limit: int) -> list[str]:
        """First ``limit`` user ids in store order."""
        ...


class MarketStore(Protocol):
    async def get_trending_skills(self, industry: str, limit: int) -> list[TrendingSkill]:
        """Trending skills for an industry, highest demand first."""
        ...

    async def get_role_required_skills(self, role: str) -> list[RoleRequirement]: ...

    async def get_skill(self, name: str) -> SkillCatalogEntry | None: ...

    async def get_role(self, name: str) -> RoleCatalogEntry | None: ...

    async def get_learning_resources(self, skill: str, limit: int) -> list[LearningResourceRecord]:
        """Learning resources for a skill, best rated first."""
        ...

    async def role_exists(self, role: str) -> bool: ...


class TransitionStore(Protocol):
    async def get_career_transitions(
        self, peer_ids: list[str], limit: int
    ) -> list[CareerTransition]:
        """At most ``limit`` transitions recorded for the given users, newest first."""
        ...


class CacheBackend(Protocol):
    """Key-value cache holding JSON strings.

    Implementations raise CacheUnavailableError when the backend is down.
    """

    async def get(self, key: str) -> str | None: ...

    async def set_with_ttl(self, key: str, value: str, seconds: int) -> None: ...

    async def delete_prefix(self, prefix: str) -> int: ...
