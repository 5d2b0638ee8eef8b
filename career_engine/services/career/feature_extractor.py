"""Feature Extractor: builds a UserFeatureProfile from raw user-store rows."""

import asyncio
import logging
from collections.abc import Callable
from datetime import date

from career_engine.models.schemas.feature_profile import NOT_SPECIFIED, UserFeatureProfile
from career_engine.models.schemas.records import ExperienceRecord, UserSkillRecord
from career_engine.services.career.mastery import round_half_up
from career_engine.services.errors import NotFoundError
from career_engine.services.stores import UserStore

logger = logging.getLogger(__name__)


def compute_years_of_experience(history: list[ExperienceRecord], today: date) -> float:
    """Approximate tenure in calendar years.

    Span since the earliest role start, plus the summed role durations
    averaged over the number of roles. Open-ended roles run until today.
    """
    if not history:
        return 0.0
    earliest = min(e.start_date for e in history)
    span = today.year - earliest.year
    durations = sum((e.end_date or today).year - e.start_date.year for e in history)
    years = span + durations / len(history)
    return max(0.0, round_half_up(years, 1))


def compute_experience_level(skills: list[UserSkillRecord]) -> float:
    total = sum(s.level or 0 for s in skills)
    return total / max(len(skills), 1)


class FeatureExtractor:
    def __init__(self, user_store: UserStore, today: Callable[[], date] = date.today) -> None:
        self._users = user_store
        self._today = today

    async def extract_features(self, user_id: str) -> UserFeatureProfile:
        user, skills, profile, history = await asyncio.gather(
            self._users.get_user(user_id),
            self._users.get_user_skills(user_id),
            self._users.get_user_profile(user_id),
            self._users.get_user_experience_history(user_id),
        )
        if user is None:
            raise NotFoundError("User", user_id)

        held = tuple(dict.fromkeys(s.skill_name for s in skills))
        levels: dict[str, float] = {}
        for s in skills:
            levels[s.skill_name] = float(s.level or 0)
        certified = tuple(dict.fromkeys(s.skill_name for s in skills if s.is_certified))

        return UserFeatureProfile(
            user_id=user_id,
            skills=held,
            skill_levels=levels,
            experience_level=compute_experience_level(skills),
            years_of_experience=compute_years_of_experience(history, self._today()),
            target_role=(profile.target_role if profile else None) or NOT_SPECIFIED,
            industry_preferences=tuple(profile.industry_preferences) if profile else (),
            certifications=certified,
            salary_expectation=profile.salary_expectation if profile else 0.0,
            work_style=(profile.work_style if profile else None) or "flexible",
            learning_style=(profile.learning_style if profile else None) or "mixed",
            project_experience=dict(profile.project_experience) if profile else {},
        )
