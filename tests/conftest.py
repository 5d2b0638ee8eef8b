"""Shared test configuration, pytest markers and an in-memory population."""

from datetime import date

import pytest

from career_engine.config import Settings
from career_engine.services.cache import MemoryCache
from career_engine.services.career.engine import CareerIntelligenceEngine
from career_engine.services.memory_store import (
    InMemoryMarketStore,
    InMemoryTransitionStore,
    InMemoryUserStore,
    PopulationSnapshot,
)

TODAY = date(2025, 6, 1)

POPULATION = {
    "users": [
        {"id": "alice"},
        {"id": "bob"},
        {"id": "carol"},
        {"id": "dave"},
        {"id": "erin"},
        {"id": "newbie"},
    ],
    "user_skills": {
        "alice": [
            {"skill_name": "javascript", "level": 3, "is_certified": True},
            {"skill_name": "react", "level": 3},
        ],
        "bob": [
            {"skill_name": "javascript", "level": 4},
            {"skill_name": "react", "level": 4},
            {"skill_name": "typescript", "level": 3},
            {"skill_name": "system-design", "level": 3},
        ],
        "carol": [
            {"skill_name": "python", "level": 4},
            {"skill_name": "sql", "level": 4},
        ],
        "dave": [
            {"skill_name": "javascript", "level": 3},
            {"skill_name": "typescript", "level": 3},
            {"skill_name": "node", "level": 2},
        ],
        "erin": [
            {"skill_name": "javascript", "level": 5},
            {"skill_name": "react", "level": 5},
            {"skill_name": "system-design", "level": 4},
            {"skill_name": "aws", "level": 3},
        ],
        "newbie": [
            {"skill_name": "html", "level": 2},
        ],
    },
    "experience": {
        # 2.0 years
        "alice": [{"start_date": "2024-09-01"}],
        # 13.5 years
        "bob": [
            {"start_date": "2016-06-01", "end_date": "2019-08-31"},
            {"start_date": "2019-09-01"},
        ],
        # 14.0 years
        "carol": [{"start_date": "2018-01-15"}],
        # 7.5 years
        "dave": [
            {"start_date": "2020-05-01", "end_date": "2022-04-30"},
            {"start_date": "2022-05-01"},
        ],
        # 16.7 years
        "erin": [
            {"start_date": "2012-02-01", "end_date": "2016-12-31"},
            {"start_date": "2017-01-01", "end_date": "2020-12-31"},
            {"start_date": "2021-01-01"},
        ],
    },
    "profiles": {
        "alice": {"target_role": "senior-engineer", "industry_preferences": ["technology"]},
        "bob": {"target_role": "senior-engineer", "industry_preferences": ["technology"]},
        "carol": {"target_role": "data-engineer", "industry_preferences": ["finance"]},
        "dave": {"target_role": "senior-engineer", "industry_preferences": ["technology"]},
        "erin": {"target_role": "staff-engineer", "industry_preferences": ["technology"]},
        "newbie": {"target_role": "junior-developer"},
    },
    "trending_skills": [
        {"skill_name": "typescript", "industry": "technology", "demand_score": 88},
        {"skill_name": "kubernetes", "industry": "technology", "demand_score": 82},
        {"skill_name": "aws", "industry": "technology", "demand_score": 79},
        {"skill_name": "react", "industry": "technology", "demand_score": 75},
        {"skill_name": "python", "industry": "general", "demand_score": 80},
        {"skill_name": "git", "industry": "general", "demand_score": 65},
    ],
    "role_requirements": {
        "senior-engineer": [
            {"skill_name": "javascript", "required_level": 4, "importance": 5},
            {"skill_name": "react", "required_level": 3, "importance": 4},
            {"skill_name": "system-design", "required_level": 4, "importance": 4},
        ],
        "general": [
            {"skill_name": "git", "required_level": 3, "importance": 4},
        ],
    },
    "skills": [
        {"name": "typescript", "difficulty": 2, "market_demand": 88, "salary_boost": 8000,
         "prerequisite_skills": ["javascript"]},
        {"name": "kubernetes", "difficulty": 4, "market_demand": 82, "salary_boost": 15000},
        {"name": "aws", "difficulty": 3, "market_demand": 79, "salary_boost": 12000},
    ],
    "roles": [
        {"name": "senior-engineer", "required_skills": ["javascript", "react", "system-design"],
         "average_salary": 145000},
        {"name": "staff-engineer", "required_skills": ["system-design", "aws", "mentoring"],
         "average_salary": 185000},
        {"name": "engineering-manager", "required_skills": ["mentoring", "hiring"],
         "average_salary": 175000},
    ],
    "learning_resources": [
        {"skill_name": "system-design", "type": "course", "title": "Grokking System Design",
         "rating": 4.5},
        {"skill_name": "system-design", "type": "book",
         "title": "Designing Data-Intensive Applications", "rating": 4.8},
        {"skill_name": "javascript", "type": "book", "title": "You Don't Know JS Yet",
         "rating": 4.6},
        {"skill_name": "typescript", "type": "tutorial", "title": "TypeScript Handbook",
         "provider": "Microsoft", "duration": 10, "rating": 4.7},
    ],
    "transitions": [
        {"user_id": "bob", "from_role": "senior-engineer", "to_role": "staff-engineer",
         "years_to_transition": 3.5, "transition_date": "2023-02-01"},
        {"user_id": "erin", "from_role": "senior-engineer", "to_role": "staff-engineer",
         "years_to_transition": 4.0, "transition_date": "2021-01-01"},
        {"user_id": "erin", "from_role": "engineer", "to_role": "senior-engineer",
         "years_to_transition": 5.0, "transition_date": "2017-01-01"},
        {"user_id": "dave", "from_role": "senior-engineer", "to_role": "engineering-manager",
         "years_to_transition": 2.0, "transition_date": "2024-06-01"},
        {"user_id": "carol", "from_role": "data-engineer", "to_role": "senior-engineer",
         "years_to_transition": 4.5, "transition_date": "2022-09-01"},
    ],
}


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "redis: needs the redis client library, no running server"
    )


@pytest.fixture
def snapshot() -> PopulationSnapshot:
    return PopulationSnapshot.model_validate(POPULATION)


@pytest.fixture
def user_store(snapshot):
    return InMemoryUserStore(snapshot)


@pytest.fixture
def market_store(snapshot):
    return InMemoryMarketStore(snapshot)


@pytest.fixture
def transition_store(snapshot):
    return InMemoryTransitionStore(snapshot)


@pytest.fixture
def engine_settings() -> Settings:
    return Settings(
        peer_count=3,
        similarity_scan_timeout_seconds=None,
        transition_scan_timeout_seconds=None,
    )


@pytest.fixture
def cache() -> MemoryCache:
    return MemoryCache()


@pytest.fixture
def engine(user_store, market_store, transition_store, cache, engine_settings):
    return CareerIntelligenceEngine(
        user_store=user_store,
        market_store=market_store,
        transition_store=transition_store,
        cache=cache,
        settings=engine_settings,
        today=lambda: TODAY,
    )
