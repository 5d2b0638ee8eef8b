"""Shared dependencies for API routes."""

import logging

from career_engine.config import settings
from career_engine.services.cache import MemoryCache, RedisCache
from career_engine.services.career.engine import CareerIntelligenceEngine
from career_engine.services.memory_store import (
    InMemoryMarketStore,
    InMemoryTransitionStore,
    InMemoryUserStore,
    load_snapshot,
)
from career_engine.services.stores import CacheBackend

logger = logging.getLogger(__name__)

_engine: CareerIntelligenceEngine | None = None


def _build_cache() -> CacheBackend:
    if settings.cache_backend == "redis":
        logger.info("Using Redis cache at %s", settings.redis_url)
        return RedisCache(settings.redis_url, socket_timeout=settings.redis_socket_timeout_seconds)
    return MemoryCache()


def get_engine() -> CareerIntelligenceEngine:
    global _engine
    if _engine is None:
        snapshot = load_snapshot(settings.seed_data_path)
        _engine = CareerIntelligenceEngine(
            user_store=InMemoryUserStore(snapshot),
            market_store=InMemoryMarketStore(snapshot),
            transition_store=InMemoryTransitionStore(snapshot),
            cache=_build_cache(),
            settings=settings,
        )
    return _engine


async def close_engine() -> None:
    """Release the engine's cache connection, if it holds one."""
    global _engine
    if _engine is None:
        return
    close = getattr(_engine.cache, "close", None)
    if close is not None:
        await close()
        logger.info("Closed engine cache")
    _engine = None
