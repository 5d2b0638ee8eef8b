"""Cache backends and the check-compute-store wrapper around engine entry points.

compute_or_cache is not atomic: two concurrent misses on the
same key both compute and both write. An unreachable cache never fails a
request; the value is computed directly instead.
"""

import logging
import re
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar
from urllib.parse import quote

import redis.asyncio as aioredis
from pydantic import TypeAdapter, ValidationError
from redis.asyncio.retry import Retry
from redis.backoff import NoBackoff
from redis.exceptions import RedisError

from career_engine.services.errors import CacheUnavailableError
from career_engine.services.stores import CacheBackend

logger = logging.getLogger(__name__)

T = TypeVar("T")

KEY_NAMESPACE = "career"

_GLOB_SPECIAL = re.compile(r"([\\*?\[\]])")


def cache_key(operation: str, user_id: str, **params: object) -> str:
    """Build a deterministic key: ``career:{user_id}:{operation}[:name=value...]``.

    The user id is percent-encoded so one user's prefix never matches another
    user's keys. None-valued parameters are left out so that
    ``target_role=None`` and an omitted target role share a key.
    """
    parts = [KEY_NAMESPACE, _encode_user(user_id), operation]
    parts.extend(f"{name}={value}" for name, value in sorted(params.items()) if value is not None)
    return ":".join(parts)


def user_key_prefix(user_id: str) -> str:
    return f"{KEY_NAMESPACE}:{_encode_user(user_id)}:"


def _encode_user(user_id: str) -> str:
    return quote(user_id, safe="")


def redis_match_pattern(prefix: str) -> str:
    """SCAN MATCH pattern for keys starting with ``prefix``, glob characters escaped."""
    return _GLOB_SPECIAL.sub(r"\\\1", prefix) + "*"


class MemoryCache:
    """Process-local TTL cache. Expired entries are evicted lazily on read."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[float, str]] = {}

    async def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def set_with_ttl(self, key: str, value: str, seconds: int) -> None:
        self._entries[key] = (self._clock() + seconds, value)

    async def delete_prefix(self, prefix: str) -> int:
        doomed = [k for k in self._entries if k.startswith(prefix)]
        for key in doomed:
            del self._entries[key]
        return len(doomed)

    def __len__(self) -> int:
        return len(self._entries)


class RedisCache:
    """Redis-backed cache. Connection failures surface as CacheUnavailableError.

    Commands are not retried unless ``retries`` is set.
    """

    def __init__(self, url: str, socket_timeout: float = 5.0, retries: int = 0) -> None:
        self._client = aioredis.from_url(
            url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
            retry=Retry(NoBackoff(), retries),
        )

    async def get(self, key: str) -> str | None:
        try:
            return await self._client.get(key)
        except (RedisError, OSError) as e:
            raise CacheUnavailableError(f"redis GET failed: {e}") from e

    async def set_with_ttl(self, key: str, value: str, seconds: int) -> None:
        try:
            await self._client.setex(key, seconds, value)
        except (RedisError, OSError) as e:
            raise CacheUnavailableError(f"redis SETEX failed: {e}") from e

    async def delete_prefix(self, prefix: str) -> int:
        try:
            keys = [key async for key in self._client.scan_iter(match=redis_match_pattern(prefix))]
            if not keys:
                return 0
            return await self._client.delete(*keys)
        except (RedisError, OSError) as e:
            raise CacheUnavailableError(f"redis DELETE failed: {e}") from e

    async def close(self) -> None:
        await self._client.aclose()


async def compute_or_cache(
    cache: CacheBackend,
    key: str,
    ttl_seconds: int,
    compute: Callable[[], Awaitable[T]],
    adapter: TypeAdapter[T],
) -> T:
    """Return the cached value for ``key`` or compute, store and return it."""
    try:
        cached = await cache.get(key)
    except CacheUnavailableError as e:
        logger.warning("Cache read failed for %s, computing directly: %s", key, e)
        cached = None

    if cached is not None:
        try:
            value = adapter.validate_json(cached)
            logger.debug("Cache hit: %s", key)
            return value
        except ValidationError as e:
            logger.warning("Discarding unreadable cache entry %s: %s", key, e)

    logger.debug("Cache miss: %s", key)
    value = await compute()

    try:
        await cache.set_with_ttl(key, adapter.dump_json(value).decode("utf-8"), ttl_seconds)
    except CacheUnavailableError as e:
        logger.warning("Cache write failed for %s: %s", key, e)
    return value
