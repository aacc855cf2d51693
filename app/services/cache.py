"""Read-through cache for user profile snapshots: no-op by default, Redis when configured."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import redis

from app.core.config import Settings

logger = logging.getLogger(__name__)

PROFILE_KEY_PREFIX = "user:profile"


def profile_cache_key(user_id: str) -> str:
    return f"{PROFILE_KEY_PREFIX}:{user_id}"


class ProfileCache(Protocol):
    """Optional optimization; callers must behave the same when every get() misses."""

    def get(self, key: str) -> dict[str, Any] | None: ...

    def set(self, key: str, value: dict[str, Any], ttl_seconds: int) -> None: ...

    def delete(self, key: str) -> None: ...

    def ping(self) -> bool | None:
        """True if reachable, False if not, None for a cache that stores nothing."""
        ...


class NullProfileCache:
    """Cache that never stores anything."""

    def get(self, key: str) -> dict[str, Any] | None:
        return None

    def set(self, key: str, value: dict[str, Any], ttl_seconds: int) -> None:
        return None

    def delete(self, key: str) -> None:
        return None

    def ping(self) -> bool | None:
        return None


class RedisProfileCache:
    """
    JSON values in Redis with a TTL.

    Redis errors are logged and treated as a miss: the database stays the source of truth.
    """

    def __init__(self, client: redis.Redis) -> None:
        self.r = client

    def get(self, key: str) -> dict[str, Any] | None:
        try:
            raw = self.r.get(key)
        except redis.RedisError as e:
            logger.warning("Cache get failed for %s: %s", key, e)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Discarding undecodable cache entry %s", key)
            return None

    def set(self, key: str, value: dict[str, Any], ttl_seconds: int) -> None:
        try:
            self.r.set(key, json.dumps(value, default=str), ex=max(1, ttl_seconds))
        except redis.RedisError as e:
            logger.warning("Cache set failed for %s: %s", key, e)

    def delete(self, key: str) -> None:
        try:
            self.r.delete(key)
        except redis.RedisError as e:
            logger.warning("Cache delete failed for %s: %s", key, e)

    def ping(self) -> bool | None:
        try:
            return bool(self.r.ping())
        except redis.RedisError as e:
            logger.warning("Cache ping failed: %s", e)
            return False


def build_profile_cache(settings: Settings) -> ProfileCache:
    """Redis cache when REDIS_URL is set, otherwise the no-op cache."""
    if not settings.REDIS_URL:
        return NullProfileCache()
    client = redis.Redis.from_url(
        settings.REDIS_URL,
        decode_responses=True,
        socket_timeout=2.0,
        socket_connect_timeout=2.0,
    )
    return RedisProfileCache(client)
