"""Redis-backed implementation of CacheClient."""

from __future__ import annotations

from redis.asyncio import Redis
from redis.exceptions import RedisError

from urban_dict_core.exceptions import CacheError


class RedisCacheClient:
    """Shared cache backed by Redis, using millisecond (PX) expiry."""

    def __init__(self, redis: Redis) -> None:  # type: ignore[type-arg]
        """Initialize with a redis-py asyncio client."""
        self._redis = redis

    async def get(self, key: str) -> str | None:
        """Retrieve a value by key."""
        try:
            value = await self._redis.get(key)
        except RedisError as exc:
            raise CacheError(f"Redis GET failed: {exc}", key=key) from exc
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    async def set(self, key: str, value: str, ttl_ms: int) -> None:
        """Store a value with a millisecond TTL."""
        try:
            await self._redis.set(name=key, value=value, px=ttl_ms)
        except RedisError as exc:
            raise CacheError(f"Redis SET failed: {exc}", key=key) from exc

    async def delete(self, key: str) -> None:
        """Delete a key from the cache."""
        try:
            await self._redis.delete(key)
        except RedisError as exc:
            raise CacheError(f"Redis DEL failed: {exc}", key=key) from exc

    async def exists(self, key: str) -> bool:
        """Check if a key exists."""
        try:
            count = await self._redis.exists(key)
        except RedisError as exc:
            raise CacheError(f"Redis EXISTS failed: {exc}", key=key) from exc
        return bool(count)

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._redis.aclose()
