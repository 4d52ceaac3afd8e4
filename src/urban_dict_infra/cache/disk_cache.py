"""diskcache-backed implementation of CacheClient."""

from __future__ import annotations

import asyncio
import sqlite3
from pathlib import Path

import diskcache

from urban_dict_core.exceptions import CacheError

_DISK_ERRORS = (diskcache.Timeout, sqlite3.Error, OSError)


class DiskCacheClient:
    """Persistent local cache backed by diskcache (SQLite under the hood)."""

    def __init__(self, cache_dir: Path) -> None:
        """Initialize with a cache directory."""
        cache_dir.mkdir(parents=True, exist_ok=True)
        self._cache = diskcache.Cache(str(cache_dir))

    async def get(self, key: str) -> str | None:
        """Retrieve a value by key."""
        try:
            result = await asyncio.to_thread(self._cache.get, key)
        except _DISK_ERRORS as exc:
            raise CacheError(f"Disk cache read failed: {exc}", key=key) from exc
        if result is None:
            return None
        return str(result)

    async def set(self, key: str, value: str, ttl_ms: int) -> None:
        """Store a value with TTL (diskcache expiry is in seconds)."""
        try:
            await asyncio.to_thread(self._cache.set, key, value, expire=ttl_ms / 1000)
        except _DISK_ERRORS as exc:
            raise CacheError(f"Disk cache write failed: {exc}", key=key) from exc

    async def delete(self, key: str) -> None:
        """Delete a key from the cache."""
        try:
            await asyncio.to_thread(self._cache.delete, key)
        except _DISK_ERRORS as exc:
            raise CacheError(f"Disk cache delete failed: {exc}", key=key) from exc

    async def exists(self, key: str) -> bool:
        """Check if a key exists."""
        try:
            result = await asyncio.to_thread(lambda: key in self._cache)
        except _DISK_ERRORS as exc:
            raise CacheError(f"Disk cache lookup failed: {exc}", key=key) from exc
        return bool(result)

    def close(self) -> None:
        """Close the cache."""
        self._cache.close()
