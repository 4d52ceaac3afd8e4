"""In-process implementation of CacheClient with per-entry expiry."""

from __future__ import annotations

import time
from collections.abc import Callable


class MemoryCacheClient:
    """Dict-backed cache for tests and single-process use.

    ``clock`` returns seconds and defaults to ``time.monotonic``; inject a
    fake clock to control expiry in tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}

    def _live_entry(self, key: str) -> tuple[str, float] | None:
        """Return the entry for key, dropping it if expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry[1] <= self._clock():
            del self._entries[key]
            return None
        return entry

    async def get(self, key: str) -> str | None:
        """Retrieve a value by key, or None if missing/expired."""
        entry = self._live_entry(key)
        return entry[0] if entry else None

    async def set(self, key: str, value: str, ttl_ms: int) -> None:
        """Store a value with a millisecond TTL, dropping any expired entries."""
        now = self._clock()
        self._prune(now)
        self._entries[key] = (value, now + ttl_ms / 1000)

    async def delete(self, key: str) -> None:
        """Delete a key from the cache."""
        self._entries.pop(key, None)

    async def exists(self, key: str) -> bool:
        """Check if a key exists and is not expired."""
        return self._live_entry(key) is not None

    def _prune(self, now: float) -> None:
        expired = [key for key, (_, deadline) in self._entries.items() if deadline <= now]
        for key in expired:
            del self._entries[key]

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()
