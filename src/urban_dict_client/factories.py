"""Factory functions for creating cache stores from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from urban_dict_core.exceptions import ConfigurationError
from urban_dict_core.interfaces.cache import CacheClient

if TYPE_CHECKING:
    from urban_dict_core.config.settings import Settings


def create_cache_client(settings: Settings) -> CacheClient:
    """Create the cache store selected by ``settings.cache_backend``.

    ``redis`` connects lazily to ``settings.redis_url``; ``disk`` opens a
    diskcache directory at ``settings.cache_dir``; ``memory`` keeps entries
    in-process only.
    """
    if settings.cache_backend == "redis":
        from redis.asyncio import Redis

        from urban_dict_infra.cache.redis_cache import RedisCacheClient

        return RedisCacheClient(Redis.from_url(settings.redis_url))

    if settings.cache_backend == "disk":
        from urban_dict_infra.cache.disk_cache import DiskCacheClient

        return DiskCacheClient(settings.cache_dir)

    if settings.cache_backend == "memory":
        from urban_dict_infra.cache.memory_cache import MemoryCacheClient

        return MemoryCacheClient()

    msg = f"Unknown cache backend: {settings.cache_backend!r}"
    raise ConfigurationError(msg)


async def close_cache_client(cache: CacheClient) -> None:
    """Release whatever connection or file handle a factory-built store holds."""
    from urban_dict_infra.cache.disk_cache import DiskCacheClient
    from urban_dict_infra.cache.redis_cache import RedisCacheClient

    if isinstance(cache, RedisCacheClient):
        await cache.aclose()
    elif isinstance(cache, DiskCacheClient):
        cache.close()
