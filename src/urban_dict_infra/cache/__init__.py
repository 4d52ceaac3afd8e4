"""Cache store implementations of CacheClient."""

from urban_dict_infra.cache.disk_cache import DiskCacheClient
from urban_dict_infra.cache.memory_cache import MemoryCacheClient
from urban_dict_infra.cache.redis_cache import RedisCacheClient

__all__ = ["DiskCacheClient", "MemoryCacheClient", "RedisCacheClient"]
