"""Public interface re-exports for urban_dict_core."""

from urban_dict_core.interfaces.cache import CacheClient

__all__ = ["CacheClient"]
