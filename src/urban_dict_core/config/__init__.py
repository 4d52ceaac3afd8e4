"""Configuration package."""

from urban_dict_core.config.settings import Settings

__all__ = ["Settings"]
