"""Cache-aside client for the Urban Dictionary API."""

from urban_dict_client.client import DefinitionClient
from urban_dict_core.exceptions import (
    CacheError,
    ConfigurationError,
    UpstreamError,
    UrbanDictError,
)
from urban_dict_core.models import AutocompleteSuggestion, DefinitionRecord

__all__ = [
    "AutocompleteSuggestion",
    "CacheError",
    "ConfigurationError",
    "DefinitionClient",
    "DefinitionRecord",
    "UpstreamError",
    "UrbanDictError",
]
