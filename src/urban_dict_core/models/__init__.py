"""Domain models for definition API responses."""

from urban_dict_core.models.definition import (
    AutocompleteSuggestion,
    DefinitionRecord,
    UpstreamRecord,
)

__all__ = ["AutocompleteSuggestion", "DefinitionRecord", "UpstreamRecord"]
