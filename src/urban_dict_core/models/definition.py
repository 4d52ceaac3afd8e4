"""Definition and autocomplete response models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator


class UpstreamRecord(BaseModel):
    """Base for records copied from upstream JSON objects.

    Values are taken verbatim. ``null`` or missing fields fall back to the
    field default and unknown keys are kept.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    @field_validator("*", mode="before")
    @classmethod
    def _null_to_default(cls, value: Any, info: ValidationInfo) -> Any:  # noqa: ANN401
        """Replace an upstream ``null`` with the field's default."""
        if value is None and info.field_name is not None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value

    @classmethod
    def from_upstream(cls, data: Mapping[str, Any]) -> Self:
        """Build a record from one upstream object.

        Values that do not fit the declared field types are kept as sent
        rather than rejected.
        """
        try:
            return cls.model_validate(data)
        except ValidationError:
            return cls.model_construct(**{k: v for k, v in data.items() if v is not None})


class DefinitionRecord(UpstreamRecord):
    """A single user-submitted definition, as returned by ``random`` and ``define``.

    Field names match the upstream JSON keys.
    """

    defid: int = Field(default=0, description="Upstream definition id")
    word: str = Field(default="", description="The defined term")
    definition: str = Field(default="", description="Definition text")
    example: str = Field(default="", description="Usage example")
    author: str = Field(default="", description="Submitting user")
    permalink: str = Field(default="", description="Canonical URL of the definition")
    thumbs_up: int = Field(default=0, description="Upvote count")
    thumbs_down: int = Field(default=0, description="Downvote count")
    sound_urls: list[str] = Field(default_factory=list, description="Pronunciation audio URLs")
    current_vote: str = Field(default="", description="Vote cast by the requesting user, if any")
    written_on: str = Field(default="", description="ISO timestamp of submission")


class AutocompleteSuggestion(UpstreamRecord):
    """An ``autocomplete-extra`` suggestion, passed through as-is."""

    term: str = Field(default="", description="Suggested term")
    preview: str = Field(default="", description="Short preview of the top definition")
