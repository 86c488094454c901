"""Pydantic v2 schemas for hl7wire delimiter configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from hl7wire.common.constants import (
    DEFAULT_COMPONENT_SEPARATOR,
    DEFAULT_ESCAPE_CHARACTER,
    DEFAULT_FIELD_SEPARATOR,
    DEFAULT_HL7_VERSION,
    DEFAULT_REPETITION_SEPARATOR,
    DEFAULT_SEGMENT_SEPARATOR,
    DEFAULT_SUBCOMPONENT_SEPARATOR,
)


class DelimiterConfig(BaseModel):
    """Active delimiter set of a message.

    Frozen: a message replaces its config with ``model_copy(update=...)``
    whenever the header segment redefines a delimiter.
    """

    model_config = ConfigDict(frozen=True)

    field_separator: str = Field(default=DEFAULT_FIELD_SEPARATOR, min_length=1, max_length=1)
    component_separator: str = Field(default=DEFAULT_COMPONENT_SEPARATOR, min_length=1, max_length=1)
    repetition_separator: str = Field(default=DEFAULT_REPETITION_SEPARATOR, min_length=1, max_length=1)
    escape_character: str = Field(default=DEFAULT_ESCAPE_CHARACTER, min_length=1, max_length=1)
    subcomponent_separator: str = Field(default=DEFAULT_SUBCOMPONENT_SEPARATOR, min_length=1, max_length=1)
    segment_separator: str = Field(default=DEFAULT_SEGMENT_SEPARATOR, min_length=1)
    segment_ending_bar: bool = True
    hl7_version: str = DEFAULT_HL7_VERSION

    @property
    def encoding_characters(self) -> str:
        """MSH-2 value: component, repetition, escape, subcomponent."""
        return (
            f"{self.component_separator}{self.repetition_separator}"
            f"{self.escape_character}{self.subcomponent_separator}"
        )


__all__ = ["DelimiterConfig"]
