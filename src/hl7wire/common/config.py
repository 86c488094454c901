"""Application configuration using Pydantic Settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

from hl7wire.common.constants import (
    DEFAULT_COMPONENT_SEPARATOR,
    DEFAULT_ESCAPE_CHARACTER,
    DEFAULT_FIELD_SEPARATOR,
    DEFAULT_HL7_VERSION,
    DEFAULT_REPETITION_SEPARATOR,
    DEFAULT_SEGMENT_SEPARATOR,
    DEFAULT_SUBCOMPONENT_SEPARATOR,
)
from hl7wire.common.schemas import DelimiterConfig


class HL7WireConfig(BaseSettings):
    """Configuration loaded from environment variables."""

    field_separator: str = Field(default=DEFAULT_FIELD_SEPARATOR, min_length=1, max_length=1)
    component_separator: str = Field(default=DEFAULT_COMPONENT_SEPARATOR, min_length=1, max_length=1)
    repetition_separator: str = Field(default=DEFAULT_REPETITION_SEPARATOR, min_length=1, max_length=1)
    escape_character: str = Field(default=DEFAULT_ESCAPE_CHARACTER, min_length=1, max_length=1)
    subcomponent_separator: str = Field(default=DEFAULT_SUBCOMPONENT_SEPARATOR, min_length=1, max_length=1)
    segment_separator: str = Field(default=DEFAULT_SEGMENT_SEPARATOR, min_length=1)
    segment_ending_bar: bool = True
    hl7_version: str = DEFAULT_HL7_VERSION

    keep_empty_subfields: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    model_config = {"env_prefix": "HL7WIRE_", "case_sensitive": False}

    def to_delimiter_config(self) -> DelimiterConfig:
        """Build the delimiter set a new message starts from."""
        return DelimiterConfig(
            field_separator=self.field_separator,
            component_separator=self.component_separator,
            repetition_separator=self.repetition_separator,
            escape_character=self.escape_character,
            subcomponent_separator=self.subcomponent_separator,
            segment_separator=self.segment_separator,
            segment_ending_bar=self.segment_ending_bar,
            hl7_version=self.hl7_version,
        )


__all__ = ["HL7WireConfig"]
