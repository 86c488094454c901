"""HL7 v2.x message: parsing, serialization and segment editing.

The flow is:
1. Split raw text into segment lines
2. Read the delimiters from the fixed-width preamble of the first line
3. Split every line into fields with those delimiters
4. Decompose each field into components and subcomponents
5. Build Segment / ControlSegment objects and append them

Serialization walks the segments in order, re-deriving the delimiters from
the first segment each time, so edits to the header are always honored.

Usage:
    from hl7wire.model import Message, parse_message

    message = parse_message(raw_text)
    pid = message.get_first_segment_instance("PID")
    print(message.serialize())
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator

from hl7wire.common.constants import (
    CONTROL_PATTERN,
    CONTROL_SEGMENT_NAME,
    ENCODING_PATTERN,
    HeaderField,
)
from hl7wire.common.errors import EmptyMessageError, IndexOutOfRangeError, InvalidMessageError
from hl7wire.common.schemas import DelimiterConfig
from hl7wire.model.control import ControlSegment
from hl7wire.model.fields import FieldValue, Scalar, compose, decompose, is_blank
from hl7wire.model.segment import Segment

logger = logging.getLogger(__name__)


class Message:
    """An ordered list of segments plus the delimiter set that governs them.

    Whenever the message holds segments, its delimiter configuration is a
    view of the first segment's fields 1, 2 and 12. It is re-derived before
    serialization and whenever it is read through :attr:`config`.
    """

    def __init__(
        self,
        text: str | None = None,
        config: DelimiterConfig | None = None,
        *,
        keep_empty_subfields: bool = False,
    ) -> None:
        self._segments: list[Segment] = []
        self._config = config or DelimiterConfig()
        self._keep_empty_subfields = keep_empty_subfields
        if text:
            self._parse(text)

    @classmethod
    def parse(
        cls,
        text: str,
        config: DelimiterConfig | None = None,
        *,
        keep_empty_subfields: bool = False,
    ) -> Message:
        """Parse raw text, raising InvalidMessageError on empty input."""
        if not text or not text.strip():
            raise InvalidMessageError("message is empty")
        return cls(text, config, keep_empty_subfields=keep_empty_subfields)

    # ── Parsing ──

    def _parse(self, text: str) -> None:
        boundary = re.compile(f"[\r\n{re.escape(self._config.segment_separator)}]")
        lines = [line.strip() for line in boundary.split(text)]
        lines = [line for line in lines if line]
        if not lines:
            raise InvalidMessageError("no segments found")

        match = CONTROL_PATTERN.match(lines[0])
        if match is None:
            raise InvalidMessageError("invalid control segment")
        _, field_sep, component_sep, repetition_sep, escape_char, subcomponent_sep, field_sep_ctrl = match.groups()
        if field_sep != field_sep_ctrl:
            raise InvalidMessageError("field separator invalid")

        self._config = self._config.model_copy(
            update={
                "field_separator": field_sep,
                "component_separator": component_sep,
                "repetition_separator": repetition_sep,
                "escape_character": escape_char,
                "subcomponent_separator": subcomponent_sep,
            }
        )

        segments = [self._parse_segment(line, header_line=(i == 0)) for i, line in enumerate(lines)]
        for segment in segments:
            self.add_segment(segment)
        logger.debug("Parsed %d segments (field separator %r)", len(segments), field_sep)

    def _parse_segment(self, line: str, header_line: bool = False) -> Segment:
        config = self._config
        tokens = line.split(config.field_separator)
        name = tokens[0].upper()
        values = tokens[1:]
        # A terminating field separator is the segment ending bar, not an empty field
        if config.segment_ending_bar and values and values[-1] == "":
            values.pop()

        if name == CONTROL_SEGMENT_NAME:
            header: list[FieldValue] = [Scalar(config.field_separator)]
            if values:
                header.append(Scalar(values[0]))
                header.extend(self.extract_components_from_field(value) for value in values[1:])
            return ControlSegment.from_fields(header)

        if header_line and values:
            # The encoding characters token of the first line is never decomposed
            fields: list[FieldValue] = [Scalar(values[0])]
            fields.extend(self.extract_components_from_field(value) for value in values[1:])
            return Segment(name, fields)

        return Segment(name, [self.extract_components_from_field(value) for value in values])

    def extract_components_from_field(self, field: str, keep_empty_subfields: bool | None = None) -> FieldValue:
        """Decompose raw field text with this message's delimiters."""
        if keep_empty_subfields is None:
            keep_empty_subfields = self._keep_empty_subfields
        return decompose(
            field,
            self._config.component_separator,
            self._config.subcomponent_separator,
            keep_empty_subfields,
        )

    # ── Delimiter configuration ──

    @property
    def config(self) -> DelimiterConfig:
        """Active delimiters, re-derived from the first segment."""
        if self._segments:
            self.reset_control(self._segments[0])
        return self._config

    def reset_control(self, segment: Segment) -> bool:
        """Re-derive delimiters and version from a header segment.

        Field 1 sets the field separator, the first four characters of field 2
        set the component, repetition, escape and subcomponent separators and
        field 12 sets the version. Fields with another shape leave the
        matching settings unchanged.
        """
        update: dict[str, str] = {}

        field_sep = segment.get_field(HeaderField.FIELD_SEPARATOR)
        if isinstance(field_sep, Scalar) and len(field_sep.text) == 1:
            update["field_separator"] = field_sep.text
        elif not is_blank(field_sep):
            logger.debug("Ignoring field separator %r from %s segment", field_sep, segment.name)

        encoding = segment.get_field(HeaderField.ENCODING_CHARACTERS)
        match = ENCODING_PATTERN.match(encoding.text) if isinstance(encoding, Scalar) else None
        if match is not None:
            (
                update["component_separator"],
                update["repetition_separator"],
                update["escape_character"],
                update["subcomponent_separator"],
            ) = match.groups()

        version = segment.get_field(HeaderField.VERSION_ID)
        if not is_blank(version):
            version_text = compose(
                version,
                update.get("component_separator", self._config.component_separator),
                update.get("subcomponent_separator", self._config.subcomponent_separator),
            )
            # An empty MSH-12 leaves the configured version in place
            if version_text:
                update["hl7_version"] = version_text

        if update:
            self._config = self._config.model_copy(update=update)
        return True

    # ── Segment editing ──

    @property
    def segments(self) -> list[Segment]:
        return list(self._segments)

    def add_segment(self, segment: Segment) -> bool:
        """Append a segment. The first segment of an empty message sets the delimiters."""
        if not self._segments:
            self.reset_control(segment)
        self._segments.append(segment)
        return True

    def insert_segment(self, segment: Segment, index: int | None = None) -> None:
        """Insert a segment before ``index`` (append when ``index`` is None or the length).

        Raises:
            IndexOutOfRangeError: If ``index`` is negative or past the end.
        """
        length = len(self._segments)
        if index is None:
            index = length
        if index < 0 or index > length:
            raise IndexOutOfRangeError(index, length)
        if index == 0:
            self.reset_control(segment)
        self._segments.insert(index, segment)

    def set_segment(self, segment: Segment, index: int) -> bool:
        """Replace the segment at ``index``; ``index`` equal to the length appends.

        Raises:
            IndexOutOfRangeError: If ``index`` is negative or past the end.
        """
        length = len(self._segments)
        if index < 0 or index > length:
            raise IndexOutOfRangeError(index, length)
        if index == 0 and segment.name == CONTROL_SEGMENT_NAME:
            self.reset_control(segment)
        if index == length:
            self._segments.append(segment)
        else:
            self._segments[index] = segment
        return True

    def remove_segment_by_index(self, index: int) -> bool:
        if index < 0 or index >= len(self._segments):
            return False
        del self._segments[index]
        return True

    def remove_segments_by_name(self, name: str) -> int:
        """Remove every segment with the given name.

        Returns:
            Number of segments removed.
        """
        kept = [segment for segment in self._segments if segment.name != name]
        count = len(self._segments) - len(kept)
        self._segments = kept
        return count

    def remove_segment(self, segment: Segment, reindex: bool = False) -> bool:
        """Remove a segment instance.

        With ``reindex``, field 1 (the set ID) of the remaining segments of
        the same name is renumbered 1..n in message order.
        """
        index = self.get_segment_index(segment)
        if index is None:
            return False
        del self._segments[index]
        if reindex:
            self.reset_segment_indices(segment.name)
        return True

    def reset_segment_indices(self, name: str) -> int:
        """Renumber field 1 of all segments named ``name``; returns how many."""
        segments = self.get_segments_by_name(name)
        for set_id, segment in enumerate(segments, start=1):
            segment.set_field(1, str(set_id))
        return len(segments)

    # ── Lookups ──

    def get_segment_by_index(self, index: int) -> Segment | None:
        if index < 0 or index >= len(self._segments):
            return None
        return self._segments[index]

    def get_segment_index(self, segment: Segment) -> int | None:
        """Position of this exact segment instance, or None."""
        for i, candidate in enumerate(self._segments):
            if candidate is segment:
                return i
        return None

    def get_segments_by_name(self, name: str) -> list[Segment]:
        return [segment for segment in self._segments if segment.name == name]

    def has_segment(self, name: str) -> bool:
        return len(self.get_segments_by_name(name.upper())) > 0

    def get_first_segment_instance(self, name: str) -> Segment | None:
        segments = self.get_segments_by_name(name.upper())
        return segments[0] if segments else None

    def is_empty(self) -> bool:
        return not self._segments

    def is_message_type(self, message_type: str, trigger_event: str | None = None) -> bool:
        """Check MSH-9 against a message type and, optionally, a trigger event."""
        header = self.get_segment_by_index(0)
        if not isinstance(header, ControlSegment):
            return False
        config = self.config
        actual_type = compose(header.get_message_type(), config.component_separator, config.subcomponent_separator)
        if actual_type.upper() != message_type.upper():
            return False
        if trigger_event is None:
            return True
        actual_event = compose(header.get_trigger_event(), config.component_separator, config.subcomponent_separator)
        return actual_event.upper() == trigger_event.upper()

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(list(self._segments))

    # ── Serialization ──

    def serialize(self) -> str:
        """Render the message as wire text.

        Raises:
            EmptyMessageError: If the message has no segments.
        """
        if not self._segments:
            raise EmptyMessageError()
        config = self.config
        return "".join(
            self._render_segment(segment, config) + config.segment_separator for segment in self._segments
        )

    def _render_segment(self, segment: Segment, config: DelimiterConfig) -> str:
        # MSH-1 is the separator itself, already written after the name
        start = 2 if segment.name == CONTROL_SEGMENT_NAME else 1
        parts = [segment.name]
        parts.extend(
            compose(value, config.component_separator, config.subcomponent_separator)
            for value in segment.get_fields(start)
        )
        text = config.field_separator.join(parts)
        if config.segment_ending_bar:
            return text + config.field_separator
        return text.removesuffix(config.field_separator)

    def segment_to_string(self, segment: Segment) -> str:
        return self._render_segment(segment, self.config)

    def get_segment_as_string(self, index: int) -> str | None:
        segment = self.get_segment_by_index(index)
        if segment is None:
            return None
        return self.segment_to_string(segment)

    def get_segment_field_as_string(self, segment_index: int, field_index: int) -> str | None:
        """Render one field of one segment, or None if either is absent."""
        segment = self.get_segment_by_index(segment_index)
        if segment is None:
            return None
        value = segment.get_field(field_index)
        if value is None:
            return None
        config = self.config
        return compose(value, config.component_separator, config.subcomponent_separator)

    def __str__(self) -> str:
        return self.serialize()

    def __repr__(self) -> str:
        names = ",".join(segment.name for segment in self._segments)
        return f"Message([{names}])"


def parse_message(
    text: str,
    config: DelimiterConfig | None = None,
    *,
    keep_empty_subfields: bool = False,
) -> Message:
    """Parse a raw HL7 v2.x message string.

    Args:
        text: Raw message with segments separated by CR, LF or the configured
            segment separator.
        config: Starting delimiter set; the message header overrides the
            separators, ``segment_separator`` and ``segment_ending_bar`` are
            kept.
        keep_empty_subfields: Keep empty components when decomposing fields.

    Raises:
        InvalidMessageError: If the text is empty or the header is malformed.
    """
    return Message.parse(text, config, keep_empty_subfields=keep_empty_subfields)


__all__ = ["Message", "parse_message"]
