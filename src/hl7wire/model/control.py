"""MSH control segment.

The control segment is the first segment of every message. Its first two
fields declare the delimiters used by the rest of the message, so writes to
them are validated; the remaining positions carry message metadata and are
exposed through named accessors.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any

import numpy as np

from hl7wire.common.constants import (
    CONTROL_ID_SUFFIX_RANGE,
    CONTROL_SEGMENT_NAME,
    DEFAULT_COMPONENT_SEPARATOR,
    DEFAULT_ESCAPE_CHARACTER,
    DEFAULT_FIELD_SEPARATOR,
    DEFAULT_HL7_VERSION,
    DEFAULT_REPETITION_SEPARATOR,
    DEFAULT_SUBCOMPONENT_SEPARATOR,
    ENCODING_CHARACTERS_LENGTH,
    TIMESTAMP_FORMAT,
    HeaderField,
)
from hl7wire.common.schemas import DelimiterConfig
from hl7wire.model.fields import (
    ComponentList,
    FieldValue,
    Scalar,
    SubcomponentList,
    is_blank,
    to_field_value,
)
from hl7wire.model.segment import Segment

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# Exact text length required at the delimiter positions
_FIXED_LENGTHS: dict[int, int] = {
    HeaderField.FIELD_SEPARATOR: 1,
    HeaderField.ENCODING_CHARACTERS: ENCODING_CHARACTERS_LENGTH,
}


class ControlSegment(Segment):
    """MSH segment carrying the delimiter set and message metadata.

    Usage:
        msh = ControlSegment([])                      # defaults: |, ^~\\&, 2.3
        msh = ControlSegment([], config=DelimiterConfig(field_separator="*"))
        msh = ControlSegment([], clock=lambda: fixed_time, rng=np.random.RandomState(1))
        msh = ControlSegment()                        # bare MSH, nothing set
    """

    def __init__(
        self,
        fields: Iterable[Any] | None = None,
        config: DelimiterConfig | None = None,
        *,
        clock: Clock | None = None,
        rng: np.random.RandomState | None = None,
    ) -> None:
        super().__init__(CONTROL_SEGMENT_NAME, fields)
        if fields is not None:
            self._populate_defaults(config, clock or datetime.now, rng or np.random.RandomState())

    @classmethod
    def from_fields(cls, fields: Iterable[Any]) -> ControlSegment:
        """Build a control segment from parsed values, without defaults."""
        segment = cls()
        segment._install(fields)
        return segment

    def _populate_defaults(self, config: DelimiterConfig | None, clock: Clock, rng: np.random.RandomState) -> None:
        if config is None:
            field_separator = DEFAULT_FIELD_SEPARATOR
            encoding = (
                f"{DEFAULT_COMPONENT_SEPARATOR}{DEFAULT_REPETITION_SEPARATOR}"
                f"{DEFAULT_ESCAPE_CHARACTER}{DEFAULT_SUBCOMPONENT_SEPARATOR}"
            )
            version = DEFAULT_HL7_VERSION
        else:
            field_separator = config.field_separator
            encoding = config.encoding_characters
            version = config.hl7_version

        timestamp = clock().strftime(TIMESTAMP_FORMAT)
        low, high = CONTROL_ID_SUFFIX_RANGE
        self.set_field(HeaderField.FIELD_SEPARATOR, field_separator)
        self.set_field(HeaderField.ENCODING_CHARACTERS, encoding)
        self.set_field(HeaderField.DATE_TIME_OF_MESSAGE, timestamp)
        self.set_field(HeaderField.MESSAGE_CONTROL_ID, f"{timestamp}{rng.randint(low, high + 1)}")
        self.set_field(HeaderField.VERSION_ID, version)

    def set_field(self, position: int, value: Any) -> bool:
        """Set a header field, rejecting malformed delimiter values.

        Position 1 accepts a single character and position 2 exactly four;
        anything else is refused so the header stays usable as the delimiter
        source.
        """
        field_value = to_field_value(value)
        required = _FIXED_LENGTHS.get(position)
        if required is not None and not is_blank(field_value):
            if not isinstance(field_value, Scalar) or len(field_value.text) != required:
                logger.debug("Rejected MSH-%d value %r: expected %d characters", position, value, required)
                return False
        return super().set_field(position, field_value)

    @property
    def field_separator(self) -> str | None:
        value = self.get_field(HeaderField.FIELD_SEPARATOR)
        return value.text if isinstance(value, Scalar) and value.text else None

    @property
    def encoding_characters(self) -> str | None:
        value = self.get_field(HeaderField.ENCODING_CHARACTERS)
        return value.text if isinstance(value, Scalar) and value.text else None

    # ── Named accessors ──

    def set_sending_application(self, value: Any) -> bool:
        return self.set_field(HeaderField.SENDING_APPLICATION, value)

    def get_sending_application(self) -> FieldValue | None:
        return self.get_field(HeaderField.SENDING_APPLICATION)

    def set_sending_facility(self, value: Any) -> bool:
        return self.set_field(HeaderField.SENDING_FACILITY, value)

    def get_sending_facility(self) -> FieldValue | None:
        return self.get_field(HeaderField.SENDING_FACILITY)

    def set_receiving_application(self, value: Any) -> bool:
        return self.set_field(HeaderField.RECEIVING_APPLICATION, value)

    def get_receiving_application(self) -> FieldValue | None:
        return self.get_field(HeaderField.RECEIVING_APPLICATION)

    def set_receiving_facility(self, value: Any) -> bool:
        return self.set_field(HeaderField.RECEIVING_FACILITY, value)

    def get_receiving_facility(self) -> FieldValue | None:
        return self.get_field(HeaderField.RECEIVING_FACILITY)

    def set_date_time_of_message(self, value: Any) -> bool:
        return self.set_field(HeaderField.DATE_TIME_OF_MESSAGE, value)

    def get_date_time_of_message(self) -> FieldValue | None:
        return self.get_field(HeaderField.DATE_TIME_OF_MESSAGE)

    def set_security(self, value: Any) -> bool:
        return self.set_field(HeaderField.SECURITY, value)

    def get_security(self) -> FieldValue | None:
        return self.get_field(HeaderField.SECURITY)

    def set_message_type(self, value: Any) -> bool:
        """Set MSH-9.1, keeping a trigger event that is already set."""
        current = self.get_field(HeaderField.MESSAGE_TYPE)
        if isinstance(current, ComponentList) and len(current) > 1 and not is_blank(current[1]):
            value = ComponentList((_component(value), current[1]))
        return self.set_field(HeaderField.MESSAGE_TYPE, value)

    def get_message_type(self) -> FieldValue | None:
        """Get MSH-9.1 (e.g. ``ADT`` in ``ADT^A01``)."""
        current = self.get_field(HeaderField.MESSAGE_TYPE)
        if isinstance(current, ComponentList) and len(current) > 0:
            return current[0]
        return current

    def set_trigger_event(self, value: Any) -> bool:
        """Set MSH-9.2, keeping the message type that is already set."""
        current = self.get_field(HeaderField.MESSAGE_TYPE)
        if isinstance(current, ComponentList):
            message_type = current[0] if len(current) > 0 else Scalar()
        else:
            message_type = current if isinstance(current, (Scalar, SubcomponentList)) else Scalar()
        return self.set_field(HeaderField.MESSAGE_TYPE, ComponentList((message_type, _component(value))))

    def get_trigger_event(self) -> FieldValue | None:
        """Get MSH-9.2 (e.g. ``A01`` in ``ADT^A01``), or None when absent."""
        current = self.get_field(HeaderField.MESSAGE_TYPE)
        if isinstance(current, ComponentList) and len(current) > 1 and not is_blank(current[1]):
            return current[1]
        return None

    def set_message_control_id(self, value: Any) -> bool:
        return self.set_field(HeaderField.MESSAGE_CONTROL_ID, value)

    def get_message_control_id(self) -> FieldValue | None:
        return self.get_field(HeaderField.MESSAGE_CONTROL_ID)

    def set_processing_id(self, value: Any) -> bool:
        return self.set_field(HeaderField.PROCESSING_ID, value)

    def get_processing_id(self) -> FieldValue | None:
        return self.get_field(HeaderField.PROCESSING_ID)

    def set_version_id(self, value: Any) -> bool:
        return self.set_field(HeaderField.VERSION_ID, value)

    def get_version_id(self) -> FieldValue | None:
        return self.get_field(HeaderField.VERSION_ID)

    def set_sequence_number(self, value: Any) -> bool:
        return self.set_field(HeaderField.SEQUENCE_NUMBER, value)

    def get_sequence_number(self) -> FieldValue | None:
        return self.get_field(HeaderField.SEQUENCE_NUMBER)

    def set_continuation_pointer(self, value: Any) -> bool:
        return self.set_field(HeaderField.CONTINUATION_POINTER, value)

    def get_continuation_pointer(self) -> FieldValue | None:
        return self.get_field(HeaderField.CONTINUATION_POINTER)

    def set_accept_acknowledgment_type(self, value: Any) -> bool:
        return self.set_field(HeaderField.ACCEPT_ACKNOWLEDGMENT_TYPE, value)

    def get_accept_acknowledgment_type(self) -> FieldValue | None:
        return self.get_field(HeaderField.ACCEPT_ACKNOWLEDGMENT_TYPE)

    def set_application_acknowledgment_type(self, value: Any) -> bool:
        return self.set_field(HeaderField.APPLICATION_ACKNOWLEDGMENT_TYPE, value)

    def get_application_acknowledgment_type(self) -> FieldValue | None:
        return self.get_field(HeaderField.APPLICATION_ACKNOWLEDGMENT_TYPE)

    def set_country_code(self, value: Any) -> bool:
        return self.set_field(HeaderField.COUNTRY_CODE, value)

    def get_country_code(self) -> FieldValue | None:
        return self.get_field(HeaderField.COUNTRY_CODE)

    def set_character_set(self, value: Any) -> bool:
        return self.set_field(HeaderField.CHARACTER_SET, value)

    def get_character_set(self) -> FieldValue | None:
        return self.get_field(HeaderField.CHARACTER_SET)

    def set_principal_language(self, value: Any) -> bool:
        return self.set_field(HeaderField.PRINCIPAL_LANGUAGE, value)

    def get_principal_language(self) -> FieldValue | None:
        return self.get_field(HeaderField.PRINCIPAL_LANGUAGE)


def _component(value: Any) -> Scalar | SubcomponentList:
    """Narrow a value to something that fits inside a component list."""
    field_value = to_field_value(value)
    if isinstance(field_value, (Scalar, SubcomponentList)):
        return field_value
    if isinstance(field_value, ComponentList) and len(field_value) > 0:
        return field_value[0]
    return Scalar()


__all__ = ["ControlSegment", "Clock"]
