"""Constants and enums for hl7wire."""

import re
from enum import IntEnum
from typing import Final


class HeaderField(IntEnum):
    """Field positions of the MSH control segment."""

    FIELD_SEPARATOR = 1
    ENCODING_CHARACTERS = 2
    SENDING_APPLICATION = 3
    SENDING_FACILITY = 4
    RECEIVING_APPLICATION = 5
    RECEIVING_FACILITY = 6
    DATE_TIME_OF_MESSAGE = 7
    SECURITY = 8
    MESSAGE_TYPE = 9  # message type ^ trigger event
    MESSAGE_CONTROL_ID = 10
    PROCESSING_ID = 11
    VERSION_ID = 12
    SEQUENCE_NUMBER = 13
    CONTINUATION_POINTER = 14
    ACCEPT_ACKNOWLEDGMENT_TYPE = 15
    APPLICATION_ACKNOWLEDGMENT_TYPE = 16
    COUNTRY_CODE = 17
    CHARACTER_SET = 18
    PRINCIPAL_LANGUAGE = 19


CONTROL_SEGMENT_NAME: Final[str] = "MSH"
SEGMENT_NAME_LENGTH: Final[int] = 3
ENCODING_CHARACTERS_LENGTH: Final[int] = 4

DEFAULT_FIELD_SEPARATOR: Final[str] = "|"
DEFAULT_COMPONENT_SEPARATOR: Final[str] = "^"
DEFAULT_REPETITION_SEPARATOR: Final[str] = "~"
DEFAULT_ESCAPE_CHARACTER: Final[str] = "\\"
DEFAULT_SUBCOMPONENT_SEPARATOR: Final[str] = "&"
DEFAULT_SEGMENT_SEPARATOR: Final[str] = "\n"
DEFAULT_HL7_VERSION: Final[str] = "2.3"

# Name, field separator, four encoding characters, field separator again
CONTROL_PATTERN: Final[re.Pattern[str]] = re.compile(r"([A-Z0-9]{3})(.)(.)(.)(.)(.)(.)")
ENCODING_PATTERN: Final[re.Pattern[str]] = re.compile(r"(.)(.)(.)(.)")

TIMESTAMP_FORMAT: Final[str] = "%Y%m%d%H%M%S"
CONTROL_ID_SUFFIX_RANGE: Final[tuple[int, int]] = (10000, 99999)

# CLI names for common segment separators
SEGMENT_SEPARATORS: Final[dict[str, str]] = {
    "lf": "\n",
    "cr": "\r",
    "crlf": "\r\n",
}

__all__ = [
    "HeaderField",
    "CONTROL_SEGMENT_NAME",
    "SEGMENT_NAME_LENGTH",
    "ENCODING_CHARACTERS_LENGTH",
    "DEFAULT_FIELD_SEPARATOR",
    "DEFAULT_COMPONENT_SEPARATOR",
    "DEFAULT_REPETITION_SEPARATOR",
    "DEFAULT_ESCAPE_CHARACTER",
    "DEFAULT_SUBCOMPONENT_SEPARATOR",
    "DEFAULT_SEGMENT_SEPARATOR",
    "DEFAULT_HL7_VERSION",
    "CONTROL_PATTERN",
    "ENCODING_PATTERN",
    "TIMESTAMP_FORMAT",
    "CONTROL_ID_SUFFIX_RANGE",
    "SEGMENT_SEPARATORS",
]
