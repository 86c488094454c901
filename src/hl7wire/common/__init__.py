"""Common constants, errors and schemas for hl7wire."""

from hl7wire.common.constants import (
    CONTROL_SEGMENT_NAME,
    DEFAULT_HL7_VERSION,
    HeaderField,
)
from hl7wire.common.errors import (
    EmptyMessageError,
    HL7Error,
    IndexOutOfRangeError,
    InvalidMessageError,
    InvalidNameError,
)
from hl7wire.common.schemas import DelimiterConfig

__all__ = [
    "HeaderField",
    "CONTROL_SEGMENT_NAME",
    "DEFAULT_HL7_VERSION",
    "HL7Error",
    "InvalidMessageError",
    "InvalidNameError",
    "IndexOutOfRangeError",
    "EmptyMessageError",
    "DelimiterConfig",
]
