"""HL7 v2.x message model: fields, segments, control segment and message."""

from hl7wire.model.control import ControlSegment
from hl7wire.model.fields import (
    ComponentList,
    FieldValue,
    Scalar,
    SubcomponentList,
    compose,
    decompose,
)
from hl7wire.model.message import Message, parse_message
from hl7wire.model.segment import Segment

__all__ = [
    "Scalar",
    "SubcomponentList",
    "ComponentList",
    "FieldValue",
    "decompose",
    "compose",
    "Segment",
    "ControlSegment",
    "Message",
    "parse_message",
]
