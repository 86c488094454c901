"""Structural errors raised by the hl7wire message model.

Field-level operations never raise: they return ``False`` or ``None`` when a
value cannot be set or is not present. The exceptions below are reserved for
protocol violations that leave no sensible result to return.
"""

from __future__ import annotations


class HL7Error(Exception):
    """Base class for all hl7wire errors."""


class InvalidMessageError(HL7Error):
    """Raised when text cannot be parsed as an HL7 message."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Not a valid message: {reason}")


class InvalidNameError(HL7Error):
    """Raised when a segment name is not 3 uppercase characters."""

    def __init__(self, name: object) -> None:
        self.name = name
        super().__init__(f"Segment name {name!r} should be 3 characters and in uppercase")


class IndexOutOfRangeError(HL7Error):
    """Raised when a segment index falls outside the message."""

    def __init__(self, index: int, length: int) -> None:
        self.index = index
        self.length = length
        super().__init__(f"Index out of range. Index: {index}, Total segments: {length}")


class EmptyMessageError(HL7Error):
    """Raised when serializing a message that has no segments."""

    def __init__(self) -> None:
        super().__init__("Message contains no data. Cannot convert to string")


__all__ = [
    "HL7Error",
    "InvalidMessageError",
    "InvalidNameError",
    "IndexOutOfRangeError",
    "EmptyMessageError",
]
