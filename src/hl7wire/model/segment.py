"""HL7 segment: a named, 1-indexed list of field values."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from hl7wire.common.constants import SEGMENT_NAME_LENGTH
from hl7wire.common.errors import InvalidNameError
from hl7wire.model.fields import FieldValue, Scalar, is_blank, to_field_value

NAME_INDEX = 0


class Segment:
    """A single HL7 segment (e.g., PID, OBX).

    Position 0 holds the segment name and can not be set. Fields start at
    position 1, following the HL7 numbering convention.
    """

    def __init__(self, name: str, fields: Iterable[Any] | None = None) -> None:
        if not isinstance(name, str) or len(name) != SEGMENT_NAME_LENGTH or name.upper() != name:
            raise InvalidNameError(name)
        self._name = name
        self._fields: list[FieldValue] = [Scalar(name)]
        if fields is not None:
            self._install(fields)

    def _install(self, fields: Iterable[Any]) -> None:
        values = list(fields)
        for position, value in enumerate(values, start=1):
            self.set_field(position, value)
        self.pad(len(values))

    @property
    def name(self) -> str:
        return self._name

    def set_field(self, position: int, value: Any) -> bool:
        """Set the field at a 1-based position.

        Blank values (``None`` or empty text) are treated as nothing to set
        and leave the segment untouched. Positions past the current end are
        backfilled with empty scalars.

        Returns:
            True if the field was stored.
        """
        field_value = to_field_value(value)
        if position < 1 or is_blank(field_value):
            return False
        self.pad(position - 1)
        if position < len(self._fields):
            self._fields[position] = field_value
        else:
            self._fields.append(field_value)
        return True

    def get_field(self, position: int) -> FieldValue | None:
        """Get field by 1-based position, or None if not present."""
        if position < 0 or position >= len(self._fields):
            return None
        return self._fields[position]

    def get_fields(self, start: int = 0, end: int | None = None) -> list[FieldValue]:
        """Get fields from ``start`` to ``end`` inclusive (default: to the last field).

        A negative ``start`` is treated as 0 and a negative ``end`` selects nothing.
        """
        start = max(start, 0)
        if end is not None and end < 0:
            return []
        if end is None:
            return self._fields[start:]
        return self._fields[start:end + 1]

    def pad(self, size: int) -> None:
        """Backfill empty scalars until the segment holds ``size`` fields."""
        while len(self._fields) <= size:
            self._fields.append(Scalar())

    def size(self) -> int:
        """Number of fields, not counting the name."""
        return len(self._fields) - 1

    def __len__(self) -> int:
        return self.size()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Segment):
            return NotImplemented
        return type(self) is type(other) and self._fields == other._fields

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, size={self.size()})"


__all__ = ["Segment"]
