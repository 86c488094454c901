"""Recursive field values: scalar, component list, subcomponent list.

A field is either plain text, a list of subcomponents (when the field holds a
single component that is itself subdivided), or a list of components, each of
which is plain text or a list of subcomponents. Parsing always collapses to
the smallest of these shapes, so a one-element list never appears where a
scalar would do.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Union


class Scalar(str):
    """Plain field or component text.

    A ``str`` subclass, so it compares equal to the text it holds.
    """

    __slots__ = ()

    @property
    def text(self) -> str:
        return str(self)

    def to_native(self) -> str:
        return str(self)

    def __repr__(self) -> str:
        return f"Scalar({str(self)!r})"


@dataclass(frozen=True, eq=False)
class SubcomponentList:
    """Ordered subcomponents of a single component."""

    items: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(str(item) for item in self.items))

    def to_native(self) -> list[str]:
        return list(self.items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SubcomponentList):
            return self.items == other.items
        if isinstance(other, list):
            return self.to_native() == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((SubcomponentList, self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[str]:
        return iter(self.items)

    def __getitem__(self, index: int) -> str:
        return self.items[index]


@dataclass(frozen=True, eq=False)
class ComponentList:
    """Ordered components of a field.

    Compares equal to its plain-Python form, e.g.
    ``ComponentList((Scalar("a"), SubcomponentList(("x", "y")))) == ["a", ["x", "y"]]``.
    """

    items: tuple[Scalar | SubcomponentList, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def to_native(self) -> list[str | list[str]]:
        return [item.to_native() for item in self.items]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ComponentList):
            return self.items == other.items
        if isinstance(other, list):
            return self.to_native() == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((ComponentList, self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Scalar | SubcomponentList]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Scalar | SubcomponentList:
        return self.items[index]


FieldValue = Union[Scalar, SubcomponentList, ComponentList]


def is_blank(value: FieldValue | None) -> bool:
    """True for an absent value or empty scalar text (nothing to set)."""
    return value is None or (isinstance(value, Scalar) and not value.text)


def _to_component(value: Any) -> Scalar | SubcomponentList:
    if isinstance(value, (Scalar, SubcomponentList)):
        return value
    if value is None:
        return Scalar()
    if isinstance(value, (list, tuple)):
        return SubcomponentList(tuple("" if v is None else str(v) for v in value))
    return Scalar(str(value))


def to_field_value(value: Any) -> FieldValue | None:
    """Coerce plain Python data into a field value.

    ``str`` becomes a :class:`Scalar`, a list or tuple becomes a
    :class:`ComponentList` whose nested lists become
    :class:`SubcomponentList` entries. ``None`` stays ``None``.
    """
    if value is None or isinstance(value, (Scalar, SubcomponentList, ComponentList)):
        return value
    if isinstance(value, (list, tuple)):
        return ComponentList(tuple(_to_component(v) for v in value))
    return Scalar(str(value))


def decompose(
    text: str,
    component_separator: str,
    subcomponent_separator: str,
    keep_empty_subfields: bool = False,
) -> FieldValue:
    """Split raw field text into its components and subcomponents.

    Args:
        text: Raw field text, already split off by the field separator.
        component_separator: Character separating components.
        subcomponent_separator: Character separating subcomponents.
        keep_empty_subfields: Keep empty components instead of dropping them.

    Returns:
        A single component collapses to its own value (scalar or subcomponent
        list); several components give a :class:`ComponentList`.
    """
    pieces = text.split(component_separator)
    if not keep_empty_subfields:
        pieces = [piece for piece in pieces if piece]

    components: list[Scalar | SubcomponentList] = []
    for piece in pieces:
        subcomponents = piece.split(subcomponent_separator)
        if len(subcomponents) == 1:
            components.append(Scalar(subcomponents[0]))
        else:
            components.append(SubcomponentList(tuple(subcomponents)))

    if len(components) == 1:
        return components[0]
    return ComponentList(tuple(components))


def compose(value: FieldValue | None, component_separator: str, subcomponent_separator: str) -> str:
    """Render a field value back to wire text."""
    if value is None:
        return ""
    if isinstance(value, Scalar):
        return value.text
    if isinstance(value, SubcomponentList):
        return subcomponent_separator.join(value.items)
    return component_separator.join(
        subcomponent_separator.join(item.items) if isinstance(item, SubcomponentList) else item.text
        for item in value.items
    )


__all__ = [
    "Scalar",
    "SubcomponentList",
    "ComponentList",
    "FieldValue",
    "is_blank",
    "to_field_value",
    "decompose",
    "compose",
]
