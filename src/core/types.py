"""Shared typed models.

This module defines the storable value variant produced by validation
and the small value types records may hold in persistable fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Union

ScalarKind = Literal["data", "string", "integer", "float", "boolean", "uri", "date"]


class Uri(str):
    """URI text value.

    Uri compares equal to the plain string it wraps, so a value written
    as a string by a file store still matches after it is pulled back.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Uri({str.__repr__(self)})"


ScalarPayload = Union[bytes, str, int, float, bool, datetime]


@dataclass(frozen=True)
class ScalarValue:
    """Leaf storable value.

    Attributes:
        kind: Scalar kind tag.
        value: Native Python payload.
    """

    kind: ScalarKind
    value: ScalarPayload


@dataclass(frozen=True)
class SequenceValue:
    """Ordered storable collection.

    Attributes:
        items: Storable elements in order.
    """

    items: tuple["StorableValue", ...]


@dataclass(frozen=True)
class MappingValue:
    """String-keyed storable collection.

    Attributes:
        entries: Key and storable value pairs in insertion order.
    """

    entries: tuple[tuple[str, "StorableValue"], ...]


StorableValue = Union[ScalarValue, SequenceValue, MappingValue]
