"""Serializable value classification.

This module decides whether a runtime value belongs to the storable
domain by building the StorableValue variant through structural recursion.
Collection failures wrap the inner error with the failing position.
"""

from __future__ import annotations

from datetime import datetime

from core.errors import (
    CollectionElementError,
    NonPlistTypeError,
    SerializableValueError,
    UnsupportedOptionalError,
)
from core.types import (
    MappingValue,
    ScalarKind,
    ScalarValue,
    SequenceValue,
    StorableValue,
    Uri,
)


def classify_value(value: object) -> StorableValue:
    """Classify a native value into the storable variant.

    Args:
        value: Runtime value read from a record field.

    Returns:
        Storable variant mirroring the value structure.

    Raises:
        UnsupportedOptionalError: If the value is None.
        NonPlistTypeError: If the value type has no storage representation,
            tuples included.
        CollectionElementError: If a list element or dict value fails.
    """
    if value is None:
        raise UnsupportedOptionalError()
    scalar_kind = _scalar_kind(value)
    if scalar_kind is not None:
        payload = bytes(value) if isinstance(value, bytearray) else value
        return ScalarValue(kind=scalar_kind, value=payload)  # type: ignore[arg-type]
    if isinstance(value, list):
        return SequenceValue(
            items=tuple(_classify_element(item, index) for index, item in enumerate(value))
        )
    if isinstance(value, dict):
        return MappingValue(
            entries=tuple(
                (_checked_key(key), _classify_element(item, key)) for key, item in value.items()
            )
        )
    raise NonPlistTypeError(type(value))


def is_serializable(value: object) -> bool:
    """Return whether a value belongs to the storable domain."""
    try:
        classify_value(value)
    except SerializableValueError:
        return False
    return True


def to_native(storable: StorableValue) -> object:
    """Convert a storable variant back into plain Python values.

    Args:
        storable: Classified value.

    Returns:
        Scalar payload, list, or dict with the same structure.
    """
    if isinstance(storable, ScalarValue):
        return storable.value
    if isinstance(storable, SequenceValue):
        return [to_native(item) for item in storable.items]
    return {key: to_native(item) for key, item in storable.entries}


def _scalar_kind(value: object) -> ScalarKind | None:
    """Return the scalar kind tag of a value, or None for non-scalars."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "float"
    if isinstance(value, Uri):
        return "uri"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (bytes, bytearray)):
        return "data"
    if isinstance(value, datetime):
        return "date"
    return None


def _classify_element(item: object, position: object) -> StorableValue:
    try:
        return classify_value(item)
    except SerializableValueError as error:
        raise CollectionElementError(error, position) from error


def _checked_key(key: object) -> str:
    # dict keys must be text to map onto plist and YAML dictionaries
    if not isinstance(key, str):
        raise CollectionElementError(NonPlistTypeError(type(key)), key)
    return key
