"""Persistable field enumeration.

This module reads the explicit field table a record type declares and
moves field values in and out of record instances.
"""

from __future__ import annotations

import dataclasses
from typing import Mapping

from core.constants import CONTROL_FIELD_NAMES
from core.errors import FieldReadError, RecordDeclarationError


def fields_of(record_type: type) -> tuple[str, ...]:
    """Return persistable field names of a record type in declaration order.

    A `persistent_fields` tuple on the type takes precedence over
    dataclass fields. Control attributes are always excluded.

    Args:
        record_type: Record class.

    Returns:
        Ordered field names.

    Raises:
        RecordDeclarationError: If the type declares no field table.
    """
    declared = getattr(record_type, "persistent_fields", None)
    if declared is not None:
        names = tuple(str(name) for name in declared)
    elif dataclasses.is_dataclass(record_type):
        names = tuple(field.name for field in dataclasses.fields(record_type))
    else:
        raise RecordDeclarationError(
            f"Record type '{record_type.__name__}' declares no fields. "
            "Make it a dataclass or set persistent_fields to a tuple of names."
        )
    return tuple(name for name in names if name not in CONTROL_FIELD_NAMES)


def field_values(record: object) -> dict[str, object]:
    """Read current values of every persistable field.

    Args:
        record: Record instance.

    Returns:
        Field name to current value mapping, in field order.

    Raises:
        FieldReadError: If a field is not set on the instance.
    """
    values: dict[str, object] = {}
    for field_name in fields_of(type(record)):
        try:
            values[field_name] = getattr(record, field_name)
        except AttributeError as error:
            raise FieldReadError(field_name) from error
    return values


def apply_field_values(record: object, values: Mapping[str, object]) -> None:
    """Write staged field values onto a record."""
    for field_name, value in values.items():
        setattr(record, field_name, value)
