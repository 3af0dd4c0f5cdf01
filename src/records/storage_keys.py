"""Storage key resolution for record fields.

This module derives the store key of each persistable field, either as
`<key_prefix>.<field_name>` or through a per-type key map that lets a
record read values written under unrelated legacy key names.
"""

from __future__ import annotations

from typing import Mapping

from core.constants import KEY_SEPARATOR
from core.errors import KeyMappingMissingError, RecordDeclarationError
from records.field_enumeration import fields_of


def default_storage_key(key_prefix: str, field_name: str) -> str:
    """Build the default storage key for a field."""
    return f"{key_prefix}{KEY_SEPARATOR}{field_name}"


def mapped_storage_key(key_map: Mapping[str, str], field_name: str) -> str:
    """Look up a field in an explicit key map.

    Args:
        key_map: Field name to storage key mapping.
        field_name: Field to resolve.

    Returns:
        Mapped storage key.

    Raises:
        KeyMappingMissingError: If the map has no entry for the field.
    """
    try:
        return key_map[field_name]
    except KeyError as error:
        raise KeyMappingMissingError(field_name) from error


def resolve_storage_key(record_type: type, key_prefix: str, field_name: str) -> str:
    """Resolve a field key using the type's key map or the default policy."""
    key_map = getattr(record_type, "storage_key_map", None)
    if key_map is not None:
        return mapped_storage_key(key_map, field_name)
    return default_storage_key(key_prefix, field_name)


def key_prefix_of(record: object) -> str:
    """Return the key prefix control attribute of a record.

    Raises:
        RecordDeclarationError: If the record has no key_prefix attribute.
    """
    try:
        return str(getattr(record, "key_prefix"))
    except AttributeError as error:
        raise RecordDeclarationError(
            f"Record '{type(record).__name__}' has no key_prefix attribute. "
            "Declare key_prefix or derive from PersistentRecord."
        ) from error


def storage_key_for(record: object, field_name: str) -> str:
    """Resolve the storage key of one field of a record instance.

    A `storage_key(field_name)` method on the record overrides all
    other policies.
    """
    resolver = getattr(record, "storage_key", None)
    if callable(resolver):
        return str(resolver(field_name))
    return resolve_storage_key(type(record), key_prefix_of(record), field_name)


def storage_keys_of(record: object) -> dict[str, str]:
    """Map every persistable field of a record to its storage key."""
    return {
        field_name: storage_key_for(record, field_name)
        for field_name in fields_of(type(record))
    }
