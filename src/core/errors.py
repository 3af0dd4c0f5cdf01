"""Persistable exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class PersistableError(Exception):
    """Base exception for all Persistable failures."""


class PersistableConfigError(PersistableError):
    """Raised for invalid runtime configuration."""


class StoreError(PersistableError):
    """Raised for storage backend read, parse, and write failures."""


class StoreTransactionError(StoreError):
    """Raised when a store transaction bracket is misused."""


class RecordDeclarationError(PersistableError):
    """Raised when a record type cannot be marshalled as declared."""


class FieldReadError(PersistableError):
    """Raised when a record field value cannot be read."""

    def __init__(self, field_name: str) -> None:
        super().__init__(
            f"Failed to read value of field '{field_name}'. "
            "Make sure the field is assigned before marshalling the record."
        )
        self.field_name = field_name


class KeyMappingMissingError(PersistableError):
    """Raised when a storage key map does not cover an enumerated field."""

    def __init__(self, field_name: str) -> None:
        super().__init__(
            f"Storage key map has no entry for field '{field_name}'. "
            "Add the field to storage_key_map or override storage_key()."
        )
        self.field_name = field_name


class SerializableValueError(PersistableError):
    """Base error for values outside the serializable domain."""


class UnsupportedOptionalError(SerializableValueError):
    """Raised for None values, which are never serializable."""

    def __init__(self) -> None:
        super().__init__("None is not a serializable value.")


class NonPlistTypeError(SerializableValueError):
    """Raised for values whose type has no storage representation."""

    def __init__(self, value_type: type) -> None:
        super().__init__(f"Values of type '{value_type.__name__}' are not serializable.")
        self.value_type = value_type


class CollectionElementError(SerializableValueError):
    """Raised when one element of a list or dict is not serializable.

    Attributes:
        inner: Failure found for the element.
        position: List index or dict key of the element.
    """

    def __init__(self, inner: SerializableValueError, position: object) -> None:
        super().__init__(f"Collection element at {position!r} is not serializable: {inner}")
        self.inner = inner
        self.position = position

    def path(self) -> tuple[object, ...]:
        """Return positions from this collection down to the failing element."""
        if isinstance(self.inner, CollectionElementError):
            return (self.position, *self.inner.path())
        return (self.position,)

    def root_cause(self) -> SerializableValueError:
        """Return the innermost non-collection failure."""
        if isinstance(self.inner, CollectionElementError):
            return self.inner.root_cause()
        return self.inner


class UnsupportedValueTypeForKeyError(PersistableError):
    """Raised when a field value fails validation at push time."""

    def __init__(self, field_name: str, cause: SerializableValueError) -> None:
        super().__init__(f"Field '{field_name}' holds an unsupported value: {cause}")
        self.field_name = field_name
        self.cause = cause
