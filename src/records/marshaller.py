"""Record marshalling engine.

This module moves field values between records and stores. Every
operation runs inside one store transaction which is closed before any
error reaches the caller. Store errors propagate unmodified.
"""

from __future__ import annotations

from typing import Type, TypeVar

from core.errors import (
    RecordDeclarationError,
    SerializableValueError,
    UnsupportedValueTypeForKeyError,
)
from core.logging_config import get_logger
from records.defaults_registry import PROCESS_DEFAULTS_REGISTRY, DefaultsRegistry
from records.field_enumeration import apply_field_values, field_values, fields_of
from records.storage_keys import key_prefix_of, storage_key_for, storage_keys_of
from records.value_validation import classify_value, to_native
from store.storage_contract import Storage, transaction

_LOGGER = get_logger(__name__)

RecordT = TypeVar("RecordT")


class Marshaller:
    """Pulls records from stores and pushes them back.

    Defaults registration is tracked by the registry this marshaller
    owns. Marshallers sharing a registry register each prefix once.
    """

    def __init__(self, registry: DefaultsRegistry | None = None) -> None:
        """Initialize the engine.

        Args:
            registry: Defaults registry; the process registry when omitted.
        """
        self._registry = registry if registry is not None else PROCESS_DEFAULTS_REGISTRY

    @property
    def registry(self) -> DefaultsRegistry:
        """Defaults registry used by this marshaller."""
        return self._registry

    def load(
        self,
        record_type: Type[RecordT],
        store: Storage,
        key_prefix: str | None = None,
    ) -> RecordT:
        """Construct a default record bound to a store, then pull it.

        Args:
            record_type: Record class with a no-argument constructor.
            store: Store to bind and read from.
            key_prefix: Optional key prefix overriding the type default.

        Returns:
            Record holding stored values where present, defaults elsewhere.
        """
        record = record_type()
        setattr(record, "store", store)
        if key_prefix is not None:
            setattr(record, "key_prefix", key_prefix)
        self.pull(record)
        return record

    def pull(self, record: object) -> None:
        """Overwrite record fields with values present in the store.

        Fields whose key holds no value keep their in-memory value. Staged
        values are applied in one batch after every key has been read.

        Args:
            record: Record instance bound to a store.
        """
        store = store_of(record)
        with transaction(store):
            self._register_defaults_once(store, record)
            staged: dict[str, object] = {}
            for field_name in fields_of(type(record)):
                value = store.get(storage_key_for(record, field_name))
                if value is not None:
                    staged[field_name] = value
            apply_field_values(record, staged)
        _LOGGER.debug(
            "record_pulled",
            key_prefix=key_prefix_of(record),
            pulled_count=len(staged),
        )

    def push(self, record: object) -> None:
        """Write every persistable field of a record into its store.

        All fields are validated before the first write, so a field with
        an unsupported value leaves the store untouched.

        Args:
            record: Record instance bound to a store.

        Raises:
            UnsupportedValueTypeForKeyError: If a field value is not serializable.
        """
        store = store_of(record)
        with transaction(store):
            self._register_defaults_once(store, record)
            pending_writes = _validated_writes(record)
            for storage_key, value in pending_writes:
                store.set(storage_key, value)
        _LOGGER.debug(
            "record_pushed",
            key_prefix=key_prefix_of(record),
            field_count=len(pending_writes),
        )

    def persist(self, record: object) -> None:
        """Alias of push."""
        self.push(record)

    def remove(self, record: object) -> None:
        """Delete every currently resolvable key of a record from its store.

        Keys are derived from the present field table, so values written
        under fields the type no longer declares are left behind.

        Args:
            record: Record instance bound to a store.
        """
        store = store_of(record)
        storage_keys = list(storage_keys_of(record).values())
        with transaction(store):
            for storage_key in storage_keys:
                store.set(storage_key, None)
        _LOGGER.info(
            "record_removed",
            key_prefix=key_prefix_of(record),
            key_count=len(storage_keys),
        )

    def snapshot(self, record: object) -> dict[str, object]:
        """Return stored values of a record keyed by storage key.

        Args:
            record: Record instance bound to a store.

        Returns:
            Storage key to stored value mapping, absent keys omitted.
        """
        store = store_of(record)
        stored_values: dict[str, object] = {}
        with transaction(store):
            for field_name in fields_of(type(record)):
                storage_key = storage_key_for(record, field_name)
                value = store.get(storage_key)
                if value is not None:
                    stored_values[storage_key] = value
        return stored_values

    def _register_defaults_once(self, store: Storage, record: object) -> None:
        self._registry.register_once(
            store,
            key_prefix_of(record),
            lambda: {
                storage_key_for(record, field_name): value
                for field_name, value in field_values(record).items()
            },
        )


def store_of(record: object) -> Storage:
    """Return the store a record is bound to.

    Raises:
        RecordDeclarationError: If the record has no bound store.
    """
    store = getattr(record, "store", None)
    if store is None:
        raise RecordDeclarationError(
            f"Record '{type(record).__name__}' is not bound to a store. "
            "Pass store= when constructing it or use from_store()."
        )
    return store


def _validated_writes(record: object) -> list[tuple[str, object]]:
    """Validate every field and return storage key and value pairs.

    Raises:
        UnsupportedValueTypeForKeyError: On the first unsupported field.
    """
    pending_writes: list[tuple[str, object]] = []
    for field_name, value in field_values(record).items():
        try:
            storable = classify_value(value)
        except SerializableValueError as error:
            _LOGGER.warning(
                "push_rejected",
                key_prefix=key_prefix_of(record),
                field_name=field_name,
                reason=str(error),
            )
            raise UnsupportedValueTypeForKeyError(field_name, error) from error
        pending_writes.append((storage_key_for(record, field_name), to_native(storable)))
    return pending_writes


DEFAULT_MARSHALLER = Marshaller()
