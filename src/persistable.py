"""Public SDK surface for Persistable.

This module provides a stable import path for application code.
It re-exports the record base, the engine, the stores, and errors.
"""

from __future__ import annotations

from core.config import PersistableConfig
from core.errors import (
    CollectionElementError,
    FieldReadError,
    KeyMappingMissingError,
    NonPlistTypeError,
    PersistableConfigError,
    PersistableError,
    RecordDeclarationError,
    SerializableValueError,
    StoreError,
    StoreTransactionError,
    UnsupportedOptionalError,
    UnsupportedValueTypeForKeyError,
)
from core.types import MappingValue, ScalarValue, SequenceValue, StorableValue, Uri
from records.defaults_registry import DefaultsRegistry
from records.field_enumeration import fields_of
from records.marshaller import Marshaller
from records.persistent_record import PersistentRecord
from records.storage_keys import default_storage_key
from records.value_validation import classify_value, is_serializable, to_native
from store.file_storage import FileStorage
from store.memory_storage import DefaultsStorage, MemoryStorage
from store.plist_storage import PlistStorage
from store.storage_contract import Storage, transaction
from store.storage_factory import file_storage_from_config
from store.yaml_storage import YamlStorage

__all__ = [
    "CollectionElementError",
    "DefaultsRegistry",
    "DefaultsStorage",
    "FieldReadError",
    "FileStorage",
    "KeyMappingMissingError",
    "MappingValue",
    "Marshaller",
    "MemoryStorage",
    "NonPlistTypeError",
    "PersistableConfig",
    "PersistableConfigError",
    "PersistableError",
    "PersistentRecord",
    "PlistStorage",
    "RecordDeclarationError",
    "ScalarValue",
    "SequenceValue",
    "SerializableValueError",
    "Storage",
    "StorableValue",
    "StoreError",
    "StoreTransactionError",
    "UnsupportedOptionalError",
    "UnsupportedValueTypeForKeyError",
    "Uri",
    "YamlStorage",
    "classify_value",
    "default_storage_key",
    "fields_of",
    "file_storage_from_config",
    "is_serializable",
    "to_native",
    "transaction",
]
