"""Dataclass base for records synchronized with a store.

Subclasses are dataclasses whose fields are persisted under
`<key_prefix>.<field_name>` keys. The `store` and `key_prefix`
control fields are keyword-only and never persisted.

Example:
    @dataclass
    class Settings(PersistentRecord):
        title: str = ""
        volume: int = 5

    settings = Settings.from_store(MemoryStorage())
    settings.volume = 7
    settings.persist()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Mapping, Type, TypeVar

from records.marshaller import DEFAULT_MARSHALLER, Marshaller
from records.storage_keys import resolve_storage_key
from store.storage_contract import Storage

RecordT = TypeVar("RecordT", bound="PersistentRecord")


@dataclass
class PersistentRecord:
    """Record bound to a store under a key prefix.

    Attributes:
        store: Shared store the record reads from and writes to.
        key_prefix: Namespace of the record keys. Falls back to
            `default_key_prefix`, then the class name, when empty.
    """

    store: Storage | None = field(default=None, kw_only=True, repr=False, compare=False)
    key_prefix: str = field(default="", kw_only=True, compare=False)

    default_key_prefix: ClassVar[str | None] = None
    storage_key_map: ClassVar[Mapping[str, str] | None] = None
    marshaller: ClassVar[Marshaller] = DEFAULT_MARSHALLER

    def __post_init__(self) -> None:
        if not self.key_prefix:
            self.key_prefix = self.default_key_prefix or type(self).__name__

    @classmethod
    def from_store(
        cls: Type[RecordT],
        store: Storage,
        key_prefix: str | None = None,
    ) -> RecordT:
        """Build a default instance bound to store and pull stored values."""
        return cls.marshaller.load(cls, store, key_prefix)

    def storage_key(self, field_name: str) -> str:
        """Return the store key of a field; override for custom schemes."""
        return resolve_storage_key(type(self), self.key_prefix, field_name)

    def pull(self) -> None:
        """Overwrite fields with values present in the store."""
        self.marshaller.pull(self)

    def push(self) -> None:
        """Write all fields to the store."""
        self.marshaller.push(self)

    def persist(self) -> None:
        """Write all fields to the store."""
        self.marshaller.persist(self)

    def remove(self) -> None:
        """Delete this record's keys from the store."""
        self.marshaller.remove(self)

    def snapshot(self) -> dict[str, object]:
        """Return stored values keyed by storage key."""
        return self.marshaller.snapshot(self)
