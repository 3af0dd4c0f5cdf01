"""In-process key/value stores.

MemoryStorage stages writes in an overlay that `get` can see and commits
them on close. DefaultsStorage adds a registered-defaults layer that
answers reads for keys without an explicit value, like a system
defaults database.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Mapping

from core.errors import StoreTransactionError

_DELETED = object()


class MemoryStorage:
    """Dictionary-backed store with staged writes.

    Values are copied on the way in and out so records never share
    mutable collections with the store.
    """

    def __init__(self, values: Mapping[str, object] | None = None) -> None:
        self._values: dict[str, object] = deepcopy(dict(values or {}))
        self._pending: dict[str, object] = {}
        self._registered_defaults: dict[str, object] = {}
        self._registration_count = 0
        self._in_transaction = False

    @property
    def values(self) -> dict[str, object]:
        """Copy of committed values."""
        return deepcopy(self._values)

    @property
    def registered_defaults(self) -> dict[str, object]:
        """Copy of every default value registered so far."""
        return deepcopy(self._registered_defaults)

    @property
    def registration_count(self) -> int:
        """Number of register_defaults calls received."""
        return self._registration_count

    @property
    def in_transaction(self) -> bool:
        """Whether a transaction is currently open."""
        return self._in_transaction

    def open_transaction(self) -> None:
        """Begin a transaction.

        Raises:
            StoreTransactionError: If a transaction is already open.
        """
        if self._in_transaction:
            raise StoreTransactionError(
                "A transaction is already open on this store. "
                "Close it before opening a new one."
            )
        self._in_transaction = True

    def register_defaults(self, default_values: Mapping[str, object]) -> None:
        """Merge default values into the registered defaults."""
        self._registered_defaults.update(deepcopy(dict(default_values)))
        self._registration_count += 1

    def get(self, key: str) -> object | None:
        """Return the staged or committed value for key."""
        self._require_transaction()
        value = self._pending[key] if key in self._pending else self._values.get(key)
        if value is None or value is _DELETED:
            return self._fallback(key)
        return deepcopy(value)

    def set(self, key: str, value: object | None) -> None:
        """Stage a value for key; None stages a removal."""
        self._require_transaction()
        self._pending[key] = _DELETED if value is None else deepcopy(value)

    def close_transaction(self) -> None:
        """Commit staged values and end the transaction."""
        self._require_transaction()
        for key, staged in self._pending.items():
            if staged is _DELETED:
                self._values.pop(key, None)
            else:
                self._values[key] = staged
        self._pending.clear()
        self._in_transaction = False

    def _fallback(self, key: str) -> object | None:
        """Return the value read for a key without an explicit value."""
        return None

    def _require_transaction(self) -> None:
        if not self._in_transaction:
            raise StoreTransactionError(
                "No transaction is open on this store. Call open_transaction() first."
            )


class DefaultsStorage(MemoryStorage):
    """Memory store whose reads fall back to registered defaults."""

    def _fallback(self, key: str) -> object | None:
        return deepcopy(self._registered_defaults.get(key))
