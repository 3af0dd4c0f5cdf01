"""Transactional key/value storage contract.

This module defines the interface the marshalling engine depends on and
a context manager that guarantees an opened transaction is closed.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Mapping, Protocol

from core.errors import StoreError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


class Storage(Protocol):
    """Key/value store with an open/close transaction bracket.

    At most one transaction may be open per store instance. Setting a
    key to None removes it.
    """

    def open_transaction(self) -> None:
        """Begin a sequence of store operations."""

    def register_defaults(self, default_values: Mapping[str, object]) -> None:
        """Register values returned when no explicit value is set."""

    def get(self, key: str) -> object | None:
        """Return the stored value for key, or None when absent."""

    def set(self, key: str, value: object | None) -> None:
        """Store value under key, removing the key when value is None."""

    def close_transaction(self) -> None:
        """Commit every set since the transaction was opened."""


@contextmanager
def transaction(store: Storage) -> Iterator[Storage]:
    """Run a block inside one store transaction.

    The transaction is closed on both success and failure paths. When
    opening fails nothing is closed and the error propagates. When the
    block fails and closing fails too, the block error is raised and the
    close error is logged.

    Args:
        store: Store to bracket.

    Yields:
        The same store, with its transaction open.
    """
    store.open_transaction()
    try:
        yield store
    except BaseException:
        try:
            store.close_transaction()
        except StoreError as close_error:
            _LOGGER.warning(
                "transaction_close_failed",
                store=type(store).__name__,
                reason=str(close_error),
            )
        raise
    store.close_transaction()
