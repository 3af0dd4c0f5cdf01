"""Once-per-lifetime default value registration.

This module tracks which key prefixes already had their initial field
values registered with a store. The tracked set is append-only for the
registry's lifetime and guarded by a lock so concurrent records sharing
a prefix register exactly once.
"""

from __future__ import annotations

from threading import Lock
from typing import Callable, Mapping

from core.logging_config import get_logger
from store.storage_contract import Storage

_LOGGER = get_logger(__name__)


class DefaultsRegistry:
    """Thread-safe set of key prefixes whose defaults were registered."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._registered: set[str] = set()

    def register_once(
        self,
        store: Storage,
        key_prefix: str,
        values_factory: Callable[[], Mapping[str, object]],
    ) -> bool:
        """Register initial values for a key prefix unless already done.

        Args:
            store: Store receiving the default values.
            key_prefix: Record namespace being registered.
            values_factory: Builds storage key to initial value mapping.
                Only called when registration happens.

        Returns:
            True when defaults were registered by this call.
        """
        with self._lock:
            if key_prefix in self._registered:
                return False
            default_values = dict(values_factory())
            store.register_defaults(default_values)
            self._registered.add(key_prefix)
        _LOGGER.debug(
            "defaults_registered",
            key_prefix=key_prefix,
            key_count=len(default_values),
        )
        return True

    def is_registered(self, key_prefix: str) -> bool:
        """Return whether defaults for a key prefix were registered."""
        with self._lock:
            return key_prefix in self._registered

    def registered_prefixes(self) -> frozenset[str]:
        """Return a snapshot of registered key prefixes."""
        with self._lock:
            return frozenset(self._registered)


PROCESS_DEFAULTS_REGISTRY = DefaultsRegistry()
