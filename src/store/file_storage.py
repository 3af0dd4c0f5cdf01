"""File-backed store base.

A transaction loads the whole file into a read snapshot and a write
buffer. Reads only see the snapshot taken at open; writes go to the
buffer, which replaces the file atomically on close when any key was set.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from core.constants import TEMP_FILE_SUFFIX
from core.errors import StoreError, StoreTransactionError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


class FileStorage:
    """Base class for single-file stores.

    Subclasses implement `_decode` and `_encode` for one file format.
    Registered defaults are not applicable to files and are ignored.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser()
        self._snapshot: dict[str, object] | None = None
        self._write_buffer: dict[str, object] = {}
        self._any_key_set = False

    @property
    def path(self) -> Path:
        """Backing file path."""
        return self._path

    @property
    def in_transaction(self) -> bool:
        """Whether a transaction is currently open."""
        return self._snapshot is not None

    def open_transaction(self) -> None:
        """Load the file into a snapshot and a write buffer.

        A missing file yields an empty snapshot.

        Raises:
            StoreTransactionError: If a transaction is already open.
            StoreError: If the file cannot be read or parsed.
        """
        if self._snapshot is not None:
            raise StoreTransactionError(
                f"A transaction is already open on {self._path}. "
                "Close it before opening a new one."
            )
        snapshot = self._read_file()
        self._snapshot = snapshot
        self._write_buffer = dict(snapshot)
        self._any_key_set = False

    def register_defaults(self, default_values: Mapping[str, object]) -> None:
        """Ignore defaults; files only hold explicit values."""

    def get(self, key: str) -> object | None:
        """Return the value for key from the snapshot taken at open."""
        return self._require_snapshot().get(key)

    def set(self, key: str, value: object | None) -> None:
        """Write value for key into the buffer; None removes the key."""
        self._require_snapshot()
        if value is None:
            self._write_buffer.pop(key, None)
        else:
            self._write_buffer[key] = _plain_value(value)
        self._any_key_set = True

    def close_transaction(self) -> None:
        """Write the buffer to disk when any key was set, then end.

        Raises:
            StoreTransactionError: If no transaction is open.
            StoreError: If the file cannot be written.
        """
        self._require_snapshot()
        try:
            if self._any_key_set:
                self._write_file(self._write_buffer)
        finally:
            self._snapshot = None
            self._write_buffer = {}
            self._any_key_set = False

    def _decode(self, raw: bytes) -> object:
        raise NotImplementedError

    def _encode(self, payload: dict[str, object]) -> bytes:
        raise NotImplementedError

    def _read_file(self) -> dict[str, object]:
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_bytes()
        except OSError as error:
            raise StoreError(f"Failed to read store file {self._path}: {error}.") from error
        payload = self._decode(raw) if raw.strip() else {}
        if not isinstance(payload, dict):
            raise StoreError(
                f"Failed to parse store file {self._path}: "
                "expected a dictionary at top level. Remove or repair the file."
            )
        return payload

    def _write_file(self, payload: dict[str, object]) -> None:
        encoded = self._encode(payload)
        temp_path = self._path.with_name(self._path.name + TEMP_FILE_SUFFIX)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_bytes(encoded)
            os.replace(temp_path, self._path)
        except OSError as error:
            raise StoreError(f"Failed to write store file {self._path}: {error}.") from error
        _LOGGER.debug("file_store_written", path=str(self._path), key_count=len(payload))

    def _require_snapshot(self) -> dict[str, object]:
        if self._snapshot is None:
            raise StoreTransactionError(
                f"No transaction is open on {self._path}. Call open_transaction() first."
            )
        return self._snapshot


def _plain_value(value: object) -> object:
    """Convert a storable value into types file encoders accept."""
    if isinstance(value, str):
        return str(value)
    if isinstance(value, bytearray):
        return bytes(value)
    if isinstance(value, list):
        return [_plain_value(item) for item in value]
    if isinstance(value, dict):
        return {key: _plain_value(item) for key, item in value.items()}
    return value
