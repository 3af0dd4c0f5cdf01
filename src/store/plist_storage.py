"""Property list file store.

This module persists store values as an XML or binary property list.
Property lists hold timestamps without an offset, so timezone-aware
datetimes are written as naive UTC and read back that way.
"""

from __future__ import annotations

import plistlib
from datetime import datetime, timezone
from pathlib import Path
from xml.parsers.expat import ExpatError

from core.errors import StoreError
from store.file_storage import FileStorage


class PlistStorage(FileStorage):
    """Store backed by one property list file."""

    def __init__(self, path: Path | str, binary: bool = False) -> None:
        """Initialize plist store.

        Args:
            path: Plist file path; created on first write.
            binary: Write binary plists instead of XML.
        """
        super().__init__(path)
        self._plist_format = plistlib.FMT_BINARY if binary else plistlib.FMT_XML

    def _decode(self, raw: bytes) -> object:
        try:
            return plistlib.loads(raw)
        except (plistlib.InvalidFileException, ExpatError, ValueError) as error:
            raise StoreError(
                f"Failed to parse plist store {self.path}: {error}. Remove or repair the file."
            ) from error

    def _encode(self, payload: dict[str, object]) -> bytes:
        try:
            return plistlib.dumps(
                _utc_timestamps(payload), fmt=self._plist_format, sort_keys=True
            )
        except (TypeError, OverflowError) as error:
            raise StoreError(
                f"Failed to encode plist store {self.path}: {error}."
            ) from error


def _utc_timestamps(value: object) -> object:
    """Return value with aware datetimes converted to naive UTC."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    if isinstance(value, list):
        return [_utc_timestamps(item) for item in value]
    if isinstance(value, dict):
        return {key: _utc_timestamps(item) for key, item in value.items()}
    return value
