"""YAML file store.

This module persists store values as one YAML mapping document.
"""

from __future__ import annotations

import yaml  # type: ignore[import-untyped]

from core.errors import StoreError
from store.file_storage import FileStorage


class YamlStorage(FileStorage):
    """Store backed by one YAML file."""

    def _decode(self, raw: bytes) -> object:
        try:
            return yaml.safe_load(raw.decode("utf-8"))
        except (UnicodeDecodeError, yaml.YAMLError) as error:
            raise StoreError(
                f"Failed to parse YAML store {self.path}: {error}. Remove or repair the file."
            ) from error

    def _encode(self, payload: dict[str, object]) -> bytes:
        try:
            text = yaml.safe_dump(payload, sort_keys=True, allow_unicode=True)
        except yaml.YAMLError as error:
            raise StoreError(f"Failed to encode YAML store {self.path}: {error}.") from error
        return text.encode("utf-8")
