"""Core constants used across Persistable modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".persistable")
KEY_SEPARATOR = "."
CONTROL_FIELD_NAMES = frozenset({"store", "key_prefix"})
SUPPORTED_FILE_FORMATS = ("plist", "yaml")
DEFAULT_FILE_FORMAT = "plist"
SUPPORTED_PLIST_FORMATS = ("xml", "binary")
DEFAULT_PLIST_FORMAT = "xml"
PLIST_FILE_SUFFIX = ".plist"
YAML_FILE_SUFFIX = ".yaml"
TEMP_FILE_SUFFIX = ".tmp"
