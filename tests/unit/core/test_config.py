"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import PersistableConfig
from core.errors import PersistableConfigError


def test_from_env_reads_data_root(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve data root from environment."""
    monkeypatch.setenv("PERSISTABLE_DATA_ROOT", "./.tmp-persistable")

    config = PersistableConfig.from_env()

    assert config.data_root.name == ".tmp-persistable"


def test_from_env_uses_plist_xml_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should default to XML plist file stores."""
    monkeypatch.delenv("PERSISTABLE_FILE_FORMAT", raising=False)
    monkeypatch.delenv("PERSISTABLE_PLIST_FORMAT", raising=False)

    config = PersistableConfig.from_env()

    assert (config.file_format, config.plist_format) == ("plist", "xml")


def test_from_env_normalizes_format_case(monkeypatch: pytest.MonkeyPatch) -> None:
    """Format values should be accepted case-insensitively."""
    monkeypatch.setenv("PERSISTABLE_FILE_FORMAT", " YAML ")

    config = PersistableConfig.from_env()

    assert config.file_format == "yaml"


def test_from_env_raises_for_unknown_file_format(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for unsupported file store formats."""
    monkeypatch.setenv("PERSISTABLE_FILE_FORMAT", "ini")

    with pytest.raises(PersistableConfigError, match="PERSISTABLE_FILE_FORMAT"):
        PersistableConfig.from_env()


def test_from_env_raises_for_unknown_plist_format(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for unsupported plist encodings."""
    monkeypatch.setenv("PERSISTABLE_PLIST_FORMAT", "json")

    with pytest.raises(PersistableConfigError):
        PersistableConfig.from_env()
