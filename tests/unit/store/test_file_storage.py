"""Unit tests for plist and YAML file stores."""

from __future__ import annotations

import plistlib
from datetime import datetime, timedelta, timezone

import pytest
import yaml

from core.errors import StoreError, StoreTransactionError
from core.types import Uri
from store.file_storage import FileStorage
from store.plist_storage import PlistStorage
from store.storage_contract import transaction
from store.yaml_storage import YamlStorage


@pytest.fixture(params=["xml", "binary", "yaml"])
def file_store(request: pytest.FixtureRequest, tmp_path) -> FileStorage:
    """Build one file store per supported encoding."""
    if request.param == "yaml":
        return YamlStorage(tmp_path / "store.yaml")
    return PlistStorage(tmp_path / "store.plist", binary=request.param == "binary")


def test_missing_file_opens_empty(file_store: FileStorage) -> None:
    """A missing file should give an empty snapshot without error."""
    with transaction(file_store):
        value = file_store.get("Car.doors")

    assert value is None and not file_store.path.exists()


def test_close_without_set_does_not_create_file(file_store: FileStorage) -> None:
    """Read-only transactions should never write the file."""
    with transaction(file_store):
        file_store.get("anything")

    assert not file_store.path.exists()


def test_values_roundtrip_through_file(file_store: FileStorage) -> None:
    """Supported values should read back equal after a commit."""
    values = {
        "name": "Dory",
        "age": 25,
        "ratio": 0.5,
        "flag": True,
        "blob": b"\x00\x01",
        "web": Uri("https://dory.me"),
        "birthday": datetime(2017, 4, 5, 12, 30, 15),
        "numbers": [1, 7, 9],
        "distances": {"Kensington rd. 75": 125.8},
    }
    with transaction(file_store):
        for key, value in values.items():
            file_store.set(key, value)

    with transaction(file_store):
        loaded = {key: file_store.get(key) for key in values}

    assert loaded == values


def test_get_does_not_see_sets_from_same_transaction(file_store: FileStorage) -> None:
    """Reads should only see the snapshot loaded at open."""
    with transaction(file_store):
        file_store.set("Car.doors", 7)
        value = file_store.get("Car.doors")

    assert value is None


def test_set_keeps_unrelated_keys(file_store: FileStorage) -> None:
    """Writing one key should keep other keys already in the file."""
    with transaction(file_store):
        file_store.set("Car.doors", 7)
        file_store.set("Car.wheels", 4)
    with transaction(file_store):
        file_store.set("Car.wheels", 3)

    with transaction(file_store):
        loaded = (file_store.get("Car.doors"), file_store.get("Car.wheels"))

    assert loaded == (7, 3)


def test_set_none_removes_key_from_file(file_store: FileStorage) -> None:
    """Setting None should drop the key on the next write."""
    with transaction(file_store):
        file_store.set("Car.doors", 7)
    with transaction(file_store):
        file_store.set("Car.doors", None)

    with transaction(file_store):
        value = file_store.get("Car.doors")

    assert value is None and file_store.path.exists()


def test_registered_defaults_are_ignored(file_store: FileStorage) -> None:
    """File stores should not serve or persist registered defaults."""
    file_store.register_defaults({"Car.doors": 3})

    with transaction(file_store):
        value = file_store.get("Car.doors")

    assert value is None and not file_store.path.exists()


def test_open_twice_is_rejected(file_store: FileStorage) -> None:
    """Only one transaction may be open per file store."""
    file_store.open_transaction()

    with pytest.raises(StoreTransactionError):
        file_store.open_transaction()

    assert file_store.in_transaction


def test_plist_reads_existing_file(tmp_path) -> None:
    """A plist written by another tool should be readable."""
    plist_path = tmp_path / "Car.plist"
    plist_path.write_bytes(plistlib.dumps({"Car.doors": 7, "Car.wheels": 4}))
    store = PlistStorage(plist_path)

    with transaction(store):
        doors = store.get("Car.doors")

    assert doors == 7


def test_binary_plist_writes_binary_header(tmp_path) -> None:
    """Binary mode should produce a bplist00 file."""
    store = PlistStorage(tmp_path / "Car.plist", binary=True)

    with transaction(store):
        store.set("Car.doors", 7)

    assert store.path.read_bytes().startswith(b"bplist00")


def test_yaml_store_writes_plain_strings_for_uris(tmp_path) -> None:
    """URIs should be stored as plain YAML strings."""
    store = YamlStorage(tmp_path / "store.yaml")

    with transaction(store):
        store.set("web", Uri("https://dory.me"))

    assert yaml.safe_load(store.path.read_text(encoding="utf-8")) == {"web": "https://dory.me"}


def test_corrupt_plist_raises_store_error(tmp_path) -> None:
    """Unparseable files should surface as StoreError on open."""
    plist_path = tmp_path / "broken.plist"
    plist_path.write_bytes(b"<plist><dict><key>a</key>")
    store = PlistStorage(plist_path)

    with pytest.raises(StoreError):
        store.open_transaction()

    assert store.in_transaction is False


def test_non_mapping_yaml_raises_store_error(tmp_path) -> None:
    """A YAML document that is not a mapping cannot back a store."""
    yaml_path = tmp_path / "list.yaml"
    yaml_path.write_text("- 1\n- 2\n", encoding="utf-8")
    store = YamlStorage(yaml_path)

    with pytest.raises(StoreError, match="dictionary"):
        store.open_transaction()

    assert store.in_transaction is False


def test_unencodable_value_raises_store_error_and_closes(tmp_path) -> None:
    """Encoding failures should raise StoreError and end the transaction."""
    store = PlistStorage(tmp_path / "store.plist")

    with pytest.raises(StoreError):
        with transaction(store):
            store.set("huge", 2**80)

    assert store.in_transaction is False and not store.path.exists()


@pytest.mark.parametrize("binary", [False, True])
def test_plist_keeps_instant_of_aware_timestamp(tmp_path, binary: bool) -> None:
    """Aware datetimes should be stored as the same instant in naive UTC."""
    store = PlistStorage(tmp_path / "store.plist", binary=binary)
    with transaction(store):
        store.set(
            "Person.birthday",
            datetime(2020, 5, 1, 10, 0, tzinfo=timezone(timedelta(hours=2))),
        )

    with transaction(store):
        restored = store.get("Person.birthday")

    assert restored == datetime(2020, 5, 1, 8, 0)


@pytest.mark.parametrize("binary", [False, True])
def test_plist_converts_aware_timestamps_inside_collections(tmp_path, binary: bool) -> None:
    """Nested aware datetimes should also be written as naive UTC."""
    store = PlistStorage(tmp_path / "store.plist", binary=binary)
    with transaction(store):
        store.set(
            "Person.visits",
            {"first": [datetime(2020, 5, 1, 0, 30, tzinfo=timezone(timedelta(hours=-1)))]},
        )

    with transaction(store):
        restored = store.get("Person.visits")

    assert restored == {"first": [datetime(2020, 5, 1, 1, 30)]}
