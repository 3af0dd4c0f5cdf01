"""Config-driven construction of file stores."""

from __future__ import annotations

from core.config import PersistableConfig
from core.constants import PLIST_FILE_SUFFIX, YAML_FILE_SUFFIX
from store.file_storage import FileStorage
from store.plist_storage import PlistStorage
from store.yaml_storage import YamlStorage


def file_storage_from_config(config: PersistableConfig, store_name: str) -> FileStorage:
    """Build the configured file store for a named store.

    Args:
        config: Runtime configuration.
        store_name: File stem under the data root.

    Returns:
        Plist or YAML store located under config.data_root.
    """
    if config.file_format == "yaml":
        return YamlStorage(config.data_root / f"{store_name}{YAML_FILE_SUFFIX}")
    return PlistStorage(
        config.data_root / f"{store_name}{PLIST_FILE_SUFFIX}",
        binary=config.plist_format == "binary",
    )
