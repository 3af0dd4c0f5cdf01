"""Runtime configuration model for Persistable.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DATA_ROOT,
    DEFAULT_FILE_FORMAT,
    DEFAULT_PLIST_FORMAT,
    SUPPORTED_FILE_FORMATS,
    SUPPORTED_PLIST_FORMATS,
)
from core.errors import PersistableConfigError


@dataclass(frozen=True)
class PersistableConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory for file-backed stores.
        file_format: File store backend, either plist or yaml.
        plist_format: Property list encoding, either xml or binary.
    """

    data_root: Path
    file_format: str
    plist_format: str

    @classmethod
    def from_env(cls) -> "PersistableConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            PersistableConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("PERSISTABLE_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        file_format = _parse_choice(
            "PERSISTABLE_FILE_FORMAT",
            os.getenv("PERSISTABLE_FILE_FORMAT", DEFAULT_FILE_FORMAT),
            SUPPORTED_FILE_FORMATS,
        )
        plist_format = _parse_choice(
            "PERSISTABLE_PLIST_FORMAT",
            os.getenv("PERSISTABLE_PLIST_FORMAT", DEFAULT_PLIST_FORMAT),
            SUPPORTED_PLIST_FORMATS,
        )
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            file_format=file_format,
            plist_format=plist_format,
        )


def _parse_choice(variable_name: str, raw_value: str, choices: tuple[str, ...]) -> str:
    """Parse one enumerated environment value.

    Args:
        variable_name: Environment variable name, used in errors.
        raw_value: Raw string from environment.
        choices: Accepted lowercase values.

    Returns:
        Normalized value.

    Raises:
        PersistableConfigError: If value is not one of the choices.
    """
    value = raw_value.strip().lower()
    if value not in choices:
        raise PersistableConfigError(
            f"Invalid {variable_name} value: expected one of {', '.join(choices)}, "
            f"got '{raw_value}'. Set {variable_name} to a supported value."
        )
    return value
