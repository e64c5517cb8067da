"""Storage location resolution.

Every component that touches the filesystem receives a `StorageLocation`
instead of deriving paths from the home directory on its own.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path

from .constants import (
    CONFIG_FILE_NAME,
    DEFAULT_HOME_DIR,
    DEFINITION_FILE_SUFFIX,
    DEFINITIONS_DIR_NAME,
    HOME_ENV_VAR,
    STATE_FILE_NAME,
)
from .errors import StorageError

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class StorageLocation:
    home: Path

    @property
    def definitions_dir(self) -> Path:
        return self.home / DEFINITIONS_DIR_NAME

    @property
    def state_file(self) -> Path:
        return self.home / STATE_FILE_NAME

    @property
    def config_file(self) -> Path:
        return self.home / CONFIG_FILE_NAME

    def definition_path(self, name: str) -> Path:
        return self.definitions_dir / f"{definition_file_stem(name)}{DEFINITION_FILE_SUFFIX}"

    def ensure(self) -> None:
        """Create the home and definitions directories if absent."""
        try:
            self.definitions_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(
                f"Failed to create storage directory: {self.definitions_dir}: {exc}"
            ) from exc


def resolve_storage_location(environ: dict[str, str] | None = None) -> StorageLocation:
    """Return the storage location, honoring the CB_HOME override."""
    env = os.environ if environ is None else environ
    raw = env.get(HOME_ENV_VAR, "").strip()
    home = Path(raw or DEFAULT_HOME_DIR).expanduser()
    return StorageLocation(home=home.resolve())


def definition_file_stem(name: str) -> str:
    """Use the command token as the file name, sanitized for the filesystem.

    The mapping is lossy: separators and whitespace all become `_`, so `a/b`
    and `a_b` share one document, and `DefinitionStore.list` reports the
    sanitized stem. Root command names are single executable tokens, which
    rarely contain these characters.
    """
    safe = name.replace("/", "_").replace("\\", "_").replace(":", "_")
    return _WHITESPACE_RE.sub("_", safe)
