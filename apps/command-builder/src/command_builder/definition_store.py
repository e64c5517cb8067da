"""YAML definition persistence, one document per root command."""

from __future__ import annotations

import logging
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .constants import DEFINITION_FILE_SUFFIX
from .errors import DefinitionNotFoundError, DefinitionParseError, StorageError
from .logging_utils import log_event
from .models import CommandDefinition
from .paths import StorageLocation, definition_file_stem


_KEPT_IMPLICIT_TAGS = frozenset({"tag:yaml.org,2002:null", "tag:yaml.org,2002:merge"})


class _DefinitionLoader(yaml.SafeLoader):
    """SafeLoader that only types `null`, merge keys and `true`/`false` implicitly.

    Every other plain scalar stays a string, so grammar tokens such as
    `on`, `no` or `2.0` keep their authored spelling.
    """


_DefinitionLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag in _KEPT_IMPLICIT_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_DefinitionLoader.add_implicit_resolver(
    "tag:yaml.org,2002:bool",
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


class DefinitionStore:
    """Reads and writes definition documents under the definitions directory."""

    def __init__(self, location: StorageLocation) -> None:
        self.location = location

    def load(self, name: str) -> CommandDefinition:
        """Load the definition for `name`.

        Raises DefinitionNotFoundError when no document exists and
        DefinitionParseError when the stored document is malformed.
        """
        path = self.path_for(name)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            log_event(
                "definition_load_failed", logging.DEBUG, command=name, reason="not_found"
            )
            raise DefinitionNotFoundError(name) from exc
        except OSError as exc:
            raise StorageError(f"Failed to read definition file: {path}: {exc}") from exc

        try:
            definition = parse_definition_document(name, text)
        except DefinitionParseError as exc:
            log_event(
                "definition_load_failed",
                logging.WARNING,
                command=name,
                reason="malformed",
                definition_file=path,
                error=str(exc),
            )
            raise
        log_event("definition_loaded", logging.DEBUG, command=name, definition_file=path)
        return definition

    def list(self) -> list[str]:
        """Return the names of all cached definitions."""
        directory = self.location.definitions_dir
        if not directory.is_dir():
            return []
        try:
            entries = list(directory.iterdir())
        except OSError as exc:
            raise StorageError(f"Failed to list definitions: {directory}: {exc}") from exc
        return sorted(
            entry.name[: -len(DEFINITION_FILE_SUFFIX)]
            for entry in entries
            if entry.is_file() and entry.name.endswith(DEFINITION_FILE_SUFFIX)
        )

    def save(self, definition: CommandDefinition) -> None:
        """Write `definition`, replacing any document with the same name."""
        self.save_raw(definition.name, dump_definition_document(definition).encode("utf-8"))

    def save_raw(self, name: str, content: bytes) -> None:
        """Write an already-serialized document verbatim."""
        path = self.path_for(name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as exc:
            raise StorageError(f"Failed to save definition file: {path}: {exc}") from exc
        log_event("definition_saved", command=name, definition_file=path, size_bytes=len(content))

    def path_for(self, name: str) -> Path:
        if not definition_file_stem(name.strip()):
            raise DefinitionNotFoundError(name, "Command name must not be empty.")
        return self.location.definition_path(name)


def parse_definition_document(name: str, text: str) -> CommandDefinition:
    """Parse a YAML document into a definition tree, all or nothing."""
    try:
        data = yaml.load(text, Loader=_DefinitionLoader)
    except yaml.YAMLError as exc:
        raise DefinitionParseError(name, f"invalid YAML ({exc})") from exc

    if not isinstance(data, dict):
        raise DefinitionParseError(name, "document must be a mapping")

    data = dict(data)
    if data.get("name") in (None, ""):
        data["name"] = name

    try:
        return CommandDefinition.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise DefinitionParseError(name, f"{location}: {first.get('msg')}") from exc


def dump_definition_document(definition: CommandDefinition) -> str:
    """Serialize a definition to YAML, omitting default-valued fields."""
    data = definition.model_dump(mode="json", exclude_defaults=True)
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False, allow_unicode=True)
