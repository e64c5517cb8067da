"""Tests for YAML definition persistence."""

import json
import logging
from pathlib import Path

import pytest
import yaml

from command_builder.definition_store import (
    DefinitionStore,
    dump_definition_document,
    parse_definition_document,
)
from command_builder.errors import DefinitionNotFoundError, DefinitionParseError
from command_builder.models import CommandDefinition, Flag
from command_builder.paths import StorageLocation


def test_load_missing_definition_raises_not_found(store: DefinitionStore) -> None:
    with pytest.raises(DefinitionNotFoundError, match="No definition stored for 'kubectl'"):
        store.load("kubectl")


def test_save_and_load_roundtrip(
    store: DefinitionStore, git_definition: CommandDefinition
) -> None:
    store.save(git_definition)

    restored = store.load("git")
    assert restored.model_dump() == git_definition.model_dump()


def test_save_creates_definitions_directory(
    location: StorageLocation, git_definition: CommandDefinition
) -> None:
    assert not location.definitions_dir.exists()

    DefinitionStore(location).save(git_definition)

    assert (location.definitions_dir / "git.yaml").is_file()


def test_save_replaces_existing_document(store: DefinitionStore) -> None:
    store.save(CommandDefinition(name="tool", flags=[Flag(name="--old")]))
    store.save(CommandDefinition(name="tool", flags=[Flag(name="--new")]))

    assert [f.name for f in store.load("tool").flags] == ["--new"]


def test_list_returns_cached_names(store: DefinitionStore) -> None:
    assert store.list() == []

    store.save(CommandDefinition(name="git"))
    store.save(CommandDefinition(name="docker"))
    (store.location.definitions_dir / "notes.txt").write_text("x", encoding="utf-8")

    assert set(store.list()) == {"git", "docker"}


def test_malformed_yaml_raises_parse_error(store: DefinitionStore) -> None:
    store.save_raw("broken", b"name: broken\nflags: [unclosed\n")

    with pytest.raises(DefinitionParseError, match="'broken' is malformed"):
        store.load("broken")


def test_non_mapping_document_raises_parse_error(store: DefinitionStore) -> None:
    store.save_raw("html", b"<html>404: Not Found</html>\n")

    with pytest.raises(DefinitionParseError):
        store.load("html")


def test_wrongly_typed_fields_raise_parse_error() -> None:
    with pytest.raises(DefinitionParseError, match="flags"):
        parse_definition_document("tool", "name: tool\nflags: 12\n")


def test_yaml_1_1_keywords_stay_strings() -> None:
    text = (
        "name: nmcli\n"
        "subcommands:\n"
        "  - name: on\n"
        "    description: 2.0\n"
        "  - name: off\n"
        "    args:\n"
        "      - name: no\n"
        "        required: true\n"
    )

    definition = parse_definition_document("nmcli", text)

    on, off = definition.subcommands
    assert on.name == "on"
    assert on.description == "2.0"
    assert off.name == "off"
    assert off.args[0].name == "no"
    assert off.args[0].required is True


def test_keyword_names_survive_save_and_load(store: DefinitionStore) -> None:
    definition = CommandDefinition.model_validate(
        {"name": "nmcli", "subcommands": [{"name": "on"}, {"name": "yes"}]}
    )

    store.save(definition)

    assert [node.name for node in store.load("nmcli").subcommands] == ["on", "yes"]


def test_missing_definition_logs_load_failure(
    store: DefinitionStore, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.DEBUG, logger="command_builder")

    with pytest.raises(DefinitionNotFoundError):
        store.load("kubectl")

    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["event"] == "definition_load_failed"
    assert payload["reason"] == "not_found"


def test_malformed_definition_logs_load_failure(
    store: DefinitionStore, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.DEBUG, logger="command_builder")
    store.save_raw("broken", b"- just\n- a list\n")

    with pytest.raises(DefinitionParseError):
        store.load("broken")

    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["event"] == "definition_load_failed"
    assert payload["reason"] == "malformed"
    assert caplog.records[-1].levelno == logging.WARNING


def test_omitted_fields_are_legal() -> None:
    text = "description: Minimal\nsubcommands:\n  - name: run\n    flags:\n      - name: --detach\n"

    definition = parse_definition_document("docker", text)

    assert definition.name == "docker"
    assert definition.flags == []
    assert definition.subcommands[0].flags[0].type == "string"
    assert definition.subcommands[0].subcommands == []


def test_dump_omits_default_fields(git_definition: CommandDefinition) -> None:
    data = yaml.safe_load(dump_definition_document(git_definition))

    commit = data["subcommands"][1]
    assert commit["name"] == "commit"
    assert "subcommands" not in commit
    assert "args" not in commit
    assert "type" not in commit["flags"][0]
    assert data["subcommands"][0]["subcommands"][0]["args"][0]["required"] is True


def test_save_raw_writes_bytes_verbatim(store: DefinitionStore) -> None:
    content = b"# authored upstream\nname: jq\n"

    store.save_raw("jq", content)

    assert store.path_for("jq").read_bytes() == content


def test_separator_and_underscore_names_share_a_document(store: DefinitionStore) -> None:
    assert store.path_for("a/b") == store.path_for("a_b")


def test_command_names_are_sanitized_for_file_names(store: DefinitionStore) -> None:
    path = store.path_for("../etc/passwd")

    assert path.parent == store.location.definitions_dir
    assert path.name == ".._etc_passwd.yaml"


def test_empty_name_is_rejected(store: DefinitionStore) -> None:
    with pytest.raises(DefinitionNotFoundError):
        store.load("  ")


def test_definition_store_uses_injected_location(tmp_path: Path) -> None:
    location = StorageLocation(home=tmp_path / "elsewhere")
    DefinitionStore(location).save(CommandDefinition(name="tool"))

    assert (tmp_path / "elsewhere" / "definitions" / "tool.yaml").exists()
