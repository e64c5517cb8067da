"""Pytest configuration and fixtures for command-builder tests."""

from pathlib import Path

import pytest

from command_builder.definition_store import DefinitionStore
from command_builder.models import Argument, CommandDefinition, Flag, Node
from command_builder.paths import StorageLocation


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point CB_HOME at a temp dir and drop any developer overrides."""
    home = tmp_path / "cb-home"
    monkeypatch.setenv("CB_HOME", str(home))
    for key in ("CB_REGISTRY_URL", "CB_REGISTRY_TIMEOUT_SEC", "CB_LOG_FILE"):
        monkeypatch.delenv(key, raising=False)
    return home


@pytest.fixture
def location(isolated_env: Path) -> StorageLocation:
    return StorageLocation(home=isolated_env)


@pytest.fixture
def store(location: StorageLocation) -> DefinitionStore:
    return DefinitionStore(location)


@pytest.fixture
def git_definition() -> CommandDefinition:
    """A small hand-authored definition with two levels of subcommands."""
    return CommandDefinition(
        name="git",
        description="The stupid content tracker",
        flags=[Flag(name="--version", description="Print the version")],
        subcommands=[
            Node(
                name="remote",
                description="Manage tracked repositories",
                flags=[Flag(name="--verbose", description="Be verbose")],
                subcommands=[
                    Node(
                        name="add",
                        description="Add a remote",
                        args=[
                            Argument(name="name", description="Remote name", required=True),
                            Argument(name="url", description="Remote URL", required=True),
                        ],
                        flags=[Flag(name="--fetch", description="Fetch after adding")],
                    ),
                ],
            ),
            Node(
                name="commit",
                description="Record changes to the repository",
                flags=[Flag(name="--message", description="Commit message")],
            ),
        ],
    )
