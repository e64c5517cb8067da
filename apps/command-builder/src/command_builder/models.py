"""Domain models for command-builder."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator

from .constants import DEFAULT_FLAG_TYPE


class Flag(BaseModel):
    name: str
    description: str = ""
    # Advisory only; nothing validates flag values against it.
    type: str = DEFAULT_FLAG_TYPE


class Argument(BaseModel):
    name: str
    description: str = ""
    required: bool = False


class Node(BaseModel):
    """A point in a command's grammar tree.

    Children are owned exclusively by their parent's `subcommands` list.
    """

    name: str
    description: str = ""
    subcommands: list[Node] = []
    flags: list[Flag] = []
    args: list[Argument] = []

    @field_validator("subcommands", "flags", "args", mode="before")
    @classmethod
    def _null_collection_is_empty(cls, value: Any) -> Any:
        # `flags:` with no items loads as None from YAML.
        return [] if value is None else value

    @field_validator("description", mode="before")
    @classmethod
    def _null_description_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class CommandDefinition(Node):
    """Root node of a definition; the unit of persistence."""


class SessionState(BaseModel):
    # e.g. ["git", "commit", "-m"]
    command_parts: list[str] = []
