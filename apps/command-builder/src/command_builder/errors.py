"""Custom exception hierarchy for command-builder."""

from __future__ import annotations


class CommandBuilderError(Exception):
    """Base class for all command-builder errors."""


class StorageError(CommandBuilderError):
    """Local storage could not be created, read or written."""


class ConfigError(ValueError, CommandBuilderError):
    """Configuration file or environment override is invalid."""


class UsageError(ValueError, CommandBuilderError):
    """Command usage or user-input errors."""


class DefinitionNotFoundError(CommandBuilderError):
    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        super().__init__(message or f"No definition stored for '{name}'.")


class RegistryNotFoundError(DefinitionNotFoundError):
    def __init__(self, name: str) -> None:
        super().__init__(name, f"Definition for '{name}' not found in registry.")


class DefinitionParseError(CommandBuilderError):
    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        super().__init__(f"Definition for '{name}' is malformed: {reason}")


class RegistryUnavailableError(CommandBuilderError):
    """Registry could not be reached or answered with a non-success status."""


class ExecutionError(CommandBuilderError):
    """Target program could not be run to capture its help text."""


class DefinitionUnavailableError(CommandBuilderError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No definition found for '{name}'.")


class PathUnresolvedError(CommandBuilderError):
    def __init__(self, path: list[str]) -> None:
        self.path = list(path)
        super().__init__(f"Path not found in definition: {' '.join(path)}")
