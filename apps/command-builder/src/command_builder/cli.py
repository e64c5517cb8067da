"""CLI entry point and verb dispatch."""

from __future__ import annotations

import sys

from .config import AppConfig, load_config
from .constants import (
    CLI_USAGE,
    PROG_NAME,
    VERB_CLEAR,
    VERB_EXEC,
    VERB_LS,
    VERB_OP,
    VERBS_ADD,
    VERBS_BACK,
    VERBS_HELP,
)
from .definition_store import DefinitionStore
from .errors import (
    CommandBuilderError,
    ConfigError,
    DefinitionUnavailableError,
    PathUnresolvedError,
    StorageError,
)
from .logging_utils import log_event, setup_logging
from .models import CommandDefinition, Node, SessionState
from .navigator import resolve_context
from .paths import StorageLocation, resolve_storage_location
from .presenters import (
    render_cached_names,
    render_command,
    render_error,
    render_flag_listing,
    render_node_listing,
)
from .registry_client import RegistryClient
from .resolver import DefinitionResolver
from .scraper import HelpScraper
from .state_store import clear_state, load_state, save_state

_CONTEXT_NOT_FOUND = "Current context not found in definition."


def build_resolver(location: StorageLocation, config: AppConfig) -> DefinitionResolver:
    store = DefinitionStore(location)
    registry = RegistryClient(
        store,
        base_url=config.registry_url,
        timeout_sec=config.registry_timeout_sec,
    )
    return DefinitionResolver(store, registry, HelpScraper(store))


def main(argv: list[str] | None = None) -> int:
    """Application entry point. Returns the process exit code."""
    args = list(sys.argv[1:] if argv is None else argv)

    if args and args[0] in VERBS_HELP:
        print(CLI_USAGE, end="")
        return 0

    location = resolve_storage_location()
    try:
        location.ensure()
        config = load_config(location.config_file)
        setup_logging(config.log_file)
        state = load_state(location.state_file)
    except (StorageError, ConfigError) as exc:
        print(render_error(str(exc)), file=sys.stderr)
        return 1

    try:
        return _dispatch(args, state, location, config)
    except CommandBuilderError as exc:
        print(render_error(str(exc)), file=sys.stderr)
        return 1


def _dispatch(
    args: list[str], state: SessionState, location: StorageLocation, config: AppConfig
) -> int:
    if not args:
        print(render_command(state.command_parts))
        return 0

    verb = args[0]
    log_event("cli_command", verb=verb, tokens=len(args) - 1)

    if verb == VERB_LS:
        return _handle_ls(state, location, config)
    if verb == VERB_OP:
        return _handle_op(state, location, config)
    if verb == VERB_EXEC:
        return _handle_exec(state, location)

    if verb in VERBS_ADD:
        if len(args) < 2:
            print(f"Usage: {PROG_NAME} add <subcommand> [args...]")
            return 0
        state.command_parts.extend(args[1:])
    elif verb in VERBS_BACK:
        if not state.command_parts:
            print(render_command(state.command_parts))
            return 0
        state.command_parts.pop()
    elif verb == VERB_CLEAR:
        state.command_parts = []
    else:
        # Implicit add: every argument is a command part.
        state.command_parts.extend(args)

    save_state(state, location.state_file)
    print(render_command(state.command_parts))
    return 0


def _handle_ls(state: SessionState, location: StorageLocation, config: AppConfig) -> int:
    if not state.command_parts:
        for line in render_cached_names(DefinitionStore(location).list()):
            print(line)
        return 0

    node = _current_node(state, location, config)
    if node is None:
        return 0
    for line in render_node_listing(node):
        print(line)
    return 0


def _handle_op(state: SessionState, location: StorageLocation, config: AppConfig) -> int:
    if not state.command_parts:
        print("No command context.")
        return 0

    node = _current_node(state, location, config)
    if node is None:
        return 0
    for line in render_flag_listing(node.flags):
        print(line)
    return 0


def _handle_exec(state: SessionState, location: StorageLocation) -> int:
    if not state.command_parts:
        return 0
    # Printed for a shell wrapper to run; cb never executes it.
    print(" ".join(state.command_parts))
    clear_state(location.state_file)
    return 0


def _current_node(
    state: SessionState, location: StorageLocation, config: AppConfig
) -> Node | None:
    root_name, *path = state.command_parts
    resolver = build_resolver(location, config)
    try:
        definition: CommandDefinition = resolver.resolve(root_name)
    except DefinitionUnavailableError:
        print(f"No definition found for '{root_name}'.")
        return None

    try:
        return resolve_context(definition, path)
    except PathUnresolvedError:
        print(_CONTEXT_NOT_FOUND)
        return None
