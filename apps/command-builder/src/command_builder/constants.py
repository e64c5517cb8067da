"""Centralized constants for command-builder."""

from __future__ import annotations

# Application identity and storage layout
APP_NAME = "command_builder"
PROG_NAME = "cb"
HOME_ENV_VAR = "CB_HOME"
DEFAULT_HOME_DIR = "~/.config/command-builder"
DEFINITIONS_DIR_NAME = "definitions"
STATE_FILE_NAME = "state.json"
CONFIG_FILE_NAME = "config.json"
DEFINITION_FILE_SUFFIX = ".yaml"

# Registry
DEFAULT_REGISTRY_URL = (
    "https://raw.githubusercontent.com/MatthewLarson/"
    "command-builder-definitions/main/definitions/"
)
DEFAULT_REGISTRY_TIMEOUT_SEC = 10.0
ENV_REGISTRY_URL = "CB_REGISTRY_URL"
ENV_REGISTRY_TIMEOUT_SEC = "CB_REGISTRY_TIMEOUT_SEC"
ENV_LOG_FILE = "CB_LOG_FILE"

# Help-text scraping
HELP_FLAG = "--help"
SCRAPED_DESCRIPTION = "Auto-generated from --help"
DEFAULT_FLAG_TYPE = "string"
SECTION_HEADER_WORDS = frozenset({"usage:", "options:", "commands:", "arguments:"})

# Navigation
FLAG_PREFIX = "-"

# Resolution status lines
STATUS_SEARCHING_REGISTRY = "Definition for '{name}' not found locally. Searching registry..."
STATUS_DOWNLOADED = "Downloaded definition from registry."
STATUS_SCRAPING = "Definition not found in registry. Attempting to scrape '--help'..."
STATUS_GENERATED = "Generated definition from help output."

# Rendering
FALLBACK_TERMINAL_WIDTH = 80
MIN_DESCRIPTION_WIDTH = 20
NAME_INDENT = "  "
COLUMN_PADDING = 4
DESCRIPTION_RESERVE = 8
EMPTY_COMMAND_TEXT = "(empty)"
ERROR_PREFIX = "ERROR:"

# CLI verbs
VERB_LS = "ls"
VERB_OP = "op"
VERBS_ADD = frozenset({"add", "cd"})
VERBS_BACK = frozenset({"..", "back"})
VERB_CLEAR = "clear"
VERB_EXEC = "exec"
VERBS_HELP = frozenset({"help", "-h", "--help"})

CLI_USAGE = """\
Usage: cb [<verb>] [tokens...]

Verbs:
  (none)             Show the command under construction.
  ls                 List arguments, subcommands and options at the current position.
  op                 List options only at the current position.
  add <tokens...>    Append tokens (alias: cd). Unknown verbs are appended too.
  .. | back          Remove the last token.
  clear              Reset the command under construction.
  exec               Print the assembled command and reset.
  help, -h, --help   Show this help message.

Environment:
  CB_HOME                    Storage directory (default ~/.config/command-builder).
  CB_REGISTRY_URL            Base URL of the definitions registry.
  CB_REGISTRY_TIMEOUT_SEC    Registry request timeout in seconds.
  CB_LOG_FILE                Write structured logs to this file.
"""
