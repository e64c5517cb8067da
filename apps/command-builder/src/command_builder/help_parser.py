"""Heuristic, line-oriented parsing of `--help` output.

Pure functions only: no processes, no filesystem.
"""

from __future__ import annotations

import re

from .constants import DEFAULT_FLAG_TYPE, SCRAPED_DESCRIPTION, SECTION_HEADER_WORDS
from .models import CommandDefinition, Flag, Node

# "  -f, --flag    Description" (GNU style); the short flag is optional.
_FLAG_LINE_RE = re.compile(r"^\s+(-[a-zA-Z0-9],? )?(--[a-zA-Z0-9-]+)\s+(.*)$")

# "  init          Initialize a repo"; a trailing colon is kept so section
# headers such as "Usage:" can be recognised and dropped.
_SUBCOMMAND_LINE_RE = re.compile(r"^\s+([A-Za-z][\w.-]*:?)\s{2,}(\S.*)$")


def parse_flag_line(line: str) -> Flag | None:
    match = _FLAG_LINE_RE.match(line)
    if match is None:
        return None
    return Flag(name=match.group(2), description=match.group(3).strip(), type=DEFAULT_FLAG_TYPE)


def parse_subcommand_line(line: str) -> Node | None:
    match = _SUBCOMMAND_LINE_RE.match(line)
    if match is None:
        return None
    name = match.group(1)
    if name.lower() in SECTION_HEADER_WORDS:
        return None
    return Node(name=name, description=match.group(2).strip())


def parse_help_lines(text: str) -> tuple[list[Flag], list[Node]]:
    """Classify each line as a flag, a subcommand, or neither.

    Entries keep help-text order; duplicates are not removed.
    """
    flags: list[Flag] = []
    subcommands: list[Node] = []
    for line in text.splitlines():
        flag = parse_flag_line(line)
        if flag is not None:
            flags.append(flag)
            continue
        subcommand = parse_subcommand_line(line)
        if subcommand is not None:
            subcommands.append(subcommand)
    return flags, subcommands


def parse_help_text(name: str, text: str) -> CommandDefinition:
    flags, subcommands = parse_help_lines(text)
    return CommandDefinition(
        name=name,
        description=SCRAPED_DESCRIPTION,
        subcommands=subcommands,
        flags=flags,
    )
