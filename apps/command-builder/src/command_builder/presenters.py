"""User-facing text rendering."""

from __future__ import annotations

import shutil

from .constants import (
    COLUMN_PADDING,
    DESCRIPTION_RESERVE,
    EMPTY_COMMAND_TEXT,
    ERROR_PREFIX,
    FALLBACK_TERMINAL_WIDTH,
    MIN_DESCRIPTION_WIDTH,
    NAME_INDENT,
)
from .models import Flag, Node

_NO_FURTHER_ITEMS = "No further options or subcommands available."
_NO_OPTIONS = "No options available."


def terminal_width() -> int:
    width = shutil.get_terminal_size(fallback=(FALLBACK_TERMINAL_WIDTH, 24)).columns
    return width if width > 0 else FALLBACK_TERMINAL_WIDTH


def wrap_words(text: str, max_width: int) -> list[str]:
    """Split text into lines no longer than max_width, breaking at words.

    A single word longer than max_width is kept whole on its own line.
    """
    words = text.split()
    if not words:
        return []
    lines: list[str] = []
    current = words[0]
    for word in words[1:]:
        if len(current) + 1 + len(word) > max_width:
            lines.append(current)
            current = word
        else:
            current = f"{current} {word}"
    lines.append(current)
    return lines


def render_command(parts: list[str]) -> str:
    if not parts:
        return EMPTY_COMMAND_TEXT
    return " ".join(parts)


def render_error(message: str) -> str:
    return f"{ERROR_PREFIX} {message}"


def render_cached_names(names: list[str]) -> list[str]:
    lines = ["Available commands (definitions found):"]
    if not names:
        lines.append(f"{NAME_INDENT}(none found in local cache)")
    lines.extend(f"{NAME_INDENT}{name}" for name in names)
    return lines


def render_node_listing(node: Node, *, width: int | None = None) -> list[str]:
    """Render arguments, subcommands and options of a node as aligned columns."""
    rows_by_section: list[tuple[str, list[tuple[str, str]]]] = []
    if node.args:
        rows_by_section.append((
            "Arguments:",
            [
                (arg.name, f"{arg.description} {'(Required)' if arg.required else '(Optional)'}")
                for arg in node.args
            ],
        ))
    if node.subcommands:
        rows_by_section.append((
            "Subcommands:",
            [(sub.name, sub.description) for sub in node.subcommands],
        ))
    if node.flags:
        rows_by_section.append((
            "Options:",
            [(flag.name, flag.description) for flag in node.flags],
        ))

    if not rows_by_section:
        return [_NO_FURTHER_ITEMS]

    name_width = max(len(name) for _, rows in rows_by_section for name, _ in rows)
    total_width = width if width is not None else terminal_width()
    desc_width = max(total_width - (name_width + DESCRIPTION_RESERVE), MIN_DESCRIPTION_WIDTH)

    lines: list[str] = []
    for index, (header, rows) in enumerate(rows_by_section):
        if index:
            lines.append("")
        lines.append(header)
        for name, description in rows:
            lines.extend(_render_row(name, description, name_width, desc_width))
    return lines


def render_flag_listing(flags: list[Flag], *, width: int | None = None) -> list[str]:
    if not flags:
        return [_NO_OPTIONS]
    name_width = max(len(flag.name) for flag in flags)
    total_width = width if width is not None else terminal_width()
    desc_width = max(total_width - (name_width + DESCRIPTION_RESERVE), MIN_DESCRIPTION_WIDTH)
    lines: list[str] = []
    for flag in flags:
        lines.extend(_render_row(flag.name, flag.description, name_width, desc_width))
    return lines


def _render_row(name: str, description: str, name_width: int, desc_width: int) -> list[str]:
    wrapped = wrap_words(description, desc_width) or [""]
    gap = " " * COLUMN_PADDING
    lines = [f"{NAME_INDENT}{name:<{name_width}}{gap}{wrapped[0]}".rstrip()]
    blank = " " * name_width
    lines.extend(f"{NAME_INDENT}{blank}{gap}{line}" for line in wrapped[1:])
    return lines
