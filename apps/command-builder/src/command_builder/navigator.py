"""Locating the current position inside a definition tree."""

from __future__ import annotations

from collections.abc import Sequence

from .constants import FLAG_PREFIX
from .errors import PathUnresolvedError
from .models import Node


def find_node(root: Node, path: Sequence[str]) -> Node | None:
    """Walk `path` through nested subcommands.

    Matching is exact, case-sensitive and first-match per level, with no
    backtracking. Returns None as soon as a token has no matching child.
    """
    current = root
    for token in path:
        for child in current.subcommands:
            if child.name == token:
                current = child
                break
        else:
            return None
    return current


def strip_trailing_flag(path: Sequence[str]) -> list[str]:
    """Drop a final flag-like token so its parent context is shown.

    Whether the flag takes a value is unknown, so any flag-like token is
    dropped alike.
    """
    tokens = list(path)
    if tokens and tokens[-1].startswith(FLAG_PREFIX):
        tokens.pop()
    return tokens


def resolve_context(root: Node, path: Sequence[str]) -> Node:
    """Return the node for the user's position, after trailing-flag stripping."""
    tokens = strip_trailing_flag(path)
    if not tokens:
        return root
    node = find_node(root, tokens)
    if node is None:
        raise PathUnresolvedError(tokens)
    return node
