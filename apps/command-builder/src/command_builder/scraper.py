"""Derive definitions by running a program's own `--help`."""

from __future__ import annotations

import logging
import subprocess

from .constants import HELP_FLAG
from .definition_store import DefinitionStore
from .errors import ExecutionError
from .help_parser import parse_help_lines, parse_help_text
from .logging_utils import log_event
from .models import CommandDefinition


class HelpScraper:
    """Builds a best-effort definition from help output.

    Subcommands found at the root get one more `<name> <sub> --help` pass for
    their flags; nothing deeper is crawled.
    """

    def __init__(self, store: DefinitionStore) -> None:
        self.store = store

    def scrape(self, name: str) -> CommandDefinition:
        log_event("scrape_started", command=name)
        definition = parse_help_text(name, capture_help_text([name]))

        for subcommand in definition.subcommands:
            try:
                text = capture_help_text([name, subcommand.name])
            except ExecutionError as exc:
                log_event(
                    "scrape_subcommand_failed",
                    logging.DEBUG,
                    command=name,
                    subcommand=subcommand.name,
                    error=str(exc),
                )
                continue
            subcommand.flags, _ = parse_help_lines(text)

        self.store.save(definition)
        log_event(
            "scrape_completed",
            command=name,
            flags=len(definition.flags),
            subcommands=len(definition.subcommands),
        )
        return definition


def capture_help_text(command: list[str]) -> str:
    """Run `<command...> --help` and return stdout and stderr together.

    Tools disagree on which stream carries help, so both are captured into
    one. A non-zero exit is accepted as long as something was printed.
    """
    argv = [*command, HELP_FLAG]
    try:
        result = subprocess.run(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise ExecutionError(f"Failed to run {' '.join(argv)}: {exc}") from exc

    output = result.stdout or ""
    if result.returncode != 0 and not output.strip():
        raise ExecutionError(
            f"{' '.join(argv)} exited with status {result.returncode} and no output"
        )
    return output
