"""Tests for help-text scraping via subprocess."""

import subprocess

import pytest

import command_builder.scraper as scraper_module
from command_builder.definition_store import DefinitionStore
from command_builder.errors import DefinitionNotFoundError, ExecutionError
from command_builder.scraper import HelpScraper, capture_help_text

ROOT_HELP = """\
Usage:  tool [options] <command>

Commands:
  init          Initialize a repo
  push          Push changes

Options:
  -v, --verbose    Enable verbose output
"""

INIT_HELP = """\
Usage:  tool init [options]
  --bare          Create a bare repository
  template        Nested subcommand that must not be expanded
"""


def _install_fake_run(monkeypatch: pytest.MonkeyPatch, outputs: dict[tuple[str, ...], object]):
    calls: list[list[str]] = []

    def fake_run(cmd, **kwargs):
        calls.append(list(cmd))
        assert kwargs["stderr"] == subprocess.STDOUT
        outcome = outputs.get(tuple(cmd))
        if isinstance(outcome, Exception):
            raise outcome
        if outcome is None:
            return subprocess.CompletedProcess(cmd, 1, stdout="")
        returncode, stdout = outcome
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout)

    monkeypatch.setattr(scraper_module.subprocess, "run", fake_run)
    return calls


def test_scrape_builds_tree_and_expands_one_level(
    monkeypatch: pytest.MonkeyPatch, store: DefinitionStore
) -> None:
    calls = _install_fake_run(
        monkeypatch,
        {
            ("tool", "--help"): (0, ROOT_HELP),
            ("tool", "init", "--help"): (0, INIT_HELP),
        },
    )

    definition = HelpScraper(store).scrape("tool")

    assert [f.name for f in definition.flags] == ["--verbose"]
    init, push = definition.subcommands
    assert init.name == "init"
    assert init.description == "Initialize a repo"
    assert [f.name for f in init.flags] == ["--bare"]
    assert init.subcommands == []
    assert push.flags == []
    assert calls == [
        ["tool", "--help"],
        ["tool", "init", "--help"],
        ["tool", "push", "--help"],
    ]


def test_scrape_persists_result(monkeypatch: pytest.MonkeyPatch, store: DefinitionStore) -> None:
    _install_fake_run(monkeypatch, {("tool", "--help"): (0, ROOT_HELP)})

    definition = HelpScraper(store).scrape("tool")

    assert store.load("tool").model_dump() == definition.model_dump()


def test_subcommand_failure_is_tolerated(
    monkeypatch: pytest.MonkeyPatch, store: DefinitionStore
) -> None:
    _install_fake_run(
        monkeypatch,
        {
            ("tool", "--help"): (0, ROOT_HELP),
            ("tool", "init", "--help"): PermissionError("denied"),
        },
    )

    definition = HelpScraper(store).scrape("tool")

    assert [s.name for s in definition.subcommands] == ["init", "push"]
    assert all(s.flags == [] for s in definition.subcommands)


def test_missing_executable_raises_execution_error(
    monkeypatch: pytest.MonkeyPatch, store: DefinitionStore
) -> None:
    _install_fake_run(monkeypatch, {("nope", "--help"): FileNotFoundError("nope")})

    with pytest.raises(ExecutionError, match="Failed to run nope --help"):
        HelpScraper(store).scrape("nope")

    with pytest.raises(DefinitionNotFoundError):
        store.load("nope")


def test_nonzero_exit_without_output_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_fake_run(monkeypatch, {("tool", "--help"): (2, "   \n")})

    with pytest.raises(ExecutionError, match="exited with status 2"):
        capture_help_text(["tool"])


def test_nonzero_exit_with_output_is_accepted(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_fake_run(monkeypatch, {("tool", "--help"): (1, ROOT_HELP)})

    assert capture_help_text(["tool"]) == ROOT_HELP
