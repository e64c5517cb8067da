"""Definition resolution across the local cache, the registry and `--help`."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .constants import STATUS_DOWNLOADED, STATUS_GENERATED, STATUS_SCRAPING, STATUS_SEARCHING_REGISTRY
from .definition_store import DefinitionStore
from .errors import (
    DefinitionNotFoundError,
    DefinitionParseError,
    DefinitionUnavailableError,
    ExecutionError,
    RegistryUnavailableError,
    StorageError,
)
from .logging_utils import log_event
from .models import CommandDefinition
from .registry_client import RegistryClient
from .scraper import HelpScraper

_TIER_FAILURES = (
    DefinitionNotFoundError,
    DefinitionParseError,
    RegistryUnavailableError,
    ExecutionError,
    StorageError,
)


class DefinitionResolver:
    """Returns the best available definition for a root command.

    Sources are tried once each, in trust order: local store, registry,
    help-text scraper. The first success wins.
    """

    def __init__(
        self,
        store: DefinitionStore,
        registry: RegistryClient,
        scraper: HelpScraper,
        *,
        notify: Callable[[str], None] = print,
    ) -> None:
        self.store = store
        self.registry = registry
        self.scraper = scraper
        self._notify = notify

    def resolve(self, name: str) -> CommandDefinition:
        try:
            return self.store.load(name)
        except _TIER_FAILURES as exc:
            _log_tier_failure(name, "store", exc)

        self._notify(STATUS_SEARCHING_REGISTRY.format(name=name))
        try:
            self.registry.fetch(name)
            definition = self.store.load(name)
        except _TIER_FAILURES as exc:
            _log_tier_failure(name, "registry", exc)
        else:
            self._notify(STATUS_DOWNLOADED)
            return definition

        self._notify(STATUS_SCRAPING)
        try:
            definition = self.scraper.scrape(name)
        except _TIER_FAILURES as exc:
            _log_tier_failure(name, "scraper", exc)
        else:
            self._notify(STATUS_GENERATED)
            return definition

        log_event("resolution_exhausted", logging.WARNING, command=name)
        raise DefinitionUnavailableError(name)


def _log_tier_failure(name: str, tier: str, exc: Exception) -> None:
    log_event(
        "resolution_tier_failed",
        command=name,
        tier=tier,
        error_type=type(exc).__name__,
        error=str(exc),
    )
