"""Remote definitions registry client."""

from __future__ import annotations

import logging

import httpx

from .constants import DEFAULT_REGISTRY_TIMEOUT_SEC, DEFAULT_REGISTRY_URL, DEFINITION_FILE_SUFFIX
from .definition_store import DefinitionStore
from .errors import RegistryNotFoundError, RegistryUnavailableError
from .logging_utils import log_event


class RegistryClient:
    """Fetches authored definitions from a read-only catalog.

    Documents live at `<base_url>/<name>.yaml`. A successful body is written
    into the store verbatim; it is not validated until the next load.
    """

    def __init__(
        self,
        store: DefinitionStore,
        *,
        base_url: str = DEFAULT_REGISTRY_URL,
        timeout_sec: float = DEFAULT_REGISTRY_TIMEOUT_SEC,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.store = store
        self.base_url = base_url
        self.timeout_sec = timeout_sec
        self._transport = transport

    def url_for(self, name: str) -> str:
        return f"{self.base_url.rstrip('/')}/{name}{DEFINITION_FILE_SUFFIX}"

    def fetch(self, name: str) -> None:
        """Download the definition for `name` into the store.

        Raises RegistryNotFoundError on 404 and RegistryUnavailableError for
        any other failure.
        """
        url = self.url_for(name)
        headers = {"User-Agent": "command-builder/0.1 (+definition-registry)"}
        try:
            with httpx.Client(
                timeout=httpx.Timeout(self.timeout_sec),
                follow_redirects=True,
                headers=headers,
                transport=self._transport,
            ) as client:
                response = client.get(url)
        except httpx.TimeoutException as exc:
            log_event("registry_fetch_failed", logging.WARNING, command=name, url=url, error="timeout")
            raise RegistryUnavailableError(f"Registry request timed out: {url}") from exc
        except httpx.HTTPError as exc:
            log_event(
                "registry_fetch_failed",
                logging.WARNING,
                command=name,
                url=url,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise RegistryUnavailableError(f"Failed to contact registry: {exc}") from exc

        log_event("registry_fetch", command=name, url=url, http_status=response.status_code)

        if response.status_code == httpx.codes.NOT_FOUND:
            raise RegistryNotFoundError(name)
        if not response.is_success:
            raise RegistryUnavailableError(
                f"Registry returned status {response.status_code} for {url}"
            )

        self.store.save_raw(name, response.content)
