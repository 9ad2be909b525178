"""HTTP transport for the Takhrij search and commentary endpoints."""

from __future__ import annotations

import logging
from typing import Any

import requests
from tenacity import Retrying, before_sleep_log, retry_if_exception_type, stop_after_attempt, wait_random_exponential

from .config import ClientSettings
from .models import FailureReason

LOGGER = logging.getLogger(__name__)


class TakhrijClientError(RuntimeError):
    """Raised when a call to the backend cannot produce a usable body."""

    reason = FailureReason.TRANSPORT


class TransportError(TakhrijClientError):
    """Network failure: DNS, refused connection, timeout, broken stream."""


class ProtocolError(TakhrijClientError):
    """The backend answered, but not with a JSON object."""

    reason = FailureReason.PROTOCOL


class ServerError(ProtocolError):
    """5xx status; the only protocol failure worth retrying."""


class TakhrijClient:
    """Blocking JSON-over-HTTP client for the Takhrij backend."""

    def __init__(self, settings: ClientSettings | None = None) -> None:
        self.settings = settings or ClientSettings.from_env()
        self._session = requests.Session()
        self._session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": "takhrij-client/0.1",
        })

    def search(self, query: str) -> str:
        """Return the raw ``result`` text for ``query`` (``""`` when absent)."""
        LOGGER.info("Searching hadith for %r", query)
        payload = self._post_json(self.settings.search_url, {"query": query})
        result = payload.get("result")
        return result if isinstance(result, str) else ""

    def commentary(self, *, arabic: str, english: str, reference: str, collection: str) -> dict[str, Any]:
        LOGGER.info("Requesting commentary for %r (collection %r)", reference, collection)
        return self._post_json(
            self.settings.commentary_url,
            {"arabic": arabic, "english": english, "reference": reference, "collection": collection},
        )

    def _post_json(self, url: str, body: dict[str, Any]) -> dict[str, Any]:
        retrying = Retrying(
            reraise=True,
            stop=stop_after_attempt(self.settings.max_attempts),
            wait=wait_random_exponential(multiplier=0.5, max=10),
            retry=retry_if_exception_type((TransportError, ServerError)),
            before_sleep=before_sleep_log(LOGGER, logging.DEBUG),
        )
        return retrying(self._post_once, url, body)

    def _post_once(self, url: str, body: dict[str, Any]) -> dict[str, Any]:
        try:
            response = self._session.post(url, json=body, timeout=self.settings.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"Request to {url} failed: {exc}") from exc
        if response.status_code >= 500:
            raise ServerError(f"Server error {response.status_code} for {url}")
        if response.status_code >= 400:
            raise ProtocolError(f"Client error {response.status_code} for {url}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise ProtocolError(f"Invalid JSON body from {url}") from exc
        if not isinstance(payload, dict):
            raise ProtocolError(f"Expected a JSON object from {url}, got {type(payload).__name__}")
        return payload

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "TakhrijClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["TakhrijClient", "TakhrijClientError", "TransportError", "ProtocolError", "ServerError"]
