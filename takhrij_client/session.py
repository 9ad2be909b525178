"""Search/commentary session controller.

The controller owns a :class:`SessionState` and is its only writer. Each
request type (search, commentary) moves ``idle -> loading -> done`` on its own.
A new request may start while an older one of the same type is still in
flight; the older one is not cancelled, but every request carries a
generation token and only the newest token may write results back.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Protocol

from .http import TakhrijClientError
from .models import (
    CommentaryOutcome,
    CommentaryResult,
    HadithRecord,
    SearchOutcome,
    SearchResponse,
    SessionState,
    Status,
)
from .parser import collection_name_of, parse, parse_commentary

LOGGER = logging.getLogger(__name__)

SEARCH_ERROR_MESSAGE = "Error connecting to server."
COMMENTARY_ERROR_MESSAGE = "Error fetching commentary."

Listener = Callable[[SessionState], None]


class CommentaryNotAllowed(ValueError):
    """Raised when commentary is requested for an AI-generated record."""


class SearchBackend(Protocol):
    def search(self, query: str) -> str: ...

    def commentary(self, *, arabic: str, english: str, reference: str, collection: str) -> dict[str, Any]: ...


def commentary_request_fields(record: HadithRecord) -> dict[str, str]:
    """Body fields sent to the commentary endpoint for ``record``."""
    return {
        "arabic": record.arabic_text,
        "english": record.english_text.strip() or record.arabic_text.strip(),
        "reference": record.reference,
        "collection": record.collection_key or collection_name_of(record.reference),
    }


class SessionController:
    """Drives one search screen against a :class:`SearchBackend`."""

    def __init__(self, client: SearchBackend, state: SessionState | None = None) -> None:
        self.client = client
        self.state = state if state is not None else SessionState()
        self._search_token = 0
        self._commentary_token = 0
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every state change; returns an unsubscribe hook."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)

    async def submit_search(self, query: str) -> None:
        query = query.strip()
        if not query:
            return

        self._search_token += 1
        token = self._search_token
        self.state.query = query
        self.state.search_status = Status.LOADING
        self.state.search_outcome = None
        # A new search closes settled commentary; an in-flight one still lands.
        if self.state.commentary_status is not Status.LOADING:
            self.state.commentary_status = Status.IDLE
            self.state.commentary_outcome = None
        self._notify()

        try:
            raw = await asyncio.to_thread(self.client.search, query)
        except TakhrijClientError as exc:
            LOGGER.warning("Search for %r failed: %s", query, exc)
            outcome = SearchOutcome(
                response=SearchResponse(leading_narrative=SEARCH_ERROR_MESSAGE, records=[]),
                failure=exc.reason,
                detail=str(exc),
            )
        except BaseException:
            self._settle_search(token, None)
            raise
        else:
            response = parse(raw)
            LOGGER.info("Search for %r returned %d record(s)", query, len(response.records))
            outcome = SearchOutcome(response=response)
        self._settle_search(token, outcome)

    def _settle_search(self, token: int, outcome: SearchOutcome | None) -> None:
        if token != self._search_token:
            LOGGER.debug("Discarding stale search response (token %d, current %d)", token, self._search_token)
            return
        if outcome is not None:
            self.state.search_outcome = outcome
        self.state.search_status = Status.DONE
        self._notify()

    async def request_commentary(self, record: HadithRecord) -> None:
        if record.is_ai_generated:
            raise CommentaryNotAllowed("Commentary is not available for AI generated records")

        self._commentary_token += 1
        token = self._commentary_token
        self.state.commentary_status = Status.LOADING
        self._notify()

        fields = commentary_request_fields(record)
        try:
            payload = await asyncio.to_thread(lambda: self.client.commentary(**fields))
        except TakhrijClientError as exc:
            LOGGER.warning("Commentary for %r failed: %s", record.reference, exc)
            outcome = CommentaryOutcome(
                result=CommentaryResult(
                    commentary=COMMENTARY_ERROR_MESSAGE,
                    chain_of_narrators=COMMENTARY_ERROR_MESSAGE,
                    evaluation=COMMENTARY_ERROR_MESSAGE,
                    arabic_text=record.arabic_text,
                    english_text=record.english_text,
                    reference=record.reference,
                ),
                failure=exc.reason,
                detail=str(exc),
            )
        except BaseException:
            self._settle_commentary(token, None)
            raise
        else:
            outcome = CommentaryOutcome(result=parse_commentary(payload, record))
        self._settle_commentary(token, outcome)

    def _settle_commentary(self, token: int, outcome: CommentaryOutcome | None) -> None:
        if token != self._commentary_token:
            LOGGER.debug(
                "Discarding stale commentary response (token %d, current %d)", token, self._commentary_token
            )
            return
        if outcome is not None:
            self.state.commentary_outcome = outcome
        self.state.commentary_status = Status.DONE
        self._notify()

    def reset(self) -> None:
        self._search_token += 1
        self._commentary_token += 1
        self.state.query = ""
        self.state.search_status = Status.IDLE
        self.state.search_outcome = None
        self.state.commentary_status = Status.IDLE
        self.state.commentary_outcome = None
        self._notify()


__all__ = [
    "SessionController",
    "SearchBackend",
    "CommentaryNotAllowed",
    "commentary_request_fields",
    "SEARCH_ERROR_MESSAGE",
    "COMMENTARY_ERROR_MESSAGE",
]
