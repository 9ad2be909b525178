"""Static reference data shipped with the client: collection keys and glossary."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from .models import GlossaryEntry

DATA_DIR = Path(__file__).resolve().parent / "data"


def _read_json(name: str) -> list:
    path = DATA_DIR / name
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def leading_tokens(text: str, count: int = 2) -> str:
    """Return the first ``count`` whitespace-separated tokens joined by one space."""
    return " ".join(text.split()[:count])


@lru_cache(maxsize=1)
def collection_key_map() -> Mapping[str, str]:
    """Canonical collection display name -> short collection key."""
    entries = _read_json("collections.json")
    return MappingProxyType({entry["name"]: entry["key"] for entry in entries})


@lru_cache(maxsize=1)
def _collection_index() -> Mapping[str, str]:
    # References are matched on their first two tokens, so index the
    # display names the same way ("Sunan Abu Dawood" -> "Sunan Abu").
    return MappingProxyType({
        leading_tokens(name): key for name, key in collection_key_map().items()
    })


def resolve_collection_key(reference: str) -> str:
    """Best-effort collection key for a free-text citation, ``""`` when unknown.

    The first two tokens of ``reference`` are compared with the first two
    tokens of each display name, not with the full name. Three-word names
    therefore resolve too: ``"Sunan Ibn Majah 1"`` gives ``"ibnmajah"``
    where an exact display-name lookup would find nothing.
    """
    if not reference:
        return ""
    return _collection_index().get(leading_tokens(reference), "")


@lru_cache(maxsize=1)
def glossary() -> tuple[GlossaryEntry, ...]:
    return tuple(GlossaryEntry(**entry) for entry in _read_json("glossary.json"))


def find_glossary_entry(term: str) -> Optional[GlossaryEntry]:
    wanted = term.strip().casefold()
    for entry in glossary():
        if entry.term.casefold() == wanted:
            return entry
    return None


__all__ = [
    "collection_key_map",
    "resolve_collection_key",
    "leading_tokens",
    "glossary",
    "find_glossary_entry",
]
