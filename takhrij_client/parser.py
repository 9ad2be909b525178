"""Parsing helpers for Takhrij backend payloads.

The search endpoint answers with one text blob. Records are separated by a
literal ``---`` and each record carries labeled sections::

    Arabic Matn: ...
    English Matn: ...
    Reference: Sahih Bukhari 1
    Warning: ...

Labels are matched case-insensitively at the start of a line. The two matn
sections run until the next known label or the end of the block; ``Reference``
and ``Warning`` hold the rest of their own line. Missing labels yield empty
strings. Nothing in this module raises on malformed input.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional

from .models import CommentaryResult, HadithRecord, SearchResponse
from .reference_data import leading_tokens, resolve_collection_key

LOGGER = logging.getLogger(__name__)

RECORD_DELIMITER = "---"

ARABIC = "arabic matn"
ENGLISH = "english matn"
REFERENCE = "reference"
WARNING = "warning"

MULTILINE_LABELS = frozenset({ARABIC, ENGLISH})

LABEL_PATTERN = re.compile(
    r"^[ \t*_]*(arabic matn|english matn|reference|warning)[*_]*[ \t]*:[ \t*_]*(.*)$",
    re.IGNORECASE,
)
LINE_BREAKS_PATTERN = re.compile(r"[\r\n]+")
EMPHASIS_PATTERN = re.compile(r"[*_]")

NO_COMMENTARY = "No commentary."
NO_CHAIN = "No chain."
NO_EVALUATION = "No evaluation."


def scan_sections(block: str) -> dict[str, str]:
    """Split one record block into its labeled sections.

    Returns a mapping from lower-cased label to the raw (untrimmed) captured
    text. A label seen twice keeps its first occurrence.
    """
    sections: dict[str, list[str]] = {}
    current: Optional[str] = None
    for line in block.splitlines():
        match = LABEL_PATTERN.match(line)
        if match:
            label = match.group(1).lower()
            if label in sections:
                current = None
                continue
            sections[label] = [match.group(2)]
            current = label if label in MULTILINE_LABELS else None
        elif current is not None:
            sections[current].append(line)
    return {label: "\n".join(lines) for label, lines in sections.items()}


def normalize_english(value: str) -> str:
    collapsed = LINE_BREAKS_PATTERN.sub(" ", value)
    return EMPHASIS_PATTERN.sub("", collapsed).strip()


def collection_name_of(reference: str) -> str:
    """Collection display name guessed from a citation (its first two tokens)."""
    return leading_tokens(reference.strip())


def parse_record(block: str) -> Optional[HadithRecord]:
    sections = scan_sections(block)
    arabic = sections.get(ARABIC, "").strip()
    english = normalize_english(sections.get(ENGLISH, ""))
    if not arabic and not english:
        return None
    reference = sections.get(REFERENCE, "").strip()
    return HadithRecord(
        arabic_text=arabic,
        english_text=english,
        reference=reference,
        warning=sections.get(WARNING, "").strip(),
        collection_key=resolve_collection_key(reference),
    )


def parse(raw: Any) -> SearchResponse:
    """Convert one search payload into a :class:`SearchResponse`."""
    if not isinstance(raw, str):
        raw = ""
    leading, *blocks = raw.split(RECORD_DELIMITER)
    records: list[HadithRecord] = []
    for block in blocks:
        record = parse_record(block)
        if record is None:
            LOGGER.debug("Dropping record block without matn text")
            continue
        records.append(record)
    return SearchResponse(leading_narrative=leading.strip(), records=records)


def _text_field(payload: Mapping[str, Any], key: str, default: str) -> str:
    value = payload.get(key)
    if isinstance(value, str) and value:
        return value
    return default


def parse_commentary(payload: Mapping[str, Any], record: HadithRecord) -> CommentaryResult:
    """Read a commentary response body, filling gaps with placeholder text."""
    return CommentaryResult(
        commentary=_text_field(payload, "commentary", NO_COMMENTARY),
        chain_of_narrators=_text_field(payload, "chain", NO_CHAIN),
        evaluation=_text_field(payload, "evaluation", NO_EVALUATION),
        arabic_text=record.arabic_text,
        english_text=record.english_text,
        reference=record.reference,
    )


__all__ = [
    "RECORD_DELIMITER",
    "scan_sections",
    "normalize_english",
    "collection_name_of",
    "parse_record",
    "parse",
    "parse_commentary",
]
