"""Plain-text rendering of records and commentary for copy/share."""

from __future__ import annotations

from typing import Optional

from .models import CommentaryResult, GlossaryEntry, HadithRecord


def format_commentary(result: CommentaryResult) -> str:
    return (
        f"Hadith Reference: {result.reference}\n\n"
        f"Arabic Matn:\n{result.arabic_text}\n\n"
        f"English Matn:\n{result.english_text}\n\n"
        f"Commentary:\n{result.commentary}\n\n"
        f"Chain of Narrators:\n{result.chain_of_narrators}\n\n"
        f"Evaluation:\n{result.evaluation}"
    )


def format_record(record: HadithRecord, index: Optional[int] = None) -> str:
    """Render one record the way the result list shows it; empty fields are skipped."""
    lines: list[str] = []
    heading = record.reference or "(no reference)"
    lines.append(f"[{index}] {heading}" if index is not None else heading)
    if record.arabic_text:
        lines.append(record.arabic_text)
    if record.english_text:
        lines.append(record.english_text)
    if record.warning:
        lines.append(f"Warning: {record.warning}")
    if not record.allows_commentary:
        lines.append("(AI generated, commentary unavailable)")
    return "\n".join(lines)


def format_glossary_entry(entry: GlossaryEntry) -> str:
    return (
        f"{entry.term}\n"
        f"Definition: {entry.definition}\n"
        f"Reference: {entry.reference}\n"
        f"Example: {entry.example}"
    )


__all__ = ["format_commentary", "format_record", "format_glossary_entry"]
