"""Data models for the Takhrij search and commentary client."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

AI_GENERATED_REFERENCE = "AI Generated"
NO_RESULTS_MARKER = "❌"


class Status(str, Enum):
    """Lifecycle of one request type inside a session."""

    IDLE = "idle"
    LOADING = "loading"
    DONE = "done"


class FailureReason(str, Enum):
    """Why a remote call produced placeholder data instead of a real payload."""

    TRANSPORT = "transport"
    PROTOCOL = "protocol"


class HadithRecord(BaseModel):
    """One narration parsed out of a search payload."""

    model_config = {"frozen": True}

    arabic_text: str = ""
    english_text: str = ""
    reference: str = ""
    warning: str = ""
    collection_key: str = ""

    @computed_field
    @property
    def is_ai_generated(self) -> bool:
        return self.reference == AI_GENERATED_REFERENCE

    @computed_field
    @property
    def allows_commentary(self) -> bool:
        return not self.is_ai_generated


class SearchResponse(BaseModel):
    """Parsed search payload: free-text preamble followed by hadith records."""

    leading_narrative: str = ""
    records: list[HadithRecord] = Field(default_factory=list)

    @property
    def is_no_results(self) -> bool:
        return self.leading_narrative.startswith(NO_RESULTS_MARKER)


class CommentaryResult(BaseModel):
    """AI commentary for one record, echoing the record texts for export."""

    commentary: str = ""
    chain_of_narrators: str = ""
    evaluation: str = ""
    arabic_text: str = ""
    english_text: str = ""
    reference: str = ""


class SearchOutcome(BaseModel):
    """Settled search: the response to render plus the failure reason, if any."""

    response: SearchResponse
    failure: Optional[FailureReason] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None


class CommentaryOutcome(BaseModel):
    """Settled commentary request, tagged with the failure reason on error."""

    result: CommentaryResult
    failure: Optional[FailureReason] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None


class SessionState(BaseModel):
    """State of the single active search screen.

    Owned and written by :class:`takhrij_client.session.SessionController`;
    presentation code only reads it.
    """

    query: str = ""
    search_status: Status = Status.IDLE
    search_outcome: Optional[SearchOutcome] = None
    commentary_status: Status = Status.IDLE
    commentary_outcome: Optional[CommentaryOutcome] = None

    @property
    def last_response(self) -> Optional[SearchResponse]:
        if self.search_outcome is None:
            return None
        return self.search_outcome.response

    @property
    def last_commentary(self) -> Optional[CommentaryResult]:
        if self.commentary_outcome is None:
            return None
        return self.commentary_outcome.result


class GlossaryEntry(BaseModel):
    """A term from the science of hadith."""

    model_config = {"frozen": True}

    term: str
    definition: str
    reference: str
    example: str


__all__ = [
    "AI_GENERATED_REFERENCE",
    "NO_RESULTS_MARKER",
    "Status",
    "FailureReason",
    "HadithRecord",
    "SearchResponse",
    "CommentaryResult",
    "SearchOutcome",
    "CommentaryOutcome",
    "SessionState",
    "GlossaryEntry",
]
