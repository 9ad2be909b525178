"""Client for the Takhrij hadith search and AI commentary service."""

from .config import ClientSettings
from .http import TakhrijClient
from .models import CommentaryResult, HadithRecord, SearchResponse, SessionState, Status
from .parser import parse
from .session import CommentaryNotAllowed, SessionController

__all__ = [
    "ClientSettings",
    "TakhrijClient",
    "CommentaryResult",
    "HadithRecord",
    "SearchResponse",
    "SessionState",
    "Status",
    "parse",
    "CommentaryNotAllowed",
    "SessionController",
]
