"""Data models for the mentor search client"""

from .filters import DEFAULT_FILTERS, MentorSearchFilters
from .mentor import AvailabilitySlot, MentorProfile
from .mentorship import (
    MentorCircle,
    MentorSession,
    SessionReview,
    SessionStatus,
    SessionType,
)
from .search import SearchMode, SearchResultPage, SearchSession, SearchState

__all__ = [
    "DEFAULT_FILTERS",
    "MentorSearchFilters",
    "AvailabilitySlot",
    "MentorProfile",
    "MentorCircle",
    "MentorSession",
    "SessionReview",
    "SessionStatus",
    "SessionType",
    "SearchMode",
    "SearchResultPage",
    "SearchSession",
    "SearchState",
]
