"""Mentorship backend access: HTTP client and response normalization."""

from mentor_search.api.client import MentorApiClient
from mentor_search.api.normalizer import (
    normalize_search_response,
    parse_mentors,
    pick_cursor,
    pick_record,
    pick_records,
)

__all__ = [
    "MentorApiClient",
    "normalize_search_response",
    "parse_mentors",
    "pick_cursor",
    "pick_record",
    "pick_records",
]
