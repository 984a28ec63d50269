"""
Search paging data models.

SearchResultPage is what the backend returns for one request; SearchSession
is the state accumulated across requests for a single mentor search.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .filters import DEFAULT_FILTERS, MentorSearchFilters
from .mentor import MentorProfile


class SearchMode(str, Enum):
    """Paging intent of a search call."""
    REFRESH = "REFRESH"
    LOAD_MORE = "LOAD_MORE"


class SearchState(str, Enum):
    """Observable state of a search session."""
    IDLE = "IDLE"
    LOADING = "LOADING"
    REFRESHING = "REFRESHING"
    LOADING_MORE = "LOADING_MORE"
    READY = "READY"
    ERROR = "ERROR"


@dataclass
class SearchResultPage:
    """One page of mentor search results.

    Attributes:
        mentors: Mentors in backend order
        cursor: Token for the next page, None when exhausted
        has_more: Whether another page is available
    """
    mentors: List[MentorProfile]
    cursor: Optional[str] = None
    has_more: bool = False

    def __post_init__(self):
        # An exhausted result set never carries a resume token
        if not self.has_more:
            self.cursor = None


@dataclass
class SearchSession:
    """Client state accumulated over a mentor search.

    Attributes:
        results: Mentors in page-arrival order
        cursor: Token to resume from on the next load-more
        has_more: Whether load-more may fetch another page
        active_filters: Filters used for the last committed search
        is_loading: A first-page or load-more request is in flight
        is_refreshing: A refresh request is in flight
        error: Message from the last failed request
        completed_requests: Number of requests that resolved successfully
    """
    results: List[MentorProfile] = field(default_factory=list)
    cursor: Optional[str] = None
    has_more: bool = True
    active_filters: MentorSearchFilters = DEFAULT_FILTERS
    is_loading: bool = False
    is_refreshing: bool = False
    error: Optional[str] = None
    completed_requests: int = 0

    @property
    def in_flight(self) -> bool:
        return self.is_loading or self.is_refreshing

    def reset_results(self) -> None:
        """Discard accumulated pages ahead of a refresh."""
        self.results = []
        self.cursor = None
        self.has_more = True
