"""
Mentor search controller.

Owns the filter state, pagination cursor and accumulated results of a mentor
search. Every search call issues at most one backend request, and a call made
while another request is pending is dropped instead of racing it, so
responses are always applied in the order their requests were issued.
"""

import asyncio
import logging
from typing import Any, Dict, Optional, Tuple

from mentor_search.api.normalizer import normalize_search_response
from mentor_search.config import ClientSettings, get_client_settings
from mentor_search.error_handling import (
    ErrorHandler,
    InvalidFiltersError,
)
from mentor_search.models import (
    DEFAULT_FILTERS,
    MentorProfile,
    MentorSearchFilters,
    SearchMode,
    SearchSession,
    SearchState,
)
from mentor_search.query_builder import MentorQueryBuilder


# Configure logging
logger = logging.getLogger(__name__)


class MentorSearchController:
    """
    State container for mentor discovery.

    The controller is created with its collaborators and activated with
    init(). dispose() discards the session; a response arriving after
    dispose() is ignored.

    Attributes:
        api_client: Object exposing `async search_mentors(params) -> dict`
        settings: Client configuration settings
        query_builder: Builds request parameters from filters
        error_handler: Converts failures to user-facing messages
    """

    def __init__(
        self,
        api_client: Any,
        settings: Optional[ClientSettings] = None,
        initial_filters: Optional[MentorSearchFilters] = None,
        error_handler: Optional[ErrorHandler] = None
    ):
        self.api_client = api_client
        self.settings = settings or get_client_settings()
        self.query_builder = MentorQueryBuilder(page_size=self.settings.search.page_size)
        self.error_handler = error_handler or ErrorHandler()
        self._initial_filters = initial_filters or DEFAULT_FILTERS
        self._session: Optional[SearchSession] = None
        # Bumped on init/dispose so late responses from an old session are dropped
        self._generation = 0

    # Lifecycle

    def init(self) -> None:
        """Create an empty search session."""
        self._generation += 1
        self._session = SearchSession(active_filters=self._initial_filters)
        logger.debug("Mentor search session initialized")

    def dispose(self) -> None:
        """Discard the search session and ignore any pending response."""
        self._generation += 1
        self._session = None
        logger.debug("Mentor search session disposed")

    @property
    def is_active(self) -> bool:
        return self._session is not None

    def _require_session(self) -> SearchSession:
        if self._session is None:
            raise RuntimeError("MentorSearchController is not initialized; call init() first")
        return self._session

    # Operations

    async def search(
        self,
        filters: Optional[MentorSearchFilters] = None,
        mode: SearchMode = SearchMode.REFRESH
    ) -> None:
        """
        Run one search request and merge its page into the session.

        Failures never propagate: they are converted into the `error`
        selector while previously loaded results stay in place.

        Args:
            filters: Filters to search with; defaults to the active filters
            mode: REFRESH to restart from the first page, LOAD_MORE to
                append the next page
        """
        session = self._require_session()
        mode = SearchMode(mode)

        if session.in_flight:
            logger.debug(f"Search request already in flight; dropping {mode.value} call")
            return

        if mode is SearchMode.LOAD_MORE and not session.has_more:
            logger.debug("No more mentors to load; skipping request")
            return

        effective_filters = filters if filters is not None else session.active_filters
        try:
            effective_filters.validate()
        except InvalidFiltersError as e:
            session.error = self.error_handler.describe(e, "search_mentors")
            return

        refresh = mode is SearchMode.REFRESH
        if refresh:
            session.reset_results()
            session.is_refreshing = True
        else:
            session.is_loading = True
        session.error = None

        cursor = None if refresh else session.cursor
        params = self.query_builder.build_params(effective_filters, cursor=cursor)
        generation = self._generation

        logger.info(
            f"Searching mentors ({mode.value}): "
            f"{', '.join(f'{k}={v}' for k, v in params)}"
        )

        try:
            payload = await self.api_client.search_mentors(params)
            page = normalize_search_response(payload, self.query_builder.page_size)
        except asyncio.CancelledError:
            if generation == self._generation:
                logger.debug(f"Search request ({mode.value}) cancelled")
                session.is_loading = False
                session.is_refreshing = False
            raise
        except Exception as e:
            # ErrorHandler logs the failure
            self._apply_failure(generation, e)
            return

        if generation != self._generation:
            logger.debug("Discarding search response for a disposed session")
            return

        if refresh:
            session.results = list(page.mentors)
        else:
            session.results = session.results + list(page.mentors)
        session.cursor = page.cursor
        session.has_more = page.has_more
        session.active_filters = effective_filters
        session.is_loading = False
        session.is_refreshing = False
        session.completed_requests += 1

        logger.info(
            f"Received {len(page.mentors)} mentor(s); "
            f"{len(session.results)} loaded, has_more={page.has_more}"
        )

    async def refresh(self, filters: Optional[MentorSearchFilters] = None) -> None:
        await self.search(filters, SearchMode.REFRESH)

    async def load_more(self) -> None:
        await self.search(None, SearchMode.LOAD_MORE)

    def set_filters(self, **partial: Any) -> MentorSearchFilters:
        """
        Merge field updates into the active filters without fetching.

        Call refresh() to apply them.

        Returns:
            The updated active filters
        """
        session = self._require_session()
        session.active_filters = session.active_filters.merge(**partial)
        return session.active_filters

    def clear_filters(self) -> None:
        """Reset the active filters to the defaults without fetching."""
        self._require_session().active_filters = DEFAULT_FILTERS

    def clear_error(self) -> None:
        self._require_session().error = None

    def _apply_failure(self, generation: int, error: Exception) -> None:
        if generation != self._generation:
            logger.debug("Discarding search failure for a disposed session")
            return
        session = self._session
        session.error = self.error_handler.describe(error, "search_mentors")
        session.is_loading = False
        session.is_refreshing = False

    # Filter persistence boundary

    def export_filters(self) -> Dict[str, Any]:
        """Serialize the active filters for the caller to persist."""
        return self._require_session().active_filters.to_dict()

    def restore_filters(self, data: Optional[Dict[str, Any]]) -> MentorSearchFilters:
        """
        Apply filters previously produced by export_filters().

        Stored data that cannot be turned into valid filters is reported
        through `error` and the current filters are kept.
        """
        session = self._require_session()
        if not data:
            return session.active_filters

        try:
            restored = MentorSearchFilters.from_dict(data)
            restored.validate()
        except InvalidFiltersError as e:
            session.error = self.error_handler.describe(e, "restore_filters")
            return session.active_filters

        session.active_filters = restored
        return restored

    # Selectors

    @property
    def results(self) -> Tuple[MentorProfile, ...]:
        return tuple(self._require_session().results)

    @property
    def is_loading(self) -> bool:
        return self._require_session().is_loading

    @property
    def is_refreshing(self) -> bool:
        return self._require_session().is_refreshing

    @property
    def error(self) -> Optional[str]:
        return self._require_session().error

    @property
    def has_more(self) -> bool:
        return self._require_session().has_more

    @property
    def cursor(self) -> Optional[str]:
        return self._require_session().cursor

    @property
    def active_filters(self) -> MentorSearchFilters:
        return self._require_session().active_filters

    @property
    def state(self) -> SearchState:
        """Current position in the search state machine."""
        session = self._require_session()
        if session.in_flight:
            if session.completed_requests == 0 and not session.results:
                return SearchState.LOADING
            if session.is_refreshing:
                return SearchState.REFRESHING
            return SearchState.LOADING_MORE
        if session.error:
            return SearchState.ERROR
        if session.completed_requests == 0:
            return SearchState.IDLE
        return SearchState.READY

    def ranked_results(self) -> Tuple[MentorProfile, ...]:
        """
        Results ordered by backend match score, highest first.

        Mentors without a score keep their arrival order after the scored
        ones. The stored result order is not changed.
        """
        return tuple(sorted(
            self._require_session().results,
            key=lambda mentor: (mentor.match_score is None, -(mentor.match_score or 0.0))
        ))
