"""
Query construction for the mentor search endpoint.

This module turns a MentorSearchFilters value into the query parameters
expected by `GET /mentors`, omitting every field left at its default.
"""

from urllib.parse import urlencode, quote_plus
from typing import List, Optional, Tuple

from mentor_search.models import MentorSearchFilters


DEFAULT_PAGE_SIZE = 20


def _format_number(value: float) -> str:
    """Render whole numbers without a trailing '.0'."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


class MentorQueryBuilder:
    """Constructs mentor search query parameters and URLs.

    Set-valued filters are serialized as comma-joined strings and boolean
    flags are only sent when true, so the default filters produce a request
    carrying nothing but the page size.
    """

    SEARCH_PATH = "/mentors"

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE):
        self.page_size = page_size

    def build_params(
        self,
        filters: MentorSearchFilters,
        cursor: Optional[str] = None
    ) -> List[Tuple[str, str]]:
        """Build ordered query parameters for one search request.

        Args:
            filters: Filters to serialize
            cursor: Pagination token, only passed for load-more requests

        Returns:
            List of (name, value) pairs in a stable order

        Examples:
            >>> MentorQueryBuilder().build_params(MentorSearchFilters(query="design"))
            [('q', 'design'), ('limit', '20')]
        """
        params = []

        if filters.query:
            params.append(('q', filters.query))

        if filters.expertise:
            params.append(('expertise', ','.join(filters.expertise)))

        if filters.industries:
            params.append(('industries', ','.join(filters.industries)))

        if filters.price_min is not None:
            params.append(('priceMin', _format_number(filters.price_min)))

        if filters.price_max is not None:
            params.append(('priceMax', _format_number(filters.price_max)))

        if filters.rating is not None:
            params.append(('minRating', _format_number(filters.rating)))

        if filters.available_now:
            params.append(('availableNow', 'true'))

        if filters.free_intro:
            params.append(('freeIntro', 'true'))

        if filters.indigenous_background:
            params.append(('indigenousBackground', 'true'))

        if filters.languages:
            params.append(('languages', ','.join(filters.languages)))

        if cursor:
            params.append(('cursor', cursor))

        params.append(('limit', str(self.page_size)))

        return params

    def build_search_url(
        self,
        base_url: str,
        filters: MentorSearchFilters,
        cursor: Optional[str] = None
    ) -> str:
        """Construct the full search URL with encoded parameters.

        Args:
            base_url: Backend API root, e.g. "https://example.org/api"
            filters: Filters to serialize
            cursor: Pagination token (optional)

        Returns:
            Complete search URL
        """
        encoded_params = urlencode(self.build_params(filters, cursor), quote_via=quote_plus)
        return f"{base_url.rstrip('/')}{self.SEARCH_PATH}?{encoded_params}"
