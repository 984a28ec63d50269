"""
Response normalization for the mentorship backend.

The backend is inconsistent about field names: list endpoints return their
records under a named key or under `data`, and the search endpoint names its
pagination token either `cursor` or `nextCursor`. Every response goes through
the functions here so call sites deal with one shape.

Precedence is fixed: the named key wins over `data`, and `cursor` wins over
`nextCursor`.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from mentor_search.error_handling import MalformedResponseError
from mentor_search.models import MentorProfile, SearchResultPage


logger = logging.getLogger(__name__)


def _require_mapping(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise MalformedResponseError(
            f"Expected a JSON object, got {type(payload).__name__}",
            status=200
        )
    return payload


def pick_records(payload: Any, key: str) -> List[Any]:
    """Return the record list stored under `key`, falling back to `data`.

    A list present under `key` wins even when it is empty.
    """
    payload = _require_mapping(payload)
    for candidate in (key, 'data'):
        value = payload.get(candidate)
        if value is not None:
            return list(value)
    return []


def pick_record(payload: Any, key: str) -> Dict[str, Any]:
    """Return the record stored under `key`, falling back to the payload itself."""
    payload = _require_mapping(payload)
    record = payload.get(key)
    return record if isinstance(record, dict) else payload


def pick_cursor(payload: Dict[str, Any]) -> Optional[str]:
    """Return the pagination token, preferring `cursor` over `nextCursor`."""
    for candidate in ('cursor', 'nextCursor'):
        value = payload.get(candidate)
        if value:
            return str(value)
    return None


def parse_mentors(records: List[Any]) -> List[MentorProfile]:
    """Parse mentor records, raising MalformedResponseError on bad data."""
    try:
        return [MentorProfile.model_validate(record) for record in records]
    except ValidationError as e:
        logger.debug(f"Mentor record validation failed: {e}")
        raise MalformedResponseError(f"Invalid mentor record in response: {e.error_count()} error(s)", status=200)


def normalize_search_response(payload: Any, limit: int) -> SearchResultPage:
    """Convert a raw search response into a SearchResultPage.

    When the backend omits `hasMore`, a full page (exactly `limit` mentors)
    is taken to mean more results exist.

    Args:
        payload: Decoded JSON body
        limit: Page size the request asked for

    Returns:
        Normalized page

    Raises:
        MalformedResponseError: If the payload is not an object or a mentor
            record cannot be parsed
    """
    payload = _require_mapping(payload)
    mentors = parse_mentors(pick_records(payload, 'mentors'))

    has_more = payload.get('hasMore')
    if has_more is None:
        has_more = len(mentors) == limit

    return SearchResultPage(
        mentors=mentors,
        cursor=pick_cursor(payload),
        has_more=bool(has_more),
    )
