"""
Property-based tests for search response normalization.

These tests verify the field-name tolerance and hasMore inference applied to
backend search responses.
"""

import pytest
from hypothesis import given, settings, strategies as st

from mentor_search.api.normalizer import (
    normalize_search_response,
    pick_record,
    pick_records,
)
from mentor_search.error_handling import MalformedResponseError, MentorApiError


LIMIT = 20

mentor_records = st.builds(
    lambda i, rating: {"id": f"m-{i}", "name": f"Mentor {i}", "rating": rating},
    i=st.integers(min_value=0, max_value=10_000),
    rating=st.floats(min_value=0, max_value=5, allow_nan=False),
)
mentor_lists = st.lists(mentor_records, max_size=LIMIT)
cursors = st.one_of(st.none(), st.text(alphabet="abcdef0123456789", min_size=1, max_size=12))
has_more_values = st.one_of(st.none(), st.booleans())


def _payload(list_key, cursor_key, mentors, cursor, has_more):
    payload = {list_key: mentors}
    if cursor is not None:
        payload[cursor_key] = cursor
    if has_more is not None:
        payload["hasMore"] = has_more
    return payload


@given(mentors=mentor_lists, cursor=cursors, has_more=has_more_values)
@settings(max_examples=100)
def test_alternate_field_names_normalize_identically(mentors, cursor, has_more):
    """`data`/`nextCursor` responses equal `mentors`/`cursor` responses."""
    primary = normalize_search_response(_payload("mentors", "cursor", mentors, cursor, has_more), LIMIT)
    alternate = normalize_search_response(_payload("data", "nextCursor", mentors, cursor, has_more), LIMIT)

    assert primary == alternate


@given(mentors=mentor_lists)
@settings(max_examples=100)
def test_has_more_inferred_from_full_page(mentors):
    """Without hasMore, only an exactly full page means more results."""
    page = normalize_search_response({"mentors": mentors, "cursor": "next"}, LIMIT)

    assert page.has_more == (len(mentors) == LIMIT)


@given(mentors=mentor_lists, cursor=cursors, has_more=has_more_values)
@settings(max_examples=100)
def test_exhausted_page_has_no_cursor(mentors, cursor, has_more):
    page = normalize_search_response(_payload("mentors", "cursor", mentors, cursor, has_more), LIMIT)

    if not page.has_more:
        assert page.cursor is None


def test_full_page_without_has_more():
    payload = {"mentors": [{"id": str(i)} for i in range(LIMIT)], "cursor": "c"}

    page = normalize_search_response(payload, LIMIT)

    assert page.has_more is True
    assert page.cursor == "c"


def test_short_page_without_has_more():
    payload = {"mentors": [{"id": str(i)} for i in range(LIMIT - 1)], "cursor": "c"}

    page = normalize_search_response(payload, LIMIT)

    assert page.has_more is False
    assert page.cursor is None


def test_explicit_has_more_wins_over_inference():
    payload = {"mentors": [{"id": "1"}], "hasMore": True, "cursor": "c"}

    page = normalize_search_response(payload, LIMIT)

    assert page.has_more is True
    assert page.cursor == "c"


def test_mentors_key_takes_precedence_over_data():
    payload = {"mentors": [{"id": "from-mentors"}], "data": [{"id": "from-data"}]}

    page = normalize_search_response(payload, LIMIT)

    assert [m.id for m in page.mentors] == ["from-mentors"]


def test_cursor_takes_precedence_over_next_cursor():
    payload = {"mentors": [], "cursor": "a", "nextCursor": "b", "hasMore": True}

    assert normalize_search_response(payload, LIMIT).cursor == "a"


def test_empty_mentors_list_wins_over_data():
    payload = {"mentors": [], "data": [{"id": "d"}], "hasMore": False}

    assert normalize_search_response(payload, LIMIT).mentors == []


def test_null_mentors_falls_back_to_data():
    payload = {"mentors": None, "data": [{"id": "d"}], "hasMore": False}

    assert [m.id for m in normalize_search_response(payload, LIMIT).mentors] == ["d"]


def test_null_display_fields_use_defaults():
    payload = {"mentors": [
        {"id": "1", "name": "Aunty June", "title": None, "bio": None, "rating": None,
         "reviewCount": None, "expertise": None, "isVerified": None},
        {"id": "2", "name": "Uncle Ray", "title": "Elder"},
    ], "hasMore": False}

    mentors = normalize_search_response(payload, LIMIT).mentors

    assert [m.id for m in mentors] == ["1", "2"]
    assert mentors[0].title == ""
    assert mentors[0].bio == ""
    assert mentors[0].rating == 0
    assert mentors[0].review_count == 0
    assert mentors[0].expertise == []
    assert mentors[0].is_verified is False


def test_missing_lists_yield_empty_page():
    page = normalize_search_response({}, LIMIT)

    assert page.mentors == []
    assert page.has_more is False


def test_camel_case_fields_are_parsed():
    payload = {"mentors": [{
        "id": 42,
        "userId": 7,
        "name": "Aunty June",
        "isFreeIntroAvailable": True,
        "isAvailableNow": True,
        "reviewCount": 3,
        "sessionCount": 12,
        "matchScore": 88,
        "availableSlots": [
            {"id": 1, "dayOfWeek": 2, "startTime": "09:00", "endTime": "10:00", "timezone": "Australia/Perth"}
        ],
        "somethingNew": "ignored",
    }], "hasMore": False}

    mentor = normalize_search_response(payload, LIMIT).mentors[0]

    assert mentor.id == "42"
    assert mentor.user_id == "7"
    assert mentor.is_free_intro_available is True
    assert mentor.is_available_now is True
    assert mentor.review_count == 3
    assert mentor.session_count == 12
    assert mentor.match_score == 88
    assert mentor.available_slots[0].day_of_week == 2


@pytest.mark.parametrize("payload", [None, [], "mentors", 3])
def test_non_object_payload_is_rejected(payload):
    with pytest.raises(MalformedResponseError):
        normalize_search_response(payload, LIMIT)


def test_invalid_mentor_record_is_rejected():
    with pytest.raises(MentorApiError):
        normalize_search_response({"mentors": [{"id": "1", "rating": 9}]}, LIMIT)


def test_pick_helpers():
    assert pick_records({"circles": [1, 2]}, "circles") == [1, 2]
    assert pick_records({"data": [3]}, "circles") == [3]
    assert pick_records({}, "circles") == []
    assert pick_records({"circles": [], "data": [4]}, "circles") == []
    assert pick_record({"mentor": {"id": "1"}}, "mentor") == {"id": "1"}
    assert pick_record({"id": "2"}, "mentor") == {"id": "2"}
