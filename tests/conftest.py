"""Shared fakes for the mentor search tests."""

import asyncio
from typing import Any, Dict, List

import pytest


def mentor_record(index: int, **overrides: Any) -> Dict[str, Any]:
    """Backend-shaped (camelCase) mentor record."""
    record = {
        "id": f"mentor-{index}",
        "userId": f"user-{index}",
        "name": f"Mentor {index}",
        "title": "Senior Engineer",
        "expertise": ["Engineering"],
        "industries": ["Technology"],
        "rating": 4.5,
        "reviewCount": 10,
        "sessionCount": 25,
        "isFreeIntroAvailable": index % 2 == 0,
        "isAvailableNow": False,
        "isVerified": True,
    }
    record.update(overrides)
    return record


def mentor_page(start: int, count: int, **extra: Any) -> Dict[str, Any]:
    """Search response with `count` mentors numbered from `start`."""
    payload = {"mentors": [mentor_record(i) for i in range(start, start + count)]}
    payload.update(extra)
    return payload


class FakeMentorApi:
    """Scripted stand-in for MentorApiClient.

    Each call pops the next scripted response; exceptions are raised instead
    of returned. Every request yields to the event loop once so overlapping
    calls can be observed.
    """

    def __init__(self, responses: List[Any] = None):
        self.responses = list(responses or [])
        self.calls: List[Dict[str, str]] = []
        self.posts: List[Any] = []

    async def _next(self):
        await asyncio.sleep(0)
        if not self.responses:
            raise AssertionError("FakeMentorApi ran out of scripted responses")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def search_mentors(self, params):
        self.calls.append(dict(params))
        return await self._next()

    async def get_featured_mentors(self):
        return await self._next()

    async def get_recommended_mentors(self):
        return await self._next()

    async def get_mentor(self, mentor_id):
        return await self._next()

    async def get_mentor_availability(self, mentor_id, date):
        return await self._next()

    async def get_sessions(self, status):
        return await self._next()

    async def book_session(self, data):
        self.posts.append(("book", data))
        return await self._next()

    async def cancel_session(self, session_id, reason=None):
        self.posts.append(("cancel", session_id, reason))
        return await self._next()

    async def reschedule_session(self, session_id, scheduled_at):
        self.posts.append(("reschedule", session_id, scheduled_at))
        return await self._next()

    async def submit_review(self, session_id, data):
        self.posts.append(("review", session_id, data))
        return await self._next()

    async def get_my_circles(self):
        return await self._next()

    async def get_discovery_circles(self):
        return await self._next()

    async def join_circle(self, circle_id):
        self.posts.append(("join", circle_id))
        return await self._next()

    async def leave_circle(self, circle_id):
        self.posts.append(("leave", circle_id))
        return await self._next()

    async def close(self):
        pass


@pytest.fixture
def fake_api():
    """Factory building a FakeMentorApi from scripted responses."""
    return FakeMentorApi


@pytest.fixture
def make_page():
    """Factory building backend search responses."""
    return mentor_page


@pytest.fixture
def make_mentor():
    """Factory building backend mentor records."""
    return mentor_record
