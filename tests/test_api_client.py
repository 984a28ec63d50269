"""
Tests for the aiohttp-based mentorship API client.

The aiohttp session is replaced with a stub so status handling and error
classification can be checked without a server.
"""

import asyncio
import json

import aiohttp
import pytest

from mentor_search.api.client import MentorApiClient
from mentor_search.config import ApiConfig
from mentor_search.error_handling import (
    MalformedResponseError,
    NetworkFailure,
    ServerError,
)


class StubResponse:
    def __init__(self, status=200, body=""):
        self.status = status
        self._body = body

    async def text(self):
        return self._body

    async def json(self, content_type="application/json"):
        return json.loads(self._body)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


class StubSession:
    """Records requests and replays a single response or exception."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.closed = False
        self.requests = []

    def request(self, method, url, params=None, json=None):
        self.requests.append({"method": method, "url": url, "params": params, "json": json})
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self):
        self.closed = True


def make_client(response=None, error=None):
    client = MentorApiClient(ApiConfig(base_url="https://api.example.org/api/"))
    client._session = StubSession(response=response, error=error)
    return client


def test_search_returns_decoded_payload():
    client = make_client(StubResponse(200, json.dumps({"mentors": [], "hasMore": False})))

    payload = asyncio.run(client.search_mentors([("q", "design"), ("limit", "20")]))

    assert payload == {"mentors": [], "hasMore": False}
    request = client._session.requests[0]
    assert request["method"] == "GET"
    assert request["url"] == "https://api.example.org/api/mentors"
    assert request["params"] == [("q", "design"), ("limit", "20")]


def test_empty_body_is_empty_payload():
    client = make_client(StubResponse(204, ""))

    assert asyncio.run(client.join_circle("c1")) == {}
    assert client._session.requests[0]["url"].endswith("/mentorship/circles/c1/join")


def test_post_sends_json_body():
    client = make_client(StubResponse(200, json.dumps({"session": {"id": "s1"}})))

    asyncio.run(client.reschedule_session("s1", "2026-11-01T10:00:00Z"))

    request = client._session.requests[0]
    assert request["method"] == "POST"
    assert request["json"] == {"scheduledAt": "2026-11-01T10:00:00Z"}


@pytest.mark.parametrize("status", [400, 404, 500, 503])
def test_error_status_raises_server_error(status):
    client = make_client(StubResponse(status, json.dumps({"error": "Mentor service unavailable"})))

    with pytest.raises(ServerError) as exc_info:
        asyncio.run(client.search_mentors([("limit", "20")]))

    assert exc_info.value.status == status
    assert str(exc_info.value) == "Mentor service unavailable"
    assert exc_info.value.url == "https://api.example.org/api/mentors"


def test_error_status_without_message_body():
    client = make_client(StubResponse(502, "<html>Bad Gateway</html>"))

    with pytest.raises(ServerError) as exc_info:
        asyncio.run(client.get_featured_mentors())

    assert "502" in str(exc_info.value)


def test_invalid_json_raises_malformed_response():
    client = make_client(StubResponse(200, "<html>login</html>"))

    with pytest.raises(MalformedResponseError):
        asyncio.run(client.get_recommended_mentors())


def test_non_object_json_raises_malformed_response():
    client = make_client(StubResponse(200, json.dumps([1, 2, 3])))

    with pytest.raises(MalformedResponseError):
        asyncio.run(client.get_my_circles())


def test_connection_error_raises_network_failure():
    client = make_client(error=aiohttp.ClientConnectionError("Connection refused"))

    with pytest.raises(NetworkFailure) as exc_info:
        asyncio.run(client.search_mentors([("limit", "20")]))

    assert "Connection refused" in str(exc_info.value)


def test_timeout_raises_network_failure():
    client = make_client(error=asyncio.TimeoutError())

    with pytest.raises(NetworkFailure) as exc_info:
        asyncio.run(client.get_mentor("m1"))

    assert "timed out" in str(exc_info.value)


def test_close_releases_session():
    client = make_client(StubResponse(200, "{}"))
    session = client._session

    asyncio.run(client.close())

    assert session.closed is True
    assert client._session is None
