"""
Mentorship backend API client.

Thin aiohttp wrapper around the REST endpoints the mentor search and
mentorship controllers consume. Responses are returned as decoded JSON
objects; failures are raised as NetworkFailure or ServerError. The client
never retries.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional, Sequence, Tuple

import aiohttp

from mentor_search.config import ApiConfig
from mentor_search.error_handling import (
    MalformedResponseError,
    NetworkFailure,
    ServerError,
)


logger = logging.getLogger(__name__)

QueryParams = Sequence[Tuple[str, str]]


class MentorApiClient:
    """
    Async client for the mentorship REST API.

    A single aiohttp session is created lazily and reused across requests.
    Use the client as an async context manager, or call close() when done.
    """

    def __init__(self, config: Optional[ApiConfig] = None):
        self.config = config or ApiConfig()
        self.base_url = self.config.base_url.rstrip('/')
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the underlying session"""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _ensure_session(self):
        if self._session is None or self._session.closed:
            headers = {"Accept": "application/json"}
            if self.config.auth_token:
                headers["Authorization"] = f"Bearer {self.config.auth_token}"
            self._session = aiohttp.ClientSession(
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.config.timeout_seconds)
            )

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[QueryParams] = None,
        json_body: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Issue one request and return the decoded JSON object.

        Args:
            method: HTTP method
            path: Path relative to the API root, e.g. "/mentors"
            params: Query parameters as (name, value) pairs
            json_body: JSON request body for POST requests

        Returns:
            Decoded JSON object (an empty dict for empty bodies)

        Raises:
            NetworkFailure: On connection errors and timeouts
            ServerError: On non-2xx statuses
            MalformedResponseError: If the body is not a JSON object
        """
        await self._ensure_session()
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url} params={list(params or [])}")

        try:
            async with self._session.request(
                method,
                url,
                params=list(params) if params else None,
                json=json_body
            ) as response:
                text = await response.text()

                if response.status >= 400:
                    raise ServerError(
                        _extract_error_message(text) or f"Request failed with status {response.status}",
                        status=response.status,
                        url=url,
                        body=text
                    )

                if not text.strip():
                    return {}

                try:
                    payload = await response.json(content_type=None)
                except ValueError:
                    raise MalformedResponseError(
                        "Response body is not valid JSON",
                        status=response.status,
                        url=url,
                        body=text
                    )
        except asyncio.TimeoutError:
            raise NetworkFailure(
                f"Request timed out after {self.config.timeout_seconds}s",
                url=url
            )
        except aiohttp.ClientError as e:
            raise NetworkFailure(str(e) or type(e).__name__, url=url)

        if not isinstance(payload, dict):
            raise MalformedResponseError(
                f"Expected a JSON object, got {type(payload).__name__}",
                status=response.status,
                url=url,
                body=text
            )
        return payload

    async def get(self, path: str, params: Optional[QueryParams] = None) -> Dict[str, Any]:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json_body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self.request("POST", path, json_body=json_body)

    # Mentor discovery

    async def search_mentors(self, params: QueryParams) -> Dict[str, Any]:
        return await self.get("/mentors", params=params)

    async def get_featured_mentors(self) -> Dict[str, Any]:
        return await self.get("/mentors/featured")

    async def get_recommended_mentors(self) -> Dict[str, Any]:
        return await self.get("/mentors/recommended")

    async def get_mentor(self, mentor_id: str) -> Dict[str, Any]:
        return await self.get(f"/mentors/{mentor_id}")

    async def get_mentor_availability(self, mentor_id: str, date: str) -> Dict[str, Any]:
        return await self.get(f"/mentors/{mentor_id}/availability", params=[("date", date)])

    # Sessions

    async def get_sessions(self, status: str) -> Dict[str, Any]:
        return await self.get("/mentorship/sessions", params=[("status", status)])

    async def book_session(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.post("/mentorship/sessions", data)

    async def cancel_session(self, session_id: str, reason: Optional[str] = None) -> Dict[str, Any]:
        return await self.post(f"/mentorship/sessions/{session_id}/cancel", {"reason": reason})

    async def reschedule_session(self, session_id: str, scheduled_at: str) -> Dict[str, Any]:
        return await self.post(
            f"/mentorship/sessions/{session_id}/reschedule",
            {"scheduledAt": scheduled_at}
        )

    async def submit_review(self, session_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.post(f"/mentorship/sessions/{session_id}/review", data)

    # Circles

    async def get_my_circles(self) -> Dict[str, Any]:
        return await self.get("/mentorship/circles/my")

    async def get_discovery_circles(self) -> Dict[str, Any]:
        return await self.get("/mentorship/circles/discover")

    async def join_circle(self, circle_id: str) -> Dict[str, Any]:
        return await self.post(f"/mentorship/circles/{circle_id}/join")

    async def leave_circle(self, circle_id: str) -> Dict[str, Any]:
        return await self.post(f"/mentorship/circles/{circle_id}/leave")


def _extract_error_message(text: str) -> Optional[str]:
    """Pull a message out of a JSON error body such as {"error": "..."}."""
    try:
        body = json.loads(text)
    except (ValueError, TypeError):
        return None

    if isinstance(body, dict):
        for key in ("message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return None

