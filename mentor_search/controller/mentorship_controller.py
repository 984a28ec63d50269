"""
Mentorship controller for mentor details, sessions and circles.

Sibling of MentorSearchController built on the same API client. List fetches
are best-effort: failures are logged and leave the current list in place.
Mutations (booking, cancelling, joining) re-raise their failures so the
caller can react.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from mentor_search.api.normalizer import parse_mentors, pick_record, pick_records
from mentor_search.error_handling import ErrorHandler, MentorApiError
from mentor_search.models import (
    AvailabilitySlot,
    MentorCircle,
    MentorProfile,
    MentorSession,
    SessionReview,
    SessionStatus,
)


logger = logging.getLogger(__name__)


class MentorshipController:
    """
    Holds mentor detail, session and circle state.

    Attributes:
        api_client: MentorApiClient or a compatible object
        featured_mentors: Mentors promoted by the backend
        recommended_mentors: Mentors recommended for the current user
        selected_mentor: Mentor last loaded by get_mentor_by_id()
        upcoming_sessions: Sessions scheduled in the future
        past_sessions: Sessions already held
        my_circles: Circles the user belongs to
        discovery_circles: Circles suggested to the user
        is_booking: A booking request is in flight
        error: Message from the last failed booking
    """

    def __init__(self, api_client: Any, error_handler: Optional[ErrorHandler] = None):
        self.api_client = api_client
        self.error_handler = error_handler or ErrorHandler()

        self.featured_mentors: List[MentorProfile] = []
        self.recommended_mentors: List[MentorProfile] = []
        self.selected_mentor: Optional[MentorProfile] = None
        self.upcoming_sessions: List[MentorSession] = []
        self.past_sessions: List[MentorSession] = []
        self.my_circles: List[MentorCircle] = []
        self.discovery_circles: List[MentorCircle] = []
        self.is_booking = False
        self.error: Optional[str] = None

    # Mentor discovery

    async def fetch_featured_mentors(self) -> None:
        try:
            payload = await self.api_client.get_featured_mentors()
            self.featured_mentors = parse_mentors(pick_records(payload, 'mentors'))
        except MentorApiError as e:
            logger.warning(f"Failed to fetch featured mentors: {e}")

    async def fetch_recommended_mentors(self) -> None:
        try:
            payload = await self.api_client.get_recommended_mentors()
            self.recommended_mentors = parse_mentors(pick_records(payload, 'mentors'))
        except MentorApiError as e:
            logger.warning(f"Failed to fetch recommended mentors: {e}")

    async def get_mentor_by_id(self, mentor_id: str) -> Optional[MentorProfile]:
        """
        Load a single mentor and make it the selected mentor.

        Returns:
            The mentor, or None if it could not be loaded
        """
        try:
            payload = await self.api_client.get_mentor(mentor_id)
            mentor = parse_mentors([pick_record(payload, 'mentor')])[0]
        except MentorApiError as e:
            logger.warning(f"Failed to fetch mentor {mentor_id}: {e}")
            return None

        self.selected_mentor = mentor
        return mentor

    async def get_mentor_availability(self, mentor_id: str, date: str) -> List[AvailabilitySlot]:
        """Return the mentor's open slots for a date, or [] on failure."""
        try:
            payload = await self.api_client.get_mentor_availability(mentor_id, date)
            return [AvailabilitySlot.model_validate(slot) for slot in pick_records(payload, 'slots')]
        except MentorApiError as e:
            logger.warning(f"Failed to fetch availability for mentor {mentor_id}: {e}")
            return []
        except ValueError as e:
            logger.warning(f"Invalid availability data for mentor {mentor_id}: {e}")
            return []

    # Sessions

    async def fetch_upcoming_sessions(self) -> None:
        sessions = await self._fetch_sessions('upcoming')
        if sessions is not None:
            self.upcoming_sessions = sessions

    async def fetch_past_sessions(self) -> None:
        sessions = await self._fetch_sessions('past')
        if sessions is not None:
            self.past_sessions = sessions

    async def _fetch_sessions(self, status: str) -> Optional[List[MentorSession]]:
        try:
            payload = await self.api_client.get_sessions(status)
            return [MentorSession.model_validate(s) for s in pick_records(payload, 'sessions')]
        except MentorApiError as e:
            logger.warning(f"Failed to fetch {status} sessions: {e}")
        except ValueError as e:
            logger.warning(f"Invalid {status} session data: {e}")
        return None

    async def book_session(
        self,
        mentor_id: str,
        scheduled_at: str,
        duration: int,
        session_type: str,
        topic: Optional[str] = None,
        notes: Optional[str] = None
    ) -> MentorSession:
        """
        Book a session with a mentor.

        Raises:
            MentorApiError: If the booking request fails
        """
        data: Dict[str, Any] = {
            "mentorId": mentor_id,
            "scheduledAt": scheduled_at,
            "duration": duration,
            "type": session_type,
        }
        if topic is not None:
            data["topic"] = topic
        if notes is not None:
            data["notes"] = notes

        self.is_booking = True
        self.error = None
        try:
            payload = await self.api_client.book_session(data)
            session = MentorSession.model_validate(pick_record(payload, 'session'))
        except MentorApiError as e:
            self.error = self.error_handler.describe(e, "book_session")
            raise
        finally:
            self.is_booking = False

        self.upcoming_sessions = self.upcoming_sessions + [session]
        logger.info(f"Booked session {session.id} with mentor {mentor_id}")
        return session

    async def cancel_session(self, session_id: str, reason: Optional[str] = None) -> None:
        try:
            await self.api_client.cancel_session(session_id, reason)
        except MentorApiError as e:
            logger.warning(f"Failed to cancel session {session_id}: {e}")
            raise

        self.upcoming_sessions = [
            s.model_copy(update={"status": SessionStatus.CANCELLED, "cancel_reason": reason})
            if s.id == session_id else s
            for s in self.upcoming_sessions
        ]

    async def reschedule_session(self, session_id: str, new_date: str) -> None:
        try:
            payload = await self.api_client.reschedule_session(session_id, new_date)
        except MentorApiError as e:
            logger.warning(f"Failed to reschedule session {session_id}: {e}")
            raise

        updated = MentorSession.model_validate(pick_record(payload, 'session'))
        self.upcoming_sessions = [
            updated if s.id == session_id else s
            for s in self.upcoming_sessions
        ]

    async def submit_review(
        self,
        session_id: str,
        rating: int,
        review: Optional[str] = None,
        tags: Optional[List[str]] = None
    ) -> None:
        """
        Review a past session.

        Raises:
            ValueError: If the rating is outside 1 to 5
            MentorApiError: If the request fails
        """
        if not 1 <= rating <= 5:
            raise ValueError(f"rating must be between 1 and 5: {rating}")

        body = SessionReview(session_id=session_id, rating=rating, review=review, tags=tags or [])
        try:
            await self.api_client.submit_review(
                session_id,
                body.model_dump(by_alias=True, exclude={"session_id"})
            )
        except MentorApiError as e:
            logger.warning(f"Failed to submit review for session {session_id}: {e}")
            raise

        self.past_sessions = [
            s.model_copy(update={"rating": rating, "review": review})
            if s.id == session_id else s
            for s in self.past_sessions
        ]

    # Circles

    async def fetch_my_circles(self) -> None:
        circles = await self._fetch_circles(self.api_client.get_my_circles, "my")
        if circles is not None:
            self.my_circles = circles

    async def fetch_discovery_circles(self) -> None:
        circles = await self._fetch_circles(self.api_client.get_discovery_circles, "discovery")
        if circles is not None:
            self.discovery_circles = circles

    async def _fetch_circles(self, fetch, label: str) -> Optional[List[MentorCircle]]:
        try:
            payload = await fetch()
            return [MentorCircle.model_validate(c) for c in pick_records(payload, 'circles')]
        except MentorApiError as e:
            logger.warning(f"Failed to fetch {label} circles: {e}")
        except ValueError as e:
            logger.warning(f"Invalid {label} circle data: {e}")
        return None

    async def join_circle(self, circle_id: str) -> None:
        """
        Join a circle, updating local state before the request completes.

        The optimistic update is rolled back if the request fails.

        Raises:
            MentorApiError: If the join request fails
        """
        previous_mine, previous_discovery = self.my_circles, self.discovery_circles

        circle = next((c for c in self.discovery_circles if c.id == circle_id), None)
        if circle is not None:
            joined = circle.model_copy(update={"is_member": True})
            self.discovery_circles = [joined if c.id == circle_id else c for c in self.discovery_circles]
            if not any(c.id == circle_id for c in self.my_circles):
                self.my_circles = self.my_circles + [joined]

        try:
            await self.api_client.join_circle(circle_id)
        except MentorApiError as e:
            logger.warning(f"Failed to join circle {circle_id}: {e}")
            self.my_circles, self.discovery_circles = previous_mine, previous_discovery
            raise

    async def leave_circle(self, circle_id: str) -> None:
        """
        Leave a circle, updating local state before the request completes.

        Raises:
            MentorApiError: If the leave request fails
        """
        previous_mine, previous_discovery = self.my_circles, self.discovery_circles

        self.my_circles = [c for c in self.my_circles if c.id != circle_id]
        self.discovery_circles = [
            c.model_copy(update={"is_member": False}) if c.id == circle_id else c
            for c in self.discovery_circles
        ]

        try:
            await self.api_client.leave_circle(circle_id)
        except MentorApiError as e:
            logger.warning(f"Failed to leave circle {circle_id}: {e}")
            self.my_circles, self.discovery_circles = previous_mine, previous_discovery
            raise

    # Utility

    async def refresh_all(self, search_controller=None) -> None:
        """Reload every list concurrently, including a search refresh if given."""
        tasks = [
            self.fetch_featured_mentors(),
            self.fetch_recommended_mentors(),
            self.fetch_upcoming_sessions(),
            self.fetch_past_sessions(),
            self.fetch_my_circles(),
        ]
        if search_controller is not None:
            tasks.insert(0, search_controller.refresh())
        await asyncio.gather(*tasks)

    def clear_error(self) -> None:
        self.error = None
