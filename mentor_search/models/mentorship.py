"""Mentorship session and circle data models"""

from enum import Enum
from pydantic import field_validator
from typing import List, Optional

from .mentor import BackendRecord, MentorProfile


class SessionStatus(str, Enum):
    """Lifecycle status of a booked session"""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"
    NO_SHOW = "NO_SHOW"


class SessionType(str, Enum):
    """Medium a session is held over"""
    VIDEO = "VIDEO"
    AUDIO = "AUDIO"
    CHAT = "CHAT"
    IN_PERSON = "IN_PERSON"


class MentorSession(BackendRecord):
    """Booked mentorship session"""
    id: str
    mentor_id: str
    mentor: Optional[MentorProfile] = None
    mentee_id: Optional[str] = None
    scheduled_at: str
    duration: int = 60
    type: SessionType = SessionType.VIDEO
    status: SessionStatus = SessionStatus.PENDING
    topic: Optional[str] = None
    notes: Optional[str] = None
    meeting_url: Optional[str] = None
    price: Optional[float] = None
    rating: Optional[float] = None
    review: Optional[str] = None
    cancel_reason: Optional[str] = None

    @field_validator("id", "mentor_id", "mentee_id", mode="before")
    @classmethod
    def _stringify_ids(cls, value):
        return None if value is None else str(value)


class MentorCircle(BackendRecord):
    """Mentor-led group"""
    id: str
    name: str
    description: str = ""
    mentor_id: Optional[str] = None
    member_count: int = 0
    is_private: bool = False
    topics: List[str] = []
    meeting_frequency: Optional[str] = None
    next_meeting_at: Optional[str] = None
    is_member: bool = False
    is_pending: bool = False

    @field_validator("id", "mentor_id", mode="before")
    @classmethod
    def _stringify_ids(cls, value):
        return None if value is None else str(value)


class SessionReview(BackendRecord):
    """Review left by a mentee after a session"""
    session_id: str
    rating: int
    review: Optional[str] = None
    tags: List[str] = []
