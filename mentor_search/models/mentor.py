"""Mentor profile data models"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional


class BackendRecord(BaseModel):
    """Read-only record parsed from camelCase backend JSON"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data):
        # Explicit nulls fall back to the field default
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class AvailabilitySlot(BackendRecord):
    """Recurring weekly slot a mentor can be booked in"""
    id: str
    day_of_week: int = Field(ge=0, le=6)
    start_time: str
    end_time: str
    timezone: str = "UTC"

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value):
        return str(value)


class MentorProfile(BackendRecord):
    """Mentor projection returned by the search endpoints"""
    id: str
    user_id: Optional[str] = None
    name: str = ""
    avatar: Optional[str] = None
    title: str = ""
    bio: str = ""
    expertise: List[str] = []
    industries: List[str] = []
    years_experience: int = 0
    hourly_rate: Optional[float] = None
    is_free_intro_available: bool = False
    is_available_now: bool = False
    rating: float = Field(default=0.0, ge=0, le=5)
    review_count: int = 0
    session_count: int = 0
    response_time: Optional[str] = None
    languages: List[str] = []
    location: Optional[str] = None
    is_verified: bool = False
    available_slots: List[AvailabilitySlot] = []
    badges: List[str] = []
    # Only present on personalized queries
    match_score: Optional[float] = Field(default=None, ge=0, le=100)

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def _stringify_ids(cls, value):
        return None if value is None else str(value)
