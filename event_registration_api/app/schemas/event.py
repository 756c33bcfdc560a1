"""
Pydantic models for event data.

``EventBase`` holds the fields a client supplies when creating or
updating an event; ``EventCreate`` and ``EventUpdate`` reuse it for
request bodies and ``EventRead`` extends it with the stored
identifiers for responses.  The JSON representation uses camelCase
(``dateStart``, ``dateEnd``) while Python code uses snake_case.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class EventBase(BaseModel):
    title: str = Field(..., min_length=1, examples=["Meetup"])
    description: str = Field(..., min_length=1, examples=["Monthly Python meetup"])
    date_start: datetime = Field(..., alias="dateStart", examples=["2025-09-01T18:00:00Z"])
    date_end: datetime = Field(..., alias="dateEnd", examples=["2025-09-01T21:00:00Z"])
    type: str = Field(..., min_length=1, examples=["conference"])
    location: str = Field(..., min_length=1, examples=["Hall A"])
    website: Optional[str] = Field(None, examples=["https://example.com"])
    image: Optional[str] = Field(None, examples=["https://example.com/banner.png"])

    model_config = {
        "populate_by_name": True,
        "str_strip_whitespace": True,
    }


class EventCreate(EventBase):
    """Schema for creating an event."""

    @field_validator("date_end")
    @classmethod
    def end_after_start(cls, value: datetime, info: ValidationInfo) -> datetime:
        start = info.data.get("date_start")
        if start is not None and as_utc(value) <= as_utc(start):
            raise ValueError("End date must be after start date")
        return value


class EventUpdate(EventCreate):
    """Schema for updating an event.

    The six required fields are replaced as a whole.  ``website`` and
    ``image`` are only replaced when supplied.
    """


class EventRead(EventBase):
    """Schema for reading an event from the API.

    Participants are deliberately not embedded: phone numbers are only
    served to the owner through the participants endpoint.
    """

    id: int
    user: Optional[int] = None
    participants_count: int = Field(0, alias="participantsCount")
    created_at: datetime = Field(..., alias="date")

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }
