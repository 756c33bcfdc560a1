"""
Pydantic models for event participants.

A participant is created by the public registration endpoint and is
afterwards addressed only through its ``shortId``.
"""

from pydantic import BaseModel, Field


PENDING_STATUS = "pending"


class ParticipantCreate(BaseModel):
    """Body of a registration request."""

    name: str = Field(..., min_length=1, examples=["Alice"])
    phone: str = Field(..., min_length=1, examples=["555-0001"])

    model_config = {
        "str_strip_whitespace": True,
    }


class ParticipantRead(BaseModel):
    name: str
    phone: str
    short_id: str = Field(..., alias="shortId")
    status: str = PENDING_STATUS

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }


class StatusQuery(BaseModel):
    """Body of a registration status lookup."""

    short_id: str = Field(..., alias="shortId", min_length=1)

    model_config = {
        "populate_by_name": True,
        "str_strip_whitespace": True,
    }


class StatusUpdate(BaseModel):
    """Body of an owner's participant status change."""

    short_id: str = Field(..., alias="shortId", min_length=1)
    status: str = Field(..., min_length=1, examples=["confirmed"])

    model_config = {
        "populate_by_name": True,
        "str_strip_whitespace": True,
    }
