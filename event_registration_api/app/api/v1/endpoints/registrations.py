"""
Registration endpoints for API v1.

Anyone may register for an event and look up a registration by its
short code; only the event owner may list participants or change a
participant's status.

A successful registration answers with the short code as plain text.
Registering a phone number that is already on the event is not an
error: it answers ``200`` with an explanatory text and changes nothing.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status
from fastapi.responses import PlainTextResponse

from event_registration_api.app.core.db import MAX_SQLITE_INTEGER
from event_registration_api.app.core.security import get_current_user
from event_registration_api.app.schemas.participant import (
    ParticipantCreate,
    ParticipantRead,
    StatusQuery,
    StatusUpdate,
)
from event_registration_api.app.services.registration_service import RegistrationService


ALREADY_REGISTERED = "You are already registered"

router = APIRouter()


# Declared before ``/{event_id}`` so "status" is not taken for an id.
@router.post("/status", response_model=ParticipantRead)
async def registration_status(query: StatusQuery) -> ParticipantRead:
    """Look up a registration by its short code."""
    try:
        return await RegistrationService.get_status(query.short_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post("/{event_id}", response_class=PlainTextResponse)
async def register_participant(
    participant: ParticipantCreate,
    event_id: int = Path(..., ge=1, le=MAX_SQLITE_INTEGER),
) -> PlainTextResponse:
    """Register for an event and receive a short code."""
    try:
        short_id = await RegistrationService.register(event_id, participant)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    if short_id is None:
        return PlainTextResponse(ALREADY_REGISTERED)
    return PlainTextResponse(short_id)


@router.get("/{event_id}/participants", response_model=List[ParticipantRead])
async def list_participants(
    event_id: int = Path(..., ge=1, le=MAX_SQLITE_INTEGER),
    current_user: dict = Depends(get_current_user),
) -> List[ParticipantRead]:
    """List an event's participants.  Only the owner may do this."""
    try:
        return await RegistrationService.list_participants(event_id, current_user)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e


@router.put("/{event_id}/participants")
async def update_participant_status(
    update: StatusUpdate,
    event_id: int = Path(..., ge=1, le=MAX_SQLITE_INTEGER),
    current_user: dict = Depends(get_current_user),
) -> dict:
    """Change a participant's status.  Only the owner may do this.

    The answer is the same whether or not a participant with the given
    short code exists in the event.
    """
    try:
        await RegistrationService.update_status(event_id, update.short_id, update.status, current_user)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    return {"msg": "Participant status updated"}
