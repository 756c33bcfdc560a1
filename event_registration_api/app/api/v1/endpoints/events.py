"""
Event endpoints for API v1.

CRUD routes for events.  Listing and reading are public; creating
requires a bearer token and updating or deleting additionally requires
that the caller owns the event.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from event_registration_api.app.core.db import MAX_SQLITE_INTEGER
from event_registration_api.app.core.security import get_current_user
from event_registration_api.app.schemas.event import EventCreate, EventRead, EventUpdate
from event_registration_api.app.services.event_service import EventService


router = APIRouter()


@router.get("/", response_model=List[EventRead])
async def list_events(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0, le=MAX_SQLITE_INTEGER),
    sort_by: str = Query("id"),
    order: str = Query("asc"),
    event_type: Optional[str] = Query(None, alias="type"),
) -> List[EventRead]:
    """List all events.

    - **limit**, **offset**: pagination.
    - **sort_by**: `id`, `title`, `date_start`, `date_end` or `created_at`.
    - **order**: `asc` or `desc`.
    - **type**: only events of this type.
    """
    return await EventService.list_events(
        limit=limit,
        offset=offset,
        sort_by=sort_by,
        order=order,
        event_type=event_type,
    )


@router.post("/", response_model=EventRead)
async def create_event(
    event: EventCreate,
    current_user: dict = Depends(get_current_user),
) -> EventRead:
    """Create an event owned by the authenticated user."""
    return await EventService.create_event(event, current_user)


@router.get("/m", response_model=List[EventRead])
async def list_my_events(current_user: dict = Depends(get_current_user)) -> List[EventRead]:
    """List the events owned by the authenticated user."""
    return await EventService.list_events(limit=1000, user_id=current_user.get("user_id"))


@router.get("/{event_id}", response_model=EventRead)
async def get_event(event_id: int = Path(..., ge=1, le=MAX_SQLITE_INTEGER)) -> EventRead:
    """Retrieve a single event by its ID, or 404."""
    try:
        return await EventService.get_event(event_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.put("/{event_id}", response_model=EventRead)
async def update_event(
    updates: EventUpdate,
    event_id: int = Path(..., ge=1, le=MAX_SQLITE_INTEGER),
    current_user: dict = Depends(get_current_user),
) -> EventRead:
    """Replace the fields of an event.  Only the owner may do this."""
    try:
        return await EventService.update_event(event_id, updates, current_user)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e


@router.delete("/{event_id}")
async def delete_event(
    event_id: int = Path(..., ge=1, le=MAX_SQLITE_INTEGER),
    current_user: dict = Depends(get_current_user),
) -> dict:
    """Delete an event and its participants.  Only the owner may do this."""
    try:
        await EventService.delete_event(event_id, current_user)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    return {"msg": "Event removed"}
