"""
Business logic for events.

``EventService`` performs the CRUD operations for events against the
SQLite store.  Ownership is checked here rather than in the endpoints
so every mutating path enforces it the same way: a missing event
raises ``ValueError`` and a caller who does not own the event raises
``PermissionError``.
"""

import logging
import sqlite3
from datetime import datetime, timezone
from typing import List, Optional

from event_registration_api.app.core.db import get_connection
from event_registration_api.app.schemas.event import EventCreate, EventRead, EventUpdate, as_utc


logger = logging.getLogger(__name__)


EVENT_COLUMNS = (
    "e.id, e.user_id, e.title, e.description, e.date_start, e.date_end, e.type, "
    "e.location, e.website, e.image, e.created_at, "
    "(SELECT COUNT(*) FROM participants p WHERE p.event_id = e.id) AS participants_count"
)

SORTABLE_FIELDS = {"id", "title", "date_start", "date_end", "created_at"}


def _utc_iso(value: datetime) -> str:
    # Stored in UTC so ORDER BY on the text column follows time order.
    return as_utc(value).astimezone(timezone.utc).isoformat(timespec="microseconds")


def _row_to_event(row: sqlite3.Row) -> EventRead:
    return EventRead(
        id=row["id"],
        user=row["user_id"],
        title=row["title"],
        description=row["description"],
        date_start=row["date_start"],
        date_end=row["date_end"],
        type=row["type"],
        location=row["location"],
        website=row["website"],
        image=row["image"],
        participants_count=row["participants_count"],
        created_at=row["created_at"],
    )


def fetch_owned_event(cursor: sqlite3.Cursor, event_id: int, user_id: int) -> sqlite3.Row:
    """Return the event row if it exists and belongs to ``user_id``.

    Raises ``ValueError`` if the event does not exist and
    ``PermissionError`` if it belongs to someone else.
    """
    row = cursor.execute(
        "SELECT id, user_id FROM events WHERE id = ?", (event_id,)
    ).fetchone()
    if not row:
        raise ValueError("Event not found")
    if row["user_id"] != user_id:
        raise PermissionError("User not authorized")
    return row


class EventService:
    """Service for managing events."""

    @classmethod
    async def create_event(cls, data: EventCreate, current_user: dict) -> EventRead:
        """Insert a new event owned by the current user and return it."""
        user_id = current_user.get("user_id")
        logger.info("User %s is creating event '%s'", current_user.get("sub"), data.title)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO events (user_id, title, description, date_start, date_end, type, location, website, image)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    user_id,
                    data.title,
                    data.description,
                    _utc_iso(data.date_start),
                    _utc_iso(data.date_end),
                    data.type,
                    data.location,
                    data.website,
                    data.image,
                ),
            )
            event_id = cursor.lastrowid
            conn.commit()
            row = cursor.execute(
                f"SELECT {EVENT_COLUMNS} FROM events e WHERE e.id = ?", (event_id,)
            ).fetchone()
            return _row_to_event(row)
        finally:
            conn.close()

    @classmethod
    async def list_events(
        cls,
        limit: int = 100,
        offset: int = 0,
        sort_by: str = "id",
        order: str = "asc",
        event_type: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> List[EventRead]:
        """Return events with optional filtering, sorting and pagination.

        - ``limit`` and ``offset`` control pagination.
        - ``sort_by`` is one of ``id``, ``title``, ``date_start``,
          ``date_end`` or ``created_at``; anything else sorts by ``id``.
        - ``order`` is ``asc`` or ``desc``; anything else means ``asc``.
        - ``event_type`` keeps only events of that exact type.
        - ``user_id`` keeps only events owned by that user.
        """
        query = f"SELECT {EVENT_COLUMNS} FROM events e"
        params: list = []
        where_clauses: list[str] = []
        if event_type:
            where_clauses.append("e.type = ?")
            params.append(event_type)
        if user_id is not None:
            where_clauses.append("e.user_id = ?")
            params.append(user_id)
        if where_clauses:
            query += " WHERE " + " AND ".join(where_clauses)
        if sort_by not in SORTABLE_FIELDS:
            sort_by = "id"
        order = order.lower()
        if order not in {"asc", "desc"}:
            order = "asc"
        query += f" ORDER BY e.{sort_by} {order}, e.id {order}"
        query += " LIMIT ? OFFSET ?"
        params.extend([limit, offset])
        conn = get_connection()
        try:
            rows = conn.execute(query, tuple(params)).fetchall()
            return [_row_to_event(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_event(cls, event_id: int) -> EventRead:
        """Retrieve a single event by ID.

        Raises ``ValueError`` if the event does not exist.
        """
        conn = get_connection()
        try:
            row = conn.execute(
                f"SELECT {EVENT_COLUMNS} FROM events e WHERE e.id = ?", (event_id,)
            ).fetchone()
            if not row:
                raise ValueError("Event not found")
            return _row_to_event(row)
        finally:
            conn.close()

    @classmethod
    async def update_event(cls, event_id: int, data: EventUpdate, current_user: dict) -> EventRead:
        """Replace the descriptive and temporal fields of an owned event.

        ``website`` and ``image`` keep their stored values when the
        update leaves them out.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            fetch_owned_event(cursor, event_id, current_user.get("user_id"))
            cursor.execute(
                """
                UPDATE events
                SET title = ?, description = ?, date_start = ?, date_end = ?, type = ?, location = ?,
                    website = COALESCE(?, website), image = COALESCE(?, image)
                WHERE id = ?
                """,
                (
                    data.title,
                    data.description,
                    _utc_iso(data.date_start),
                    _utc_iso(data.date_end),
                    data.type,
                    data.location,
                    data.website,
                    data.image,
                    event_id,
                ),
            )
            conn.commit()
            logger.info("User %s updated event %s", current_user.get("sub"), event_id)
            row = cursor.execute(
                f"SELECT {EVENT_COLUMNS} FROM events e WHERE e.id = ?", (event_id,)
            ).fetchone()
            return _row_to_event(row)
        finally:
            conn.close()

    @classmethod
    async def delete_event(cls, event_id: int, current_user: dict) -> None:
        """Delete an owned event together with its participants."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            fetch_owned_event(cursor, event_id, current_user.get("user_id"))
            cursor.execute("DELETE FROM participants WHERE event_id = ?", (event_id,))
            cursor.execute("DELETE FROM events WHERE id = ?", (event_id,))
            conn.commit()
            logger.info("User %s deleted event %s", current_user.get("sub"), event_id)
        finally:
            conn.close()
