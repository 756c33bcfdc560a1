"""
Business logic for participant registration.

Registration is a single conditional ``INSERT``: the store's
``UNIQUE(event_id, phone)`` constraint decides whether the phone is
already registered for the event, so two concurrent registrations can
never overwrite each other and a duplicate can never slip in between a
check and a write.  Short codes are drawn from ``secrets`` and their
global uniqueness is enforced by ``UNIQUE(short_id)``; a collision
simply draws another code.
"""

import logging
import secrets
import sqlite3
from typing import List, Optional

from event_registration_api.app.core.config import settings
from event_registration_api.app.core.db import get_connection
from event_registration_api.app.schemas.participant import ParticipantCreate, ParticipantRead
from event_registration_api.app.services.event_service import fetch_owned_event


logger = logging.getLogger(__name__)


def generate_short_id() -> str:
    """Return a fresh URL-safe registration code."""
    return secrets.token_urlsafe(settings.short_id_bytes)


def _is_short_id_collision(exc: sqlite3.IntegrityError) -> bool:
    return "participants.short_id" in str(exc)


def _is_missing_event(exc: sqlite3.IntegrityError) -> bool:
    return "FOREIGN KEY constraint failed" in str(exc)


class RegistrationService:
    """Service for registering participants and tracking their status."""

    @classmethod
    async def register(cls, event_id: int, data: ParticipantCreate) -> Optional[str]:
        """Register ``data`` for an event.

        Returns the new participant's short code, or ``None`` if the
        phone number is already registered for this event (nothing is
        written in that case).  Raises ``ValueError`` if the event does
        not exist.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            exists = cursor.execute("SELECT id FROM events WHERE id = ?", (event_id,)).fetchone()
            if not exists:
                raise ValueError("Event not found")
            for _ in range(settings.short_id_attempts):
                short_id = generate_short_id()
                try:
                    cursor.execute(
                        """
                        INSERT INTO participants (event_id, name, phone, short_id)
                        VALUES (?, ?, ?, ?)
                        ON CONFLICT(event_id, phone) DO NOTHING
                        """,
                        (event_id, data.name, data.phone, short_id),
                    )
                except sqlite3.IntegrityError as exc:
                    conn.rollback()
                    if _is_missing_event(exc):
                        # deleted between the existence check and the insert
                        raise ValueError("Event not found") from exc
                    if not _is_short_id_collision(exc):
                        raise
                    logger.warning("Short code collision on event %s, drawing another", event_id)
                    continue
                inserted = cursor.rowcount
                conn.commit()
                if inserted == 0:
                    logger.info("Phone already registered for event %s", event_id)
                    return None
                logger.info("Registered participant %s for event %s", short_id, event_id)
                return short_id
            raise RuntimeError(
                f"Could not issue a unique short code after {settings.short_id_attempts} attempts"
            )
        finally:
            conn.close()

    @classmethod
    async def get_status(cls, short_id: str) -> ParticipantRead:
        """Look up a registration by its short code across all events.

        The earliest admitted match wins.  Raises ``ValueError`` if no
        participant carries the code.
        """
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT name, phone, short_id, status FROM participants WHERE short_id = ? ORDER BY id LIMIT 1",
                (short_id,),
            ).fetchone()
        finally:
            conn.close()
        if not row:
            raise ValueError("Wrong registration code")
        return ParticipantRead(
            name=row["name"], phone=row["phone"], short_id=row["short_id"], status=row["status"]
        )

    @classmethod
    async def update_status(cls, event_id: int, short_id: str, new_status: str, current_user: dict) -> int:
        """Set the status of the participant with ``short_id`` in an owned event.

        Returns the number of participants changed, which is ``0`` when
        the event has no participant with that code.  Raises
        ``ValueError`` for a missing event and ``PermissionError`` when
        the caller does not own it.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            fetch_owned_event(cursor, event_id, current_user.get("user_id"))
            cursor.execute(
                "UPDATE participants SET status = ? WHERE event_id = ? AND short_id = ?",
                (new_status, event_id, short_id),
            )
            updated = cursor.rowcount
            conn.commit()
        finally:
            conn.close()
        if updated:
            logger.info("Participant %s of event %s is now '%s'", short_id, event_id, new_status)
        else:
            logger.warning("No participant %s in event %s; status left unchanged", short_id, event_id)
        return updated

    @classmethod
    async def list_participants(cls, event_id: int, current_user: dict) -> List[ParticipantRead]:
        """Return the participants of an owned event in registration order."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            fetch_owned_event(cursor, event_id, current_user.get("user_id"))
            rows = cursor.execute(
                "SELECT name, phone, short_id, status FROM participants WHERE event_id = ? ORDER BY id",
                (event_id,),
            ).fetchall()
            return [
                ParticipantRead(
                    name=row["name"], phone=row["phone"], short_id=row["short_id"], status=row["status"]
                )
                for row in rows
            ]
        finally:
            conn.close()
