"""
Business logic for users.

Users are organizers: they sign up with an e‑mail and password and
receive a bearer token on login.  Passwords are stored as PBKDF2
hashes produced by ``core.security.hash_password``.
"""

import logging
import sqlite3
from typing import Optional

from event_registration_api.app.core.db import get_connection
from event_registration_api.app.core.security import hash_password, verify_password
from event_registration_api.app.schemas.user import UserCreate, UserRead


class UserService:
    """Service for user accounts."""

    @classmethod
    async def create_user(cls, data: UserCreate) -> UserRead:
        """Create a new user and return it.

        Raises ``ValueError`` if the e‑mail is already taken.
        """
        logger = logging.getLogger(__name__)
        logger.info("Registering user %s", data.email)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    "INSERT INTO users (email, name, password) VALUES (?, ?, ?)",
                    (data.email, data.name, hash_password(data.password)),
                )
            except sqlite3.IntegrityError as exc:
                conn.rollback()
                raise ValueError("User already exists") from exc
            user_id = cursor.lastrowid
            conn.commit()
            row = cursor.execute(
                "SELECT id, name, email, created_at FROM users WHERE id = ?", (user_id,)
            ).fetchone()
            return UserRead(id=row["id"], name=row["name"], email=row["email"], created_at=row["created_at"])
        finally:
            conn.close()

    @classmethod
    async def authenticate(cls, email: str, password: str) -> Optional[UserRead]:
        """Return the user if the credentials match, otherwise ``None``."""
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, name, email, password, created_at FROM users WHERE email = ?",
                (email.lower(),),
            ).fetchone()
        finally:
            conn.close()
        if not row or not verify_password(password, row["password"]):
            return None
        return UserRead(id=row["id"], name=row["name"], email=row["email"], created_at=row["created_at"])

    @classmethod
    async def get_user_by_id(cls, user_id: int) -> Optional[UserRead]:
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, name, email, created_at FROM users WHERE id = ?", (user_id,)
            ).fetchone()
        finally:
            conn.close()
        if not row:
            return None
        return UserRead(id=row["id"], name=row["name"], email=row["email"], created_at=row["created_at"])
