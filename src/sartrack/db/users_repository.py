"""Repository functions for users table."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from sartrack.db.database import get_db, utc_now

logger = structlog.get_logger(__name__)


@dataclass
class UserRecord:
    """User record from database."""

    id: int
    email: str
    password_hash: str
    is_admin: bool
    created_at: str


def insert_user(email: str, password_hash: str, is_admin: bool = False) -> UserRecord:
    """Insert a new user.

    Raises:
        sqlite3.IntegrityError: If the email already exists
    """
    now = utc_now()
    with get_db() as conn:
        cursor = conn.execute(
            "INSERT INTO users (email, password_hash, is_admin, created_at) VALUES (?, ?, ?, ?)",
            (email, password_hash, int(is_admin), now),
        )
        user_id = cursor.lastrowid

    logger.debug("users.inserted", user_id=user_id)
    return UserRecord(
        id=user_id,
        email=email,
        password_hash=password_hash,
        is_admin=is_admin,
        created_at=now,
    )


def get_user_by_email(email: str) -> UserRecord | None:
    """Get user by email, None if absent."""
    with get_db() as conn:
        row = conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()

    return _row_to_record(row) if row is not None else None


def get_user_by_id(user_id: int) -> UserRecord | None:
    """Get user by ID, None if absent."""
    with get_db() as conn:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()

    return _row_to_record(row) if row is not None else None


def _row_to_record(row) -> UserRecord:
    """Convert database row to UserRecord."""
    return UserRecord(
        id=row["id"],
        email=row["email"],
        password_hash=row["password_hash"],
        is_admin=bool(row["is_admin"]),
        created_at=row["created_at"],
    )
