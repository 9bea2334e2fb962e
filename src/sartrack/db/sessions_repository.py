"""Repository functions for sessions and session_dogs tables."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from sartrack.db.database import get_db
from sartrack.db.dogs_repository import DogRecord

logger = structlog.get_logger(__name__)


@dataclass
class SessionRecord:
    """Training session record from database."""

    id: int
    started_at: str
    ended_at: str | None = None
    location: str | None = None
    notes: str | None = None

    @property
    def is_open(self) -> bool:
        """A session stays open until ended_at is set."""
        return self.ended_at is None


def insert_session(
    started_at: str,
    location: str | None = None,
    notes: str | None = None,
) -> SessionRecord:
    """Insert a new, open session."""
    with get_db() as conn:
        cursor = conn.execute(
            "INSERT INTO sessions (started_at, ended_at, location, notes) VALUES (?, NULL, ?, ?)",
            (started_at, location, notes),
        )
        session_id = cursor.lastrowid

    logger.debug("sessions.inserted", session_id=session_id)
    return SessionRecord(id=session_id, started_at=started_at, location=location, notes=notes)


def get_session_by_id(session_id: int) -> SessionRecord | None:
    """Get session by ID, None if absent."""
    with get_db() as conn:
        row = conn.execute("SELECT * FROM sessions WHERE id = ?", (session_id,)).fetchone()

    return _row_to_record(row) if row is not None else None


def get_all_sessions() -> list[SessionRecord]:
    """Get all sessions, newest first."""
    with get_db() as conn:
        rows = conn.execute("SELECT * FROM sessions ORDER BY started_at DESC, id DESC").fetchall()

    return [_row_to_record(row) for row in rows]


def update_session(
    session_id: int,
    started_at: str,
    location: str | None,
    notes: str | None,
) -> SessionRecord | None:
    """Replace started_at, location and notes; ended_at is untouched."""
    with get_db() as conn:
        cursor = conn.execute(
            "UPDATE sessions SET started_at = ?, location = ?, notes = ? WHERE id = ?",
            (started_at, location, notes, session_id),
        )
        if cursor.rowcount == 0:
            return None
        row = conn.execute("SELECT * FROM sessions WHERE id = ?", (session_id,)).fetchone()

    logger.debug("sessions.updated", session_id=session_id)
    return _row_to_record(row)


def set_session_ended_at(session_id: int, ended_at: str) -> SessionRecord | None:
    """Set ended_at, overwriting any previous value. None if absent."""
    with get_db() as conn:
        cursor = conn.execute(
            "UPDATE sessions SET ended_at = ? WHERE id = ?",
            (ended_at, session_id),
        )
        if cursor.rowcount == 0:
            return None
        row = conn.execute("SELECT * FROM sessions WHERE id = ?", (session_id,)).fetchone()

    logger.debug("sessions.ended", session_id=session_id, ended_at=ended_at)
    return _row_to_record(row)


def add_session_dog(session_id: int, dog_id: int) -> bool:
    """Add a dog to a session.

    Returns:
        True if the membership was created, False if it already existed

    Raises:
        sqlite3.IntegrityError: Unknown session or dog
    """
    with get_db() as conn:
        cursor = conn.execute(
            "INSERT OR IGNORE INTO session_dogs (session_id, dog_id) VALUES (?, ?)",
            (session_id, dog_id),
        )

    return cursor.rowcount > 0


def get_session_dogs(session_id: int) -> list[DogRecord]:
    """Dogs attached to a session, ordered by name."""
    with get_db() as conn:
        rows = conn.execute(
            """
            SELECT d.* FROM dogs d
            JOIN session_dogs sd ON sd.dog_id = d.id
            WHERE sd.session_id = ?
            ORDER BY d.name, d.id
            """,
            (session_id,),
        ).fetchall()

    return [
        DogRecord(
            id=row["id"],
            name=row["name"],
            callname=row["callname"],
            birthdate=row["birthdate"],
            notes=row["notes"],
        )
        for row in rows
    ]


def _row_to_record(row) -> SessionRecord:
    """Convert database row to SessionRecord."""
    return SessionRecord(
        id=row["id"],
        started_at=row["started_at"],
        ended_at=row["ended_at"],
        location=row["location"],
        notes=row["notes"],
    )
