"""Training session lifecycle.

A session is Open while ended_at is null and Closed once it is set.
Closing again overwrites ended_at; there is no reopen. Rounds may still be
recorded on a closed session.

All state lives in the database, so these functions are safe to call from
concurrent request threads.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime

import structlog

from sartrack.db import rounds_repository, sessions_repository
from sartrack.db.database import utc_now
from sartrack.db.dogs_repository import DogRecord, get_dog_by_id
from sartrack.db.rounds_repository import RoundRecord
from sartrack.db.sessions_repository import SessionRecord
from sartrack.errors import NotFoundError, ValidationError
from sartrack.utils.validators import optional_text, parse_timestamp, require_positive_id

logger = structlog.get_logger(__name__)


def create_session(
    started_at: str | datetime | None = None,
    location: str | None = None,
    notes: str | None = None,
) -> SessionRecord:
    """Open a new session.

    Args:
        started_at: ISO-8601 timestamp, defaults to now (UTC)
        location: Free-text location
        notes: Free-text notes

    Returns:
        The new, open SessionRecord
    """
    started = parse_timestamp(started_at, "started_at") or utc_now()
    session = sessions_repository.insert_session(
        started_at=started,
        location=optional_text(location),
        notes=optional_text(notes),
    )
    logger.info("sessions.created", session_id=session.id, started_at=started)
    return session


def get_session(session_id: int) -> SessionRecord:
    """Get a session or raise NotFoundError."""
    session_id = require_positive_id(session_id, "session_id")
    session = sessions_repository.get_session_by_id(session_id)
    if session is None:
        raise NotFoundError(f"session {session_id} not found")
    return session


def list_sessions() -> list[SessionRecord]:
    """All sessions, newest first."""
    return sessions_repository.get_all_sessions()


def update_session(
    session_id: int,
    started_at: str | datetime | None = None,
    location: str | None = None,
    notes: str | None = None,
) -> SessionRecord:
    """Replace a session's location and notes.

    started_at is replaced only when given. ended_at is never touched here;
    use close_session().
    """
    current = get_session(session_id)
    started = parse_timestamp(started_at, "started_at") or current.started_at

    session = sessions_repository.update_session(
        current.id,
        started_at=started,
        location=optional_text(location),
        notes=optional_text(notes),
    )
    if session is None:
        raise NotFoundError(f"session {current.id} not found")

    logger.info("sessions.updated", session_id=session.id)
    return session


def close_session(session_id: int, ended_at: str | datetime | None = None) -> SessionRecord:
    """Close a session by setting ended_at (default now).

    Closing an already closed session overwrites ended_at.

    Raises:
        NotFoundError: Unknown session
        ValidationError: ended_at is not ISO-8601
    """
    session_id = require_positive_id(session_id, "session_id")
    ended = parse_timestamp(ended_at, "ended_at") or utc_now()

    session = sessions_repository.set_session_ended_at(session_id, ended)
    if session is None:
        raise NotFoundError(f"session {session_id} not found")

    logger.info("sessions.closed", session_id=session_id, ended_at=ended)
    return session


def add_dog_to_session(session_id: int, dog_id: int) -> bool:
    """Attach a dog to a session. Attaching twice is a no-op.

    Returns:
        True if the dog was newly attached

    Raises:
        ValidationError: Bad ids or unknown dog
        NotFoundError: Unknown session
    """
    session_id = require_positive_id(session_id, "session_id")
    dog_id = require_positive_id(dog_id, "dog_id")

    get_session(session_id)
    if get_dog_by_id(dog_id) is None:
        raise ValidationError(f"dog {dog_id} does not exist")

    try:
        added = sessions_repository.add_session_dog(session_id, dog_id)
    except sqlite3.IntegrityError as exc:
        # Session or dog deleted between the checks and the insert
        raise ValidationError("session or dog does not exist") from exc

    if added:
        logger.info("sessions.dog_added", session_id=session_id, dog_id=dog_id)
    return added


def list_session_dogs(session_id: int) -> list[DogRecord]:
    """Dogs attached to a session, by name."""
    session = get_session(session_id)
    return sessions_repository.get_session_dogs(session.id)


def list_session_rounds(session_id: int) -> list[RoundRecord]:
    """Rounds of a session ordered by round number, then id."""
    session = get_session(session_id)
    return rounds_repository.get_session_rounds(session.id)


def list_dog_rounds(dog_id: int) -> list[RoundRecord]:
    """Rounds of a dog across all sessions."""
    dog_id = require_positive_id(dog_id, "dog_id")
    if get_dog_by_id(dog_id) is None:
        raise NotFoundError(f"dog {dog_id} not found")
    return rounds_repository.get_dog_rounds(dog_id)
