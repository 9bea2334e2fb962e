"""Repository functions for rounds table.

Rounds are append-only: there is no update or delete.

Round numbers are scoped per (session, dog). The number is computed by the
same INSERT statement that stores the round, inside a BEGIN IMMEDIATE
transaction, so two writers for the same scope can never read the same
MAX(round_number).
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from sartrack.db.database import get_db

logger = structlog.get_logger(__name__)


@dataclass
class RoundRecord:
    """Round record from database."""

    id: int
    session_id: int
    round_number: int
    dog_id: int
    exercise_id: int
    planned_behavior_id: int
    outcome: str
    exhibited_behavior_id: int | None = None
    exhibited_free_text: str | None = None
    score: int | None = None
    notes: str | None = None
    started_at: str | None = None
    ended_at: str | None = None


_INSERT_ROUND = """
    INSERT INTO rounds (
        session_id, dog_id, round_number, exercise_id,
        planned_behavior_id, exhibited_behavior_id, exhibited_free_text,
        outcome, score, notes, started_at, ended_at
    )
    SELECT ?, ?, COALESCE(MAX(round_number), 0) + 1, ?, ?, ?, ?, ?, ?, ?, ?, ?
    FROM rounds
    WHERE session_id = ? AND dog_id = ?
"""


def insert_round(
    session_id: int,
    dog_id: int,
    exercise_id: int,
    planned_behavior_id: int,
    outcome: str,
    exhibited_behavior_id: int | None = None,
    exhibited_free_text: str | None = None,
    score: int | None = None,
    notes: str | None = None,
    started_at: str | None = None,
    ended_at: str | None = None,
) -> RoundRecord:
    """Insert a round with the next round number for (session, dog).

    Returns:
        The stored RoundRecord including id and round_number

    Raises:
        sqlite3.IntegrityError: Unknown reference or invalid outcome
    """
    with get_db(immediate=True) as conn:
        cursor = conn.execute(
            _INSERT_ROUND,
            (
                session_id,
                dog_id,
                exercise_id,
                planned_behavior_id,
                exhibited_behavior_id,
                exhibited_free_text,
                outcome,
                score,
                notes,
                started_at,
                ended_at,
                session_id,
                dog_id,
            ),
        )
        row = conn.execute("SELECT * FROM rounds WHERE id = ?", (cursor.lastrowid,)).fetchone()

    record = _row_to_record(row)
    logger.debug(
        "rounds.inserted",
        round_id=record.id,
        session_id=session_id,
        dog_id=dog_id,
        round_number=record.round_number,
    )
    return record


def get_round_by_id(round_id: int) -> RoundRecord | None:
    """Get round by ID, None if absent."""
    with get_db() as conn:
        row = conn.execute("SELECT * FROM rounds WHERE id = ?", (round_id,)).fetchone()

    return _row_to_record(row) if row is not None else None


def get_session_rounds(session_id: int) -> list[RoundRecord]:
    """Rounds of a session ordered by round number, then insertion order."""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT * FROM rounds WHERE session_id = ? ORDER BY round_number, id",
            (session_id,),
        ).fetchall()

    return [_row_to_record(row) for row in rows]


def get_dog_rounds(dog_id: int) -> list[RoundRecord]:
    """Rounds of a dog across sessions, ordered by session then round number."""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT * FROM rounds WHERE dog_id = ? ORDER BY session_id, round_number",
            (dog_id,),
        ).fetchall()

    return [_row_to_record(row) for row in rows]


def _row_to_record(row) -> RoundRecord:
    """Convert database row to RoundRecord."""
    return RoundRecord(
        id=row["id"],
        session_id=row["session_id"],
        round_number=row["round_number"],
        dog_id=row["dog_id"],
        exercise_id=row["exercise_id"],
        planned_behavior_id=row["planned_behavior_id"],
        outcome=row["outcome"],
        exhibited_behavior_id=row["exhibited_behavior_id"],
        exhibited_free_text=row["exhibited_free_text"],
        score=row["score"],
        notes=row["notes"],
        started_at=row["started_at"],
        ended_at=row["ended_at"],
    )
