"""Repository functions for dog_behavior_proficiency table.

This table is derived data: it can always be rebuilt from rounds.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from sartrack.db.database import get_db, utc_now

logger = structlog.get_logger(__name__)


@dataclass
class ProficiencyRecord:
    """Proficiency level of a dog for one behavior."""

    dog_id: int
    behavior_id: int
    level: int
    last_round_id: int | None
    updated_at: str


def raise_level(dog_id: int, behavior_id: int, level: int, round_id: int) -> ProficiencyRecord:
    """Upsert a proficiency row, keeping the higher of stored and given level.

    last_round_id and updated_at always move to the given round.
    """
    with get_db() as conn:
        conn.execute(
            """
            INSERT INTO dog_behavior_proficiency (dog_id, behavior_id, level, last_round_id, updated_at)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT (dog_id, behavior_id) DO UPDATE SET
                level = MAX(level, excluded.level),
                last_round_id = excluded.last_round_id,
                updated_at = excluded.updated_at
            """,
            (dog_id, behavior_id, level, round_id, utc_now()),
        )
        row = conn.execute(
            "SELECT * FROM dog_behavior_proficiency WHERE dog_id = ? AND behavior_id = ?",
            (dog_id, behavior_id),
        ).fetchone()

    return _row_to_record(row)


def get_proficiency(dog_id: int, behavior_id: int) -> ProficiencyRecord | None:
    """Get proficiency for (dog, behavior), None if never recorded."""
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM dog_behavior_proficiency WHERE dog_id = ? AND behavior_id = ?",
            (dog_id, behavior_id),
        ).fetchone()

    return _row_to_record(row) if row is not None else None


def get_dog_proficiency(dog_id: int) -> list[ProficiencyRecord]:
    """All proficiency rows of a dog, ordered by behavior."""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT * FROM dog_behavior_proficiency WHERE dog_id = ? ORDER BY behavior_id",
            (dog_id,),
        ).fetchall()

    return [_row_to_record(row) for row in rows]


def delete_all_proficiency() -> int:
    """Remove every proficiency row. Returns the number removed."""
    with get_db() as conn:
        cursor = conn.execute("DELETE FROM dog_behavior_proficiency")

    logger.debug("proficiency.cleared", rows=cursor.rowcount)
    return cursor.rowcount


def rebuild_from_rounds(min_score: int, level: int) -> tuple[int, int]:
    """Replace every row with levels derived from successful rounds.

    The delete and the insert share one BEGIN IMMEDIATE transaction, so
    readers see either the old table or the rebuilt one. last_round_id is the
    latest qualifying round of each (dog, planned behavior) pair.

    Returns:
        (rows removed, rows written)
    """
    with get_db(immediate=True) as conn:
        removed = conn.execute("DELETE FROM dog_behavior_proficiency").rowcount
        written = conn.execute(
            """
            INSERT INTO dog_behavior_proficiency (dog_id, behavior_id, level, last_round_id, updated_at)
            SELECT dog_id, planned_behavior_id, ?, MAX(id), ?
            FROM rounds
            WHERE outcome = 'success' AND score >= ?
            GROUP BY dog_id, planned_behavior_id
            """,
            (level, utc_now(), min_score),
        ).rowcount

    return removed, written


def _row_to_record(row) -> ProficiencyRecord:
    """Convert database row to ProficiencyRecord."""
    return ProficiencyRecord(
        dog_id=row["dog_id"],
        behavior_id=row["behavior_id"],
        level=row["level"],
        last_round_id=row["last_round_id"],
        updated_at=row["updated_at"],
    )
