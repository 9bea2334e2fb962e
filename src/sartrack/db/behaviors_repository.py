"""Repository functions for behaviors table."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from sartrack.db.database import get_db, utc_now

logger = structlog.get_logger(__name__)


@dataclass
class BehaviorRecord:
    """Behavior record from database."""

    id: int
    skill_id: int
    name: str
    description: str | None
    created_at: str
    updated_at: str


def insert_behavior(skill_id: int, name: str, description: str | None = None) -> BehaviorRecord:
    """Insert a new behavior under a skill.

    Raises:
        sqlite3.IntegrityError: Unknown skill_id or duplicate (skill_id, name)
    """
    now = utc_now()
    with get_db() as conn:
        cursor = conn.execute(
            """
            INSERT INTO behaviors (skill_id, name, description, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (skill_id, name, description, now, now),
        )
        behavior_id = cursor.lastrowid

    logger.debug("behaviors.inserted", behavior_id=behavior_id, skill_id=skill_id)

    return BehaviorRecord(
        id=behavior_id,
        skill_id=skill_id,
        name=name,
        description=description,
        created_at=now,
        updated_at=now,
    )


def get_behavior_by_id(behavior_id: int) -> BehaviorRecord | None:
    """Get behavior by ID, None if absent."""
    with get_db() as conn:
        row = conn.execute("SELECT * FROM behaviors WHERE id = ?", (behavior_id,)).fetchone()

    return _row_to_record(row) if row is not None else None


def get_all_behaviors(skill_id: int | None = None) -> list[BehaviorRecord]:
    """Get behaviors ordered by name, optionally for a single skill."""
    query = "SELECT * FROM behaviors"
    params: tuple = ()
    if skill_id is not None:
        query += " WHERE skill_id = ?"
        params = (skill_id,)
    query += " ORDER BY name, id"

    with get_db() as conn:
        rows = conn.execute(query, params).fetchall()

    return [_row_to_record(row) for row in rows]


def update_behavior(
    behavior_id: int,
    skill_id: int,
    name: str,
    description: str | None,
) -> BehaviorRecord | None:
    """Update a behavior.

    Returns:
        Updated record, or None if the behavior doesn't exist

    Raises:
        sqlite3.IntegrityError: Unknown skill_id or duplicate (skill_id, name)
    """
    with get_db() as conn:
        cursor = conn.execute(
            """
            UPDATE behaviors SET skill_id = ?, name = ?, description = ?, updated_at = ?
            WHERE id = ?
            """,
            (skill_id, name, description, utc_now(), behavior_id),
        )
        if cursor.rowcount == 0:
            return None
        row = conn.execute("SELECT * FROM behaviors WHERE id = ?", (behavior_id,)).fetchone()

    logger.debug("behaviors.updated", behavior_id=behavior_id)
    return _row_to_record(row)


def delete_behavior(behavior_id: int) -> bool:
    """Delete behavior by ID.

    Raises:
        sqlite3.IntegrityError: If rounds still reference the behavior
    """
    with get_db() as conn:
        cursor = conn.execute("DELETE FROM behaviors WHERE id = ?", (behavior_id,))

    deleted = cursor.rowcount > 0
    if deleted:
        logger.debug("behaviors.deleted", behavior_id=behavior_id)

    return deleted


def _row_to_record(row) -> BehaviorRecord:
    """Convert database row to BehaviorRecord."""
    return BehaviorRecord(
        id=row["id"],
        skill_id=row["skill_id"],
        name=row["name"],
        description=row["description"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
