"""Repository functions for skills table.

Provides CRUD operations for the skills table.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from sartrack.db.database import get_db, utc_now

logger = structlog.get_logger(__name__)


@dataclass
class SkillRecord:
    """Skill record from database."""

    id: int
    name: str
    description: str | None
    created_at: str
    updated_at: str


def insert_skill(name: str, description: str | None = None) -> SkillRecord:
    """Insert a new skill record.

    Args:
        name: Unique skill name
        description: Optional free text

    Returns:
        The stored SkillRecord

    Raises:
        sqlite3.IntegrityError: If the name already exists
    """
    now = utc_now()
    with get_db() as conn:
        cursor = conn.execute(
            """
            INSERT INTO skills (name, description, created_at, updated_at)
            VALUES (?, ?, ?, ?)
            """,
            (name, description, now, now),
        )
        skill_id = cursor.lastrowid

    logger.debug("skills.inserted", skill_id=skill_id)

    return SkillRecord(
        id=skill_id,
        name=name,
        description=description,
        created_at=now,
        updated_at=now,
    )


def get_skill_by_id(skill_id: int) -> SkillRecord | None:
    """Get skill by ID.

    Returns:
        SkillRecord if found, None otherwise
    """
    with get_db() as conn:
        row = conn.execute("SELECT * FROM skills WHERE id = ?", (skill_id,)).fetchone()

    if row is None:
        return None

    return _row_to_record(row)


def skill_name_exists(name: str, exclude_id: int | None = None) -> bool:
    """Check whether a skill with this name exists.

    Args:
        name: Skill name to look up
        exclude_id: Skill to ignore (the one being renamed)
    """
    with get_db() as conn:
        row = conn.execute(
            "SELECT 1 FROM skills WHERE name = ? AND id IS NOT ? LIMIT 1",
            (name, exclude_id),
        ).fetchone()

    return row is not None


def get_all_skills() -> list[SkillRecord]:
    """Get all skills ordered by name."""
    with get_db() as conn:
        rows = conn.execute("SELECT * FROM skills ORDER BY name, id").fetchall()

    return [_row_to_record(row) for row in rows]


def update_skill(skill_id: int, name: str, description: str | None) -> SkillRecord | None:
    """Update name and description of a skill.

    Returns:
        Updated SkillRecord, or None if the skill doesn't exist

    Raises:
        sqlite3.IntegrityError: If the new name collides with another skill
    """
    with get_db() as conn:
        cursor = conn.execute(
            "UPDATE skills SET name = ?, description = ?, updated_at = ? WHERE id = ?",
            (name, description, utc_now(), skill_id),
        )
        if cursor.rowcount == 0:
            return None
        row = conn.execute("SELECT * FROM skills WHERE id = ?", (skill_id,)).fetchone()

    logger.debug("skills.updated", skill_id=skill_id)
    return _row_to_record(row)


def delete_skill(skill_id: int) -> bool:
    """Delete skill by ID.

    Returns:
        True if deleted, False if not found

    Raises:
        sqlite3.IntegrityError: If behaviors still reference the skill
    """
    with get_db() as conn:
        cursor = conn.execute("DELETE FROM skills WHERE id = ?", (skill_id,))

    deleted = cursor.rowcount > 0
    if deleted:
        logger.debug("skills.deleted", skill_id=skill_id)

    return deleted


def _row_to_record(row) -> SkillRecord:
    """Convert database row to SkillRecord."""
    return SkillRecord(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
