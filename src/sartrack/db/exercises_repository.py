"""Repository functions for exercises and behavior_exercises tables."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from sartrack.db.database import get_db, utc_now

logger = structlog.get_logger(__name__)


@dataclass
class ExerciseRecord:
    """Exercise record from database."""

    id: int
    name: str
    description: str | None
    created_at: str
    updated_at: str


@dataclass
class BehaviorExerciseLink:
    """Weighted link between a behavior and an exercise."""

    behavior_id: int
    exercise_id: int
    strength: int


def insert_exercise(name: str, description: str | None = None) -> ExerciseRecord:
    """Insert a new exercise.

    Raises:
        sqlite3.IntegrityError: If the name already exists
    """
    now = utc_now()
    with get_db() as conn:
        cursor = conn.execute(
            """
            INSERT INTO exercises (name, description, created_at, updated_at)
            VALUES (?, ?, ?, ?)
            """,
            (name, description, now, now),
        )
        exercise_id = cursor.lastrowid

    logger.debug("exercises.inserted", exercise_id=exercise_id)

    return ExerciseRecord(
        id=exercise_id,
        name=name,
        description=description,
        created_at=now,
        updated_at=now,
    )


def get_exercise_by_id(exercise_id: int) -> ExerciseRecord | None:
    """Get exercise by ID, None if absent."""
    with get_db() as conn:
        row = conn.execute("SELECT * FROM exercises WHERE id = ?", (exercise_id,)).fetchone()

    return _row_to_record(row) if row is not None else None


def get_all_exercises(behavior_id: int | None = None) -> list[ExerciseRecord]:
    """Get exercises ordered by name.

    Args:
        behavior_id: Only exercises linked to this behavior
    """
    with get_db() as conn:
        if behavior_id is None:
            rows = conn.execute("SELECT * FROM exercises ORDER BY name, id").fetchall()
        else:
            rows = conn.execute(
                """
                SELECT e.* FROM exercises e
                JOIN behavior_exercises be ON be.exercise_id = e.id
                WHERE be.behavior_id = ?
                ORDER BY e.name, e.id
                """,
                (behavior_id,),
            ).fetchall()

    return [_row_to_record(row) for row in rows]


def update_exercise(exercise_id: int, name: str, description: str | None) -> ExerciseRecord | None:
    """Update an exercise, None if absent.

    Raises:
        sqlite3.IntegrityError: If the new name collides with another exercise
    """
    with get_db() as conn:
        cursor = conn.execute(
            "UPDATE exercises SET name = ?, description = ?, updated_at = ? WHERE id = ?",
            (name, description, utc_now(), exercise_id),
        )
        if cursor.rowcount == 0:
            return None
        row = conn.execute("SELECT * FROM exercises WHERE id = ?", (exercise_id,)).fetchone()

    logger.debug("exercises.updated", exercise_id=exercise_id)
    return _row_to_record(row)


def delete_exercise(exercise_id: int) -> bool:
    """Delete exercise by ID.

    Raises:
        sqlite3.IntegrityError: If rounds still reference the exercise
    """
    with get_db() as conn:
        cursor = conn.execute("DELETE FROM exercises WHERE id = ?", (exercise_id,))

    deleted = cursor.rowcount > 0
    if deleted:
        logger.debug("exercises.deleted", exercise_id=exercise_id)

    return deleted


def upsert_link(behavior_id: int, exercise_id: int, strength: int) -> BehaviorExerciseLink:
    """Link a behavior to an exercise, replacing the strength of an existing link.

    Raises:
        sqlite3.IntegrityError: Unknown behavior or exercise
    """
    with get_db() as conn:
        conn.execute(
            """
            INSERT INTO behavior_exercises (behavior_id, exercise_id, strength)
            VALUES (?, ?, ?)
            ON CONFLICT (behavior_id, exercise_id) DO UPDATE SET strength = excluded.strength
            """,
            (behavior_id, exercise_id, strength),
        )

    logger.debug(
        "behavior_exercises.linked",
        behavior_id=behavior_id,
        exercise_id=exercise_id,
        strength=strength,
    )
    return BehaviorExerciseLink(behavior_id=behavior_id, exercise_id=exercise_id, strength=strength)


def get_links(
    behavior_id: int | None = None,
    exercise_id: int | None = None,
) -> list[BehaviorExerciseLink]:
    """Get behavior-exercise links, optionally filtered by either side."""
    clauses = []
    params: list[int] = []
    if behavior_id is not None:
        clauses.append("behavior_id = ?")
        params.append(behavior_id)
    if exercise_id is not None:
        clauses.append("exercise_id = ?")
        params.append(exercise_id)

    query = "SELECT behavior_id, exercise_id, strength FROM behavior_exercises"
    if clauses:
        query += " WHERE " + " AND ".join(clauses)
    query += " ORDER BY behavior_id, exercise_id"

    with get_db() as conn:
        rows = conn.execute(query, params).fetchall()

    return [
        BehaviorExerciseLink(
            behavior_id=row["behavior_id"],
            exercise_id=row["exercise_id"],
            strength=row["strength"],
        )
        for row in rows
    ]


def _row_to_record(row) -> ExerciseRecord:
    """Convert database row to ExerciseRecord."""
    return ExerciseRecord(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
