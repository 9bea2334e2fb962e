"""Repository functions for dogs table."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from sartrack.db.database import get_db

logger = structlog.get_logger(__name__)


@dataclass
class DogRecord:
    """Dog record from database."""

    id: int
    name: str
    callname: str | None = None
    birthdate: str | None = None
    notes: str | None = None


def insert_dog(
    name: str,
    callname: str | None = None,
    birthdate: str | None = None,
    notes: str | None = None,
) -> DogRecord:
    """Insert a new dog."""
    with get_db() as conn:
        cursor = conn.execute(
            "INSERT INTO dogs (name, callname, birthdate, notes) VALUES (?, ?, ?, ?)",
            (name, callname, birthdate, notes),
        )
        dog_id = cursor.lastrowid

    logger.debug("dogs.inserted", dog_id=dog_id)
    return DogRecord(id=dog_id, name=name, callname=callname, birthdate=birthdate, notes=notes)


def get_dog_by_id(dog_id: int) -> DogRecord | None:
    """Get dog by ID, None if absent."""
    with get_db() as conn:
        row = conn.execute("SELECT * FROM dogs WHERE id = ?", (dog_id,)).fetchone()

    return _row_to_record(row) if row is not None else None


def get_all_dogs() -> list[DogRecord]:
    """Get all dogs ordered by name."""
    with get_db() as conn:
        rows = conn.execute("SELECT * FROM dogs ORDER BY name, id").fetchall()

    return [_row_to_record(row) for row in rows]


def update_dog(
    dog_id: int,
    name: str,
    callname: str | None,
    birthdate: str | None,
    notes: str | None,
) -> DogRecord | None:
    """Replace a dog's fields, None if absent."""
    with get_db() as conn:
        cursor = conn.execute(
            "UPDATE dogs SET name = ?, callname = ?, birthdate = ?, notes = ? WHERE id = ?",
            (name, callname, birthdate, notes, dog_id),
        )

    if cursor.rowcount == 0:
        return None

    logger.debug("dogs.updated", dog_id=dog_id)
    return DogRecord(id=dog_id, name=name, callname=callname, birthdate=birthdate, notes=notes)


def delete_dog(dog_id: int) -> bool:
    """Delete dog by ID.

    Raises:
        sqlite3.IntegrityError: If rounds still reference the dog
    """
    with get_db() as conn:
        cursor = conn.execute("DELETE FROM dogs WHERE id = ?", (dog_id,))

    deleted = cursor.rowcount > 0
    if deleted:
        logger.debug("dogs.deleted", dog_id=dog_id)

    return deleted


def _row_to_record(row) -> DogRecord:
    """Convert database row to DogRecord."""
    return DogRecord(
        id=row["id"],
        name=row["name"],
        callname=row["callname"],
        birthdate=row["birthdate"],
        notes=row["notes"],
    )
