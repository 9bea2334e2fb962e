"""Dog registry service."""

from __future__ import annotations

import sqlite3
from datetime import date

import structlog

from sartrack.db import dogs_repository
from sartrack.db.dogs_repository import DogRecord
from sartrack.errors import ConflictError, NotFoundError
from sartrack.utils.validators import optional_text, parse_date, require_positive_id, require_text

logger = structlog.get_logger(__name__)


def create_dog(
    name: str,
    callname: str | None = None,
    birthdate: str | date | None = None,
    notes: str | None = None,
) -> DogRecord:
    """Register a dog.

    Raises:
        ValidationError: Blank name or birthdate that is not an ISO date
    """
    dog = dogs_repository.insert_dog(
        name=require_text(name, "name"),
        callname=optional_text(callname),
        birthdate=parse_date(birthdate, "birthdate"),
        notes=optional_text(notes),
    )
    logger.info("dogs.created", dog_id=dog.id, name=dog.name)
    return dog


def list_dogs() -> list[DogRecord]:
    return dogs_repository.get_all_dogs()


def get_dog(dog_id: int) -> DogRecord:
    """Get a dog or raise NotFoundError."""
    dog_id = require_positive_id(dog_id, "dog_id")
    dog = dogs_repository.get_dog_by_id(dog_id)
    if dog is None:
        raise NotFoundError(f"dog {dog_id} not found")
    return dog


def update_dog(
    dog_id: int,
    name: str,
    callname: str | None = None,
    birthdate: str | date | None = None,
    notes: str | None = None,
) -> DogRecord:
    dog_id = require_positive_id(dog_id, "dog_id")
    dog = dogs_repository.update_dog(
        dog_id,
        name=require_text(name, "name"),
        callname=optional_text(callname),
        birthdate=parse_date(birthdate, "birthdate"),
        notes=optional_text(notes),
    )
    if dog is None:
        raise NotFoundError(f"dog {dog_id} not found")
    return dog


def delete_dog(dog_id: int) -> None:
    """Delete a dog with no recorded rounds.

    Session memberships and proficiency rows are removed with it.
    """
    dog_id = require_positive_id(dog_id, "dog_id")
    try:
        deleted = dogs_repository.delete_dog(dog_id)
    except sqlite3.IntegrityError as exc:
        raise ConflictError(f"dog {dog_id} has recorded rounds") from exc

    if not deleted:
        raise NotFoundError(f"dog {dog_id} not found")
    logger.info("dogs.deleted", dog_id=dog_id)
