"""Catalog services: skills, behaviors, exercises and behavior-exercise links.

Each function validates its input, calls the repository and translates
sqlite integrity failures into domain errors:

- unique violation -> ConflictError
- unknown reference on write -> ValidationError
- still referenced on delete -> ConflictError
"""

from __future__ import annotations

import sqlite3

import structlog

from sartrack.db import behaviors_repository, exercises_repository, skills_repository
from sartrack.db.behaviors_repository import BehaviorRecord
from sartrack.db.database import is_foreign_key_violation, is_unique_violation
from sartrack.db.exercises_repository import BehaviorExerciseLink, ExerciseRecord
from sartrack.db.skills_repository import SkillRecord
from sartrack.errors import ConflictError, NotFoundError, ValidationError
from sartrack.utils.validators import (
    optional_positive_id,
    optional_text,
    require_positive_id,
    require_text,
)

logger = structlog.get_logger(__name__)

MIN_LINK_STRENGTH = 1
MAX_LINK_STRENGTH = 5


def _translate_write_error(exc: sqlite3.IntegrityError, duplicate_message: str) -> Exception:
    if is_unique_violation(exc):
        return ConflictError(duplicate_message)
    if is_foreign_key_violation(exc):
        return ValidationError("referenced entity does not exist")
    return ValidationError(str(exc))


# =============================================================================
# SKILLS
# =============================================================================


def create_skill(name: str, description: str | None = None) -> SkillRecord:
    """Create a skill.

    Raises:
        ValidationError: Blank name
        ConflictError: A skill with the same name exists
    """
    name = require_text(name, "name")
    description = optional_text(description)

    if skills_repository.skill_name_exists(name):
        raise ConflictError(f"skill '{name}' already exists")

    try:
        skill = skills_repository.insert_skill(name, description)
    except sqlite3.IntegrityError as exc:
        raise _translate_write_error(exc, f"skill '{name}' already exists") from exc

    logger.info("skills.created", skill_id=skill.id, name=name)
    return skill


def list_skills() -> list[SkillRecord]:
    return skills_repository.get_all_skills()


def get_skill(skill_id: int) -> SkillRecord:
    """Get a skill or raise NotFoundError."""
    skill_id = require_positive_id(skill_id, "skill_id")
    skill = skills_repository.get_skill_by_id(skill_id)
    if skill is None:
        raise NotFoundError(f"skill {skill_id} not found")
    return skill


def update_skill(skill_id: int, name: str, description: str | None = None) -> SkillRecord:
    """Rename or re-describe a skill."""
    skill_id = require_positive_id(skill_id, "skill_id")
    name = require_text(name, "name")
    description = optional_text(description)

    if skills_repository.skill_name_exists(name, exclude_id=skill_id):
        raise ConflictError(f"skill '{name}' already exists")

    try:
        skill = skills_repository.update_skill(skill_id, name, description)
    except sqlite3.IntegrityError as exc:
        raise _translate_write_error(exc, f"skill '{name}' already exists") from exc

    if skill is None:
        raise NotFoundError(f"skill {skill_id} not found")
    return skill


def delete_skill(skill_id: int) -> None:
    """Delete a skill that no behavior references."""
    skill_id = require_positive_id(skill_id, "skill_id")
    try:
        deleted = skills_repository.delete_skill(skill_id)
    except sqlite3.IntegrityError as exc:
        raise ConflictError(f"skill {skill_id} still has behaviors") from exc

    if not deleted:
        raise NotFoundError(f"skill {skill_id} not found")
    logger.info("skills.deleted", skill_id=skill_id)


# =============================================================================
# BEHAVIORS
# =============================================================================


def create_behavior(skill_id: int, name: str, description: str | None = None) -> BehaviorRecord:
    """Create a behavior under an existing skill.

    Raises:
        ValidationError: Bad skill_id, blank name or unknown skill
        ConflictError: The skill already has a behavior with this name
    """
    skill_id = require_positive_id(skill_id, "skill_id")
    name = require_text(name, "name")
    description = optional_text(description)

    if skills_repository.get_skill_by_id(skill_id) is None:
        raise ValidationError(f"skill {skill_id} does not exist")

    try:
        behavior = behaviors_repository.insert_behavior(skill_id, name, description)
    except sqlite3.IntegrityError as exc:
        raise _translate_write_error(
            exc, f"behavior '{name}' already exists for skill {skill_id}"
        ) from exc

    logger.info("behaviors.created", behavior_id=behavior.id, skill_id=skill_id)
    return behavior


def list_behaviors(skill_id: int | None = None) -> list[BehaviorRecord]:
    skill_id = optional_positive_id(skill_id, "skill_id")
    return behaviors_repository.get_all_behaviors(skill_id=skill_id)


def get_behavior(behavior_id: int) -> BehaviorRecord:
    """Get a behavior or raise NotFoundError."""
    behavior_id = require_positive_id(behavior_id, "behavior_id")
    behavior = behaviors_repository.get_behavior_by_id(behavior_id)
    if behavior is None:
        raise NotFoundError(f"behavior {behavior_id} not found")
    return behavior


def update_behavior(
    behavior_id: int,
    name: str,
    description: str | None = None,
    skill_id: int | None = None,
) -> BehaviorRecord:
    """Update a behavior. skill_id None keeps the current skill."""
    current = get_behavior(behavior_id)
    name = require_text(name, "name")
    description = optional_text(description)

    if skill_id is None:
        skill_id = current.skill_id
    else:
        skill_id = require_positive_id(skill_id, "skill_id")
        if skills_repository.get_skill_by_id(skill_id) is None:
            raise ValidationError(f"skill {skill_id} does not exist")

    try:
        behavior = behaviors_repository.update_behavior(current.id, skill_id, name, description)
    except sqlite3.IntegrityError as exc:
        raise _translate_write_error(
            exc, f"behavior '{name}' already exists for skill {skill_id}"
        ) from exc

    if behavior is None:
        raise NotFoundError(f"behavior {current.id} not found")
    return behavior


def delete_behavior(behavior_id: int) -> None:
    """Delete a behavior that no round plans or exhibits."""
    behavior_id = require_positive_id(behavior_id, "behavior_id")
    try:
        deleted = behaviors_repository.delete_behavior(behavior_id)
    except sqlite3.IntegrityError as exc:
        raise ConflictError(f"behavior {behavior_id} is referenced by rounds") from exc

    if not deleted:
        raise NotFoundError(f"behavior {behavior_id} not found")
    logger.info("behaviors.deleted", behavior_id=behavior_id)


# =============================================================================
# EXERCISES
# =============================================================================


def create_exercise(name: str, description: str | None = None) -> ExerciseRecord:
    """Create an exercise with a unique name."""
    name = require_text(name, "name")
    description = optional_text(description)

    try:
        exercise = exercises_repository.insert_exercise(name, description)
    except sqlite3.IntegrityError as exc:
        raise _translate_write_error(exc, f"exercise '{name}' already exists") from exc

    logger.info("exercises.created", exercise_id=exercise.id, name=name)
    return exercise


def list_exercises(behavior_id: int | None = None) -> list[ExerciseRecord]:
    """List exercises, optionally only those linked to a behavior."""
    behavior_id = optional_positive_id(behavior_id, "behavior_id")
    return exercises_repository.get_all_exercises(behavior_id=behavior_id)


def get_exercise(exercise_id: int) -> ExerciseRecord:
    """Get an exercise or raise NotFoundError."""
    exercise_id = require_positive_id(exercise_id, "exercise_id")
    exercise = exercises_repository.get_exercise_by_id(exercise_id)
    if exercise is None:
        raise NotFoundError(f"exercise {exercise_id} not found")
    return exercise


def update_exercise(exercise_id: int, name: str, description: str | None = None) -> ExerciseRecord:
    exercise_id = require_positive_id(exercise_id, "exercise_id")
    name = require_text(name, "name")
    description = optional_text(description)

    try:
        exercise = exercises_repository.update_exercise(exercise_id, name, description)
    except sqlite3.IntegrityError as exc:
        raise _translate_write_error(exc, f"exercise '{name}' already exists") from exc

    if exercise is None:
        raise NotFoundError(f"exercise {exercise_id} not found")
    return exercise


def delete_exercise(exercise_id: int) -> None:
    """Delete an exercise that no round uses. Its links go with it."""
    exercise_id = require_positive_id(exercise_id, "exercise_id")
    try:
        deleted = exercises_repository.delete_exercise(exercise_id)
    except sqlite3.IntegrityError as exc:
        raise ConflictError(f"exercise {exercise_id} is referenced by rounds") from exc

    if not deleted:
        raise NotFoundError(f"exercise {exercise_id} not found")
    logger.info("exercises.deleted", exercise_id=exercise_id)


# =============================================================================
# LINKS
# =============================================================================


def link_behavior_exercise(behavior_id: int, exercise_id: int, strength: int) -> BehaviorExerciseLink:
    """Link a behavior to an exercise, replacing any previous strength.

    Raises:
        ValidationError: Bad ids, strength outside 1..5, or unknown reference
    """
    behavior_id = require_positive_id(behavior_id, "behavior_id")
    exercise_id = require_positive_id(exercise_id, "exercise_id")
    if (
        isinstance(strength, bool)
        or not isinstance(strength, int)
        or not MIN_LINK_STRENGTH <= strength <= MAX_LINK_STRENGTH
    ):
        raise ValidationError(
            f"strength must be an integer between {MIN_LINK_STRENGTH} and {MAX_LINK_STRENGTH}"
        )

    if behaviors_repository.get_behavior_by_id(behavior_id) is None:
        raise ValidationError(f"behavior {behavior_id} does not exist")
    if exercises_repository.get_exercise_by_id(exercise_id) is None:
        raise ValidationError(f"exercise {exercise_id} does not exist")

    try:
        link = exercises_repository.upsert_link(behavior_id, exercise_id, strength)
    except sqlite3.IntegrityError as exc:
        raise _translate_write_error(exc, "link already exists") from exc

    logger.info(
        "links.upserted",
        behavior_id=behavior_id,
        exercise_id=exercise_id,
        strength=strength,
    )
    return link


def list_links(
    behavior_id: int | None = None,
    exercise_id: int | None = None,
) -> list[BehaviorExerciseLink]:
    behavior_id = optional_positive_id(behavior_id, "behavior_id")
    exercise_id = optional_positive_id(exercise_id, "exercise_id")
    return exercises_repository.get_links(behavior_id=behavior_id, exercise_id=exercise_id)
