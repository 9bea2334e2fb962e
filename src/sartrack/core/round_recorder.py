"""Round recording.

A round is one dog's attempt at an exercise within a session. Rounds are
numbered from 1 per (session, dog) and are never updated or deleted.

The round is committed first. The proficiency update runs afterwards in its
own transaction; if it fails the error is logged and the stored round is
still returned.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime
from enum import Enum

import structlog

from sartrack.core import proficiency
from sartrack.db import rounds_repository
from sartrack.db.behaviors_repository import get_behavior_by_id
from sartrack.db.database import is_unique_violation
from sartrack.db.dogs_repository import get_dog_by_id
from sartrack.db.exercises_repository import get_exercise_by_id
from sartrack.db.rounds_repository import RoundRecord
from sartrack.db.sessions_repository import get_session_by_id
from sartrack.errors import ConflictError, NotFoundError, ValidationError
from sartrack.utils.validators import (
    optional_positive_id,
    optional_text,
    parse_timestamp,
    require_positive_id,
)

logger = structlog.get_logger(__name__)

MIN_SCORE = 0
MAX_SCORE = 10


class Outcome(str, Enum):
    """Result of a round."""

    SUCCESS = "success"
    PARTIAL = "partial"
    FAIL = "fail"


def parse_outcome(value: str | Outcome | None) -> Outcome:
    """Parse an outcome case-insensitively.

    Raises:
        ValidationError: Missing or unknown outcome
    """
    if isinstance(value, Outcome):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("outcome is required")
    try:
        return Outcome(value.strip().lower())
    except ValueError:
        allowed = ", ".join(o.value for o in Outcome)
        raise ValidationError(f"outcome must be one of: {allowed}")


def validate_score(score: int | None) -> int | None:
    """Return score if it is None or an integer in 0..10."""
    if score is None:
        return None
    if isinstance(score, bool) or not isinstance(score, int) or not MIN_SCORE <= score <= MAX_SCORE:
        raise ValidationError(f"score must be an integer between {MIN_SCORE} and {MAX_SCORE}")
    return score


def record_round(
    session_id: int,
    dog_id: int,
    exercise_id: int,
    planned_behavior_id: int,
    outcome: str | Outcome,
    exhibited_behavior_id: int | None = None,
    exhibited_free_text: str | None = None,
    score: int | None = None,
    notes: str | None = None,
    started_at: str | datetime | None = None,
    ended_at: str | datetime | None = None,
) -> RoundRecord:
    """Validate, number and store a round, then update proficiency.

    Args:
        session_id: Session the round belongs to
        dog_id: Dog that ran the round
        exercise_id: Exercise performed
        planned_behavior_id: Behavior the handler intended to train
        outcome: success, partial or fail (any case)
        exhibited_behavior_id: Behavior actually shown, if different
        exhibited_free_text: Description when no catalogued behavior matches
        score: Optional 0..10 score
        notes: Optional free text
        started_at: Optional ISO-8601 timestamp
        ended_at: Optional ISO-8601 timestamp

    Returns:
        Stored RoundRecord with id and round_number

    Raises:
        ValidationError: Invalid field or unknown dog/exercise/behavior
        NotFoundError: Unknown session
    """
    session_id = require_positive_id(session_id, "session_id")
    dog_id = require_positive_id(dog_id, "dog_id")
    exercise_id = require_positive_id(exercise_id, "exercise_id")
    planned_behavior_id = require_positive_id(planned_behavior_id, "planned_behavior_id")
    exhibited_behavior_id = optional_positive_id(exhibited_behavior_id, "exhibited_behavior_id")
    parsed_outcome = parse_outcome(outcome)
    score = validate_score(score)
    started = parse_timestamp(started_at, "started_at")
    ended = parse_timestamp(ended_at, "ended_at")

    if get_session_by_id(session_id) is None:
        raise NotFoundError(f"session {session_id} not found")
    if get_dog_by_id(dog_id) is None:
        raise ValidationError(f"dog {dog_id} does not exist")
    if get_exercise_by_id(exercise_id) is None:
        raise ValidationError(f"exercise {exercise_id} does not exist")
    if get_behavior_by_id(planned_behavior_id) is None:
        raise ValidationError(f"behavior {planned_behavior_id} does not exist")
    if exhibited_behavior_id is not None and get_behavior_by_id(exhibited_behavior_id) is None:
        raise ValidationError(f"behavior {exhibited_behavior_id} does not exist")

    try:
        round_ = rounds_repository.insert_round(
            session_id=session_id,
            dog_id=dog_id,
            exercise_id=exercise_id,
            planned_behavior_id=planned_behavior_id,
            outcome=parsed_outcome.value,
            exhibited_behavior_id=exhibited_behavior_id,
            exhibited_free_text=optional_text(exhibited_free_text),
            score=score,
            notes=optional_text(notes),
            started_at=started,
            ended_at=ended,
        )
    except sqlite3.IntegrityError as exc:
        if is_unique_violation(exc):
            raise ConflictError("round number already taken, retry") from exc
        raise ValidationError("referenced entity does not exist") from exc

    logger.info(
        "rounds.created",
        round_id=round_.id,
        session_id=session_id,
        dog_id=dog_id,
        round_number=round_.round_number,
        outcome=round_.outcome,
    )

    try:
        proficiency.apply_round(round_)
    except Exception as exc:
        logger.warning(
            "proficiency.update_failed",
            round_id=round_.id,
            dog_id=dog_id,
            behavior_id=planned_behavior_id,
            error=str(exc),
            exc_info=True,
        )

    return round_
