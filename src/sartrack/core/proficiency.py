"""Proficiency estimator.

A single rule, applied after each round is stored:

    outcome == success and score >= 8  ->  level = max(level, 4)

for the (dog, planned behavior) pair. Levels never decrease; partial and
failed rounds leave them untouched. The table is derived from rounds and can
be rebuilt at any time with rebuild_proficiency().
"""

from __future__ import annotations

import structlog

from sartrack.db import proficiency_repository
from sartrack.db.dogs_repository import get_dog_by_id
from sartrack.db.proficiency_repository import ProficiencyRecord
from sartrack.db.rounds_repository import RoundRecord
from sartrack.errors import NotFoundError
from sartrack.utils.validators import require_positive_id

logger = structlog.get_logger(__name__)

PROFICIENCY_MIN_SCORE = 8
PROFICIENCY_LEVEL = 4


def qualifies(round_: RoundRecord) -> bool:
    """True if the round is a high-scoring success."""
    return (
        round_.outcome == "success"
        and round_.score is not None
        and round_.score >= PROFICIENCY_MIN_SCORE
    )


def apply_round(round_: RoundRecord) -> bool:
    """Apply the proficiency rule to a stored round.

    Returns:
        True if a proficiency row was written
    """
    if not qualifies(round_):
        return False

    record = proficiency_repository.raise_level(
        dog_id=round_.dog_id,
        behavior_id=round_.planned_behavior_id,
        level=PROFICIENCY_LEVEL,
        round_id=round_.id,
    )
    logger.info(
        "proficiency.updated",
        dog_id=record.dog_id,
        behavior_id=record.behavior_id,
        level=record.level,
        round_id=round_.id,
    )
    return True


def list_dog_proficiency(dog_id: int) -> list[ProficiencyRecord]:
    """Proficiency rows of a dog.

    Raises:
        NotFoundError: Unknown dog
    """
    dog_id = require_positive_id(dog_id, "dog_id")
    if get_dog_by_id(dog_id) is None:
        raise NotFoundError(f"dog {dog_id} not found")
    return proficiency_repository.get_dog_proficiency(dog_id)


def rebuild_proficiency() -> int:
    """Recompute the proficiency table from round history.

    Applies the rule to every stored round in one transaction, replacing
    the previous rows.

    Returns:
        Number of (dog, behavior) rows written
    """
    removed, written = proficiency_repository.rebuild_from_rounds(
        min_score=PROFICIENCY_MIN_SCORE, level=PROFICIENCY_LEVEL
    )
    logger.info("proficiency.rebuilt", removed=removed, written=written)
    return written
