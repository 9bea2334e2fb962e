"""Exercise and behavior-exercise link endpoints."""

from fastapi import APIRouter, Response, status

from sartrack.core import catalog
from sartrack.web.schemas import ExerciseCreate, ExerciseResponse, LinkCreate, LinkResponse

router = APIRouter(prefix="/exercises", tags=["exercises"])
links_router = APIRouter(prefix="/behavior-exercises", tags=["exercises"])


@router.get("", response_model=list[ExerciseResponse])
def list_exercises(behavior_id: int | None = None) -> list[ExerciseResponse]:
    """List exercises, optionally only those linked to a behavior."""
    return [ExerciseResponse.model_validate(e) for e in catalog.list_exercises(behavior_id)]


@router.post("", response_model=ExerciseResponse, status_code=status.HTTP_201_CREATED)
def create_exercise(body: ExerciseCreate) -> ExerciseResponse:
    """Create a new exercise."""
    exercise = catalog.create_exercise(body.name, body.description)
    return ExerciseResponse.model_validate(exercise)


@router.get("/{exercise_id}", response_model=ExerciseResponse)
def get_exercise(exercise_id: int) -> ExerciseResponse:
    return ExerciseResponse.model_validate(catalog.get_exercise(exercise_id))


@router.put("/{exercise_id}", response_model=ExerciseResponse)
def update_exercise(exercise_id: int, body: ExerciseCreate) -> ExerciseResponse:
    exercise = catalog.update_exercise(exercise_id, body.name, body.description)
    return ExerciseResponse.model_validate(exercise)


@router.delete("/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_exercise(exercise_id: int) -> Response:
    catalog.delete_exercise(exercise_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@links_router.post("", response_model=LinkResponse)
def link_behavior_exercise(body: LinkCreate) -> LinkResponse:
    """Create or update a behavior-exercise link."""
    link = catalog.link_behavior_exercise(body.behavior_id, body.exercise_id, body.strength)
    return LinkResponse.model_validate(link)


@links_router.get("", response_model=list[LinkResponse])
def list_links(
    behavior_id: int | None = None,
    exercise_id: int | None = None,
) -> list[LinkResponse]:
    links = catalog.list_links(behavior_id=behavior_id, exercise_id=exercise_id)
    return [LinkResponse.model_validate(link) for link in links]
