"""Training session endpoints: lifecycle, dogs and rounds."""

from fastapi import APIRouter, status

from sartrack.core import round_recorder, session_manager
from sartrack.web.schemas import (
    DogResponse,
    RoundCreate,
    RoundResponse,
    SessionClose,
    SessionCreate,
    SessionDogAdd,
    SessionDogAdded,
    SessionResponse,
)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("", response_model=list[SessionResponse])
def list_sessions() -> list[SessionResponse]:
    """List sessions, newest first."""
    return [SessionResponse.model_validate(s) for s in session_manager.list_sessions()]


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def create_session(body: SessionCreate | None = None) -> SessionResponse:
    """Open a new training session."""
    body = body or SessionCreate()
    session = session_manager.create_session(
        started_at=body.started_at,
        location=body.location,
        notes=body.notes,
    )
    return SessionResponse.model_validate(session)


@router.get("/{session_id}", response_model=SessionResponse)
def get_session(session_id: int) -> SessionResponse:
    return SessionResponse.model_validate(session_manager.get_session(session_id))


@router.put("/{session_id}", response_model=SessionResponse)
def update_session(session_id: int, body: SessionCreate) -> SessionResponse:
    """Update started_at, location and notes."""
    session = session_manager.update_session(
        session_id,
        started_at=body.started_at,
        location=body.location,
        notes=body.notes,
    )
    return SessionResponse.model_validate(session)


@router.patch("/{session_id}", response_model=SessionResponse)
def close_session(session_id: int, body: SessionClose | None = None) -> SessionResponse:
    """Close a session. Closing again overwrites ended_at."""
    body = body or SessionClose()
    session = session_manager.close_session(session_id, ended_at=body.ended_at)
    return SessionResponse.model_validate(session)


@router.post("/{session_id}/dogs", response_model=SessionDogAdded)
def add_dog(session_id: int, body: SessionDogAdd) -> SessionDogAdded:
    """Attach a dog to a session (idempotent)."""
    added = session_manager.add_dog_to_session(session_id, body.dog_id)
    return SessionDogAdded(session_id=session_id, dog_id=body.dog_id, added=added)


@router.get("/{session_id}/dogs", response_model=list[DogResponse])
def list_session_dogs(session_id: int) -> list[DogResponse]:
    return [DogResponse.model_validate(d) for d in session_manager.list_session_dogs(session_id)]


@router.post(
    "/{session_id}/rounds",
    response_model=RoundResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_round(session_id: int, body: RoundCreate) -> RoundResponse:
    """Record a round; the round number is assigned per (session, dog)."""
    round_ = round_recorder.record_round(
        session_id=session_id,
        dog_id=body.dog_id,
        exercise_id=body.exercise_id,
        planned_behavior_id=body.planned_behavior_id,
        outcome=body.outcome,
        exhibited_behavior_id=body.exhibited_behavior_id,
        exhibited_free_text=body.exhibited_free_text,
        score=body.score,
        notes=body.notes,
        started_at=body.started_at,
        ended_at=body.ended_at,
    )
    return RoundResponse.model_validate(round_)


@router.get("/{session_id}/rounds", response_model=list[RoundResponse])
def list_session_rounds(session_id: int) -> list[RoundResponse]:
    """Rounds of a session ordered by round number."""
    return [RoundResponse.model_validate(r) for r in session_manager.list_session_rounds(session_id)]
