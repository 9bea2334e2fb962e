"""Pydantic schemas for the Web API.

Request bodies and response models for the catalog, dogs, sessions, rounds,
proficiency and auth endpoints. Responses are built from repository records
with model_validate(record).
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class RecordModel(BaseModel):
    """Response model readable from repository dataclasses."""

    model_config = ConfigDict(from_attributes=True)


# =============================================================================
# CATALOG SCHEMAS
# =============================================================================


class SkillCreate(BaseModel):
    """Request body for creating or updating a skill."""

    name: str = Field(..., max_length=200)
    description: str | None = None


class SkillResponse(RecordModel):
    id: int
    name: str
    description: str | None = None
    created_at: str
    updated_at: str


class BehaviorCreate(BaseModel):
    """Request body for creating a behavior."""

    skill_id: int
    name: str = Field(..., max_length=200)
    description: str | None = None


class BehaviorUpdate(BaseModel):
    """Request body for updating a behavior. skill_id is optional."""

    skill_id: int | None = None
    name: str = Field(..., max_length=200)
    description: str | None = None


class BehaviorResponse(RecordModel):
    id: int
    skill_id: int
    name: str
    description: str | None = None
    created_at: str
    updated_at: str


class ExerciseCreate(BaseModel):
    """Request body for creating or updating an exercise."""

    name: str = Field(..., max_length=200)
    description: str | None = None


class ExerciseResponse(RecordModel):
    id: int
    name: str
    description: str | None = None
    created_at: str
    updated_at: str


class LinkCreate(BaseModel):
    """Request body for linking a behavior to an exercise."""

    behavior_id: int
    exercise_id: int
    strength: int


class LinkResponse(RecordModel):
    behavior_id: int
    exercise_id: int
    strength: int


# =============================================================================
# DOG SCHEMAS
# =============================================================================


class DogCreate(BaseModel):
    """Request body for creating or updating a dog."""

    name: str = Field(..., max_length=200)
    callname: str | None = None
    birthdate: date | datetime | None = None
    notes: str | None = None


class DogResponse(RecordModel):
    id: int
    name: str
    callname: str | None = None
    birthdate: str | None = None
    notes: str | None = None


class ProficiencyResponse(RecordModel):
    dog_id: int
    behavior_id: int
    level: int
    last_round_id: int | None = None
    updated_at: str


# =============================================================================
# SESSION SCHEMAS
# =============================================================================


class SessionCreate(BaseModel):
    """Request body for creating or updating a session."""

    started_at: datetime | None = None
    location: str | None = None
    notes: str | None = None


class SessionClose(BaseModel):
    """Request body for closing a session."""

    ended_at: datetime | None = None


class SessionResponse(RecordModel):
    id: int
    started_at: str
    ended_at: str | None = None
    location: str | None = None
    notes: str | None = None


class SessionDogAdd(BaseModel):
    """Request body for attaching a dog to a session."""

    dog_id: int


class SessionDogAdded(BaseModel):
    session_id: int
    dog_id: int
    added: bool


# =============================================================================
# ROUND SCHEMAS
# =============================================================================


class RoundCreate(BaseModel):
    """Request body for recording a round.

    outcome is validated by the recorder (case-insensitive).
    """

    dog_id: int
    exercise_id: int
    planned_behavior_id: int
    outcome: str
    exhibited_behavior_id: int | None = None
    exhibited_free_text: str | None = None
    score: StrictInt | None = None
    notes: str | None = None
    started_at: datetime | None = None
    ended_at: datetime | None = None


class RoundResponse(RecordModel):
    id: int
    session_id: int
    round_number: int
    dog_id: int
    exercise_id: int
    planned_behavior_id: int
    exhibited_behavior_id: int | None = None
    exhibited_free_text: str | None = None
    outcome: str
    score: int | None = None
    notes: str | None = None
    started_at: str | None = None
    ended_at: str | None = None


# =============================================================================
# AUTH SCHEMAS
# =============================================================================


class Credentials(BaseModel):
    """Request body for register and login."""

    email: str = Field(..., max_length=320)
    password: str = Field(..., max_length=200)


class UserResponse(RecordModel):
    id: int
    email: str
    is_admin: bool
    created_at: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse


# =============================================================================
# HEALTH SCHEMAS
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    ok: bool = True
    version: str
    timestamp: str
