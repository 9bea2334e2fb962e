"""Behavior endpoints."""

from fastapi import APIRouter, Response, status

from sartrack.core import catalog
from sartrack.web.schemas import BehaviorCreate, BehaviorResponse, BehaviorUpdate

router = APIRouter(prefix="/behaviors", tags=["behaviors"])


@router.get("", response_model=list[BehaviorResponse])
def list_behaviors(skill_id: int | None = None) -> list[BehaviorResponse]:
    """List behaviors, optionally for one skill."""
    return [BehaviorResponse.model_validate(b) for b in catalog.list_behaviors(skill_id)]


@router.post("", response_model=BehaviorResponse, status_code=status.HTTP_201_CREATED)
def create_behavior(body: BehaviorCreate) -> BehaviorResponse:
    """Create a behavior under an existing skill."""
    behavior = catalog.create_behavior(body.skill_id, body.name, body.description)
    return BehaviorResponse.model_validate(behavior)


@router.get("/{behavior_id}", response_model=BehaviorResponse)
def get_behavior(behavior_id: int) -> BehaviorResponse:
    return BehaviorResponse.model_validate(catalog.get_behavior(behavior_id))


@router.put("/{behavior_id}", response_model=BehaviorResponse)
def update_behavior(behavior_id: int, body: BehaviorUpdate) -> BehaviorResponse:
    behavior = catalog.update_behavior(
        behavior_id,
        name=body.name,
        description=body.description,
        skill_id=body.skill_id,
    )
    return BehaviorResponse.model_validate(behavior)


@router.delete("/{behavior_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_behavior(behavior_id: int) -> Response:
    """Delete a behavior no round refers to."""
    catalog.delete_behavior(behavior_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
