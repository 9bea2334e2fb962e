"""Skill endpoints."""

from fastapi import APIRouter, Response, status

from sartrack.core import catalog
from sartrack.web.schemas import SkillCreate, SkillResponse

router = APIRouter(prefix="/skills", tags=["skills"])


@router.get("", response_model=list[SkillResponse])
def list_skills() -> list[SkillResponse]:
    """List all skills by name."""
    return [SkillResponse.model_validate(s) for s in catalog.list_skills()]


@router.post("", response_model=SkillResponse, status_code=status.HTTP_201_CREATED)
def create_skill(body: SkillCreate) -> SkillResponse:
    """Create a new skill."""
    skill = catalog.create_skill(body.name, body.description)
    return SkillResponse.model_validate(skill)


@router.get("/{skill_id}", response_model=SkillResponse)
def get_skill(skill_id: int) -> SkillResponse:
    return SkillResponse.model_validate(catalog.get_skill(skill_id))


@router.put("/{skill_id}", response_model=SkillResponse)
def update_skill(skill_id: int, body: SkillCreate) -> SkillResponse:
    """Rename or re-describe a skill."""
    skill = catalog.update_skill(skill_id, body.name, body.description)
    return SkillResponse.model_validate(skill)


@router.delete("/{skill_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_skill(skill_id: int) -> Response:
    """Delete a skill with no behaviors."""
    catalog.delete_skill(skill_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
