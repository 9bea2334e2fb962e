"""Dog endpoints, including per-dog rounds and proficiency."""

from fastapi import APIRouter, Response, status

from sartrack.core import dogs, proficiency, session_manager
from sartrack.web.schemas import DogCreate, DogResponse, ProficiencyResponse, RoundResponse

router = APIRouter(prefix="/dogs", tags=["dogs"])


@router.get("", response_model=list[DogResponse])
def list_dogs() -> list[DogResponse]:
    """List all dogs by name."""
    return [DogResponse.model_validate(d) for d in dogs.list_dogs()]


@router.post("", response_model=DogResponse, status_code=status.HTTP_201_CREATED)
def create_dog(body: DogCreate) -> DogResponse:
    """Register a dog."""
    dog = dogs.create_dog(
        name=body.name,
        callname=body.callname,
        birthdate=body.birthdate,
        notes=body.notes,
    )
    return DogResponse.model_validate(dog)


@router.get("/{dog_id}", response_model=DogResponse)
def get_dog(dog_id: int) -> DogResponse:
    return DogResponse.model_validate(dogs.get_dog(dog_id))


@router.put("/{dog_id}", response_model=DogResponse)
def update_dog(dog_id: int, body: DogCreate) -> DogResponse:
    dog = dogs.update_dog(
        dog_id,
        name=body.name,
        callname=body.callname,
        birthdate=body.birthdate,
        notes=body.notes,
    )
    return DogResponse.model_validate(dog)


@router.delete("/{dog_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_dog(dog_id: int) -> Response:
    """Delete a dog with no recorded rounds."""
    dogs.delete_dog(dog_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{dog_id}/rounds", response_model=list[RoundResponse])
def list_dog_rounds(dog_id: int) -> list[RoundResponse]:
    """All rounds of a dog, by session then round number."""
    return [RoundResponse.model_validate(r) for r in session_manager.list_dog_rounds(dog_id)]


@router.get("/{dog_id}/proficiency", response_model=list[ProficiencyResponse])
def list_dog_proficiency(dog_id: int) -> list[ProficiencyResponse]:
    rows = proficiency.list_dog_proficiency(dog_id)
    return [ProficiencyResponse.model_validate(p) for p in rows]
