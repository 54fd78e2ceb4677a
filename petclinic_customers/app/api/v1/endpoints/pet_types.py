"""Pet type endpoints for API v1 (read only)."""

from typing import List

from fastapi import APIRouter

from petclinic_customers.app.schemas.error import ErrorResponse
from petclinic_customers.app.schemas.pet import PetTypeRead
from petclinic_customers.app.services.pet_type_service import PetTypeService


router = APIRouter()


@router.get("/", response_model=List[PetTypeRead])
async def list_pet_types() -> List[PetTypeRead]:
    """Return all pet types ordered by name."""
    return await PetTypeService.list_pet_types()


@router.get("/{type_id}", response_model=PetTypeRead, responses={404: {"model": ErrorResponse}})
async def get_pet_type(type_id: int) -> PetTypeRead:
    return await PetTypeService.get_pet_type(type_id)
