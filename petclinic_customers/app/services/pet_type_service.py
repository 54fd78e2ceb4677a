"""Read access to the pet type lookup table."""

from typing import List

from petclinic_customers.app.core.db import transaction
from petclinic_customers.app.core.exceptions import NotFoundError
from petclinic_customers.app.repositories.pet_type_repository import PetTypeRepository
from petclinic_customers.app.schemas.pet import PetTypeRead


class PetTypeService:
    """Service for listing pet types."""

    @classmethod
    async def list_pet_types(cls) -> List[PetTypeRead]:
        with transaction() as conn:
            return PetTypeRepository(conn).find_all()

    @classmethod
    async def get_pet_type(cls, type_id: int) -> PetTypeRead:
        with transaction() as conn:
            pet_type = PetTypeRepository(conn).find_by_id(type_id)
        if pet_type is None:
            raise NotFoundError("pet type not found")
        return pet_type
