"""
Owner endpoints for API v1.

CRUD operations for owners plus attaching pets to an owner.  Handlers
only delegate to ``OwnerService``; the service raises ``NotFoundError``,
``BusinessRuleError`` or ``DuplicateError`` and the exception handlers
registered in ``app.main`` turn them into 404, 400 and 409 responses.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from petclinic_customers.app.schemas.error import ErrorResponse
from petclinic_customers.app.schemas.owner import OwnerCreate, OwnerPage, OwnerRead, OwnerUpdate
from petclinic_customers.app.schemas.pet import PetCreate, PetRead
from petclinic_customers.app.services.owner_service import OwnerService


router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Owner not found"}}
BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Validation failed or business rule violated"}}
CONFLICT = {409: {"model": ErrorResponse, "description": "Telephone already registered"}}


@router.get("/", response_model=List[OwnerRead])
async def list_owners(
    last_name: Optional[str] = Query(None, description="Case sensitive last name prefix"),
) -> List[OwnerRead]:
    """List all owners, or only those whose last name starts with ``last_name``."""
    return await OwnerService.list_owners(last_name)


@router.get("/page", response_model=OwnerPage)
async def list_owners_paged(
    page: int = Query(0, ge=0),
    size: int = Query(20, ge=1, le=1000),
    sort: Optional[List[str]] = Query(None, description="e.g. last_name,desc (repeatable)"),
) -> OwnerPage:
    """Return owners one page at a time.

    - **page**: zero based page index.
    - **size**: page size.
    - **sort**: `id`, `first_name`, `last_name`, `address`, `city` or
      `telephone`, optionally followed by `,asc` or `,desc`.
    """
    return await OwnerService.list_owners_paged(page=page, size=size, sort=sort)


@router.get("/{owner_id}", response_model=OwnerRead, responses=NOT_FOUND)
async def get_owner(owner_id: int) -> OwnerRead:
    """Retrieve a single owner with its pets."""
    return await OwnerService.find_owner(owner_id)


@router.post(
    "/",
    response_model=OwnerRead,
    status_code=status.HTTP_201_CREATED,
    responses={**BAD_REQUEST, **CONFLICT},
)
async def create_owner(owner: OwnerCreate) -> OwnerRead:
    """Create a new owner.

    The telephone must not belong to another owner.  Pets sent with the
    owner are stored with it and must have distinct names.
    """
    return await OwnerService.create_owner(owner)


@router.put(
    "/{owner_id}",
    response_model=OwnerRead,
    responses={**BAD_REQUEST, **NOT_FOUND, **CONFLICT},
)
async def update_owner(owner_id: int, owner: OwnerUpdate) -> OwnerRead:
    """Update an existing owner.

    Names, address and city are replaced; the telephone is only changed
    when one is given.  Pets in the body are ignored; use the pets
    endpoint to add pets.
    """
    return await OwnerService.update_owner(owner_id, owner)


@router.delete("/{owner_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
async def delete_owner(owner_id: int) -> None:
    """Delete an owner together with all of its pets."""
    await OwnerService.delete_owner(owner_id)
    return None


@router.get("/{owner_id}/pets", response_model=List[PetRead], responses=NOT_FOUND)
async def list_pets(owner_id: int) -> List[PetRead]:
    """List the pets of an owner."""
    return await OwnerService.list_pets(owner_id)


@router.post(
    "/{owner_id}/pets",
    response_model=PetRead,
    status_code=status.HTTP_201_CREATED,
    responses={**BAD_REQUEST, **NOT_FOUND},
)
async def add_pet(owner_id: int, pet: PetCreate) -> PetRead:
    """Add a pet to an owner.

    Rejected when the birth date is in the future, when the owner
    already has 10 pets, or when the owner already has a pet with the
    same name.
    """
    return await OwnerService.add_pet(owner_id, pet)
