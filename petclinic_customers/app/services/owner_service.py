"""
Business logic for owners and their pets.

Every public method of ``OwnerService`` is one unit of work: it opens a
connection through ``db.transaction``, runs the business rules from
``services.rules`` against the current stored state and writes the
changes.  A rule violation or a storage failure rolls the whole
operation back, so an owner is never left half updated and a rejected
pet is never stored.  Rejections are logged as warnings here; any other
error is re-raised untouched and logged once by the application's
error handler.

Owner lookups by id go through ``owner_cache``; every method that
changes an owner evicts it once its transaction has committed.  The
rule checks themselves always read the owner from the database.
"""

import logging
import math
from typing import List, Optional, Sequence, Tuple

from petclinic_customers.app.core.cache import owner_cache
from petclinic_customers.app.core.db import transaction
from petclinic_customers.app.core.exceptions import NotFoundError, PetClinicError
from petclinic_customers.app.repositories.owner_repository import OwnerRepository
from petclinic_customers.app.repositories.pet_type_repository import PetTypeRepository
from petclinic_customers.app.schemas.owner import OwnerCreate, OwnerPage, OwnerRead, OwnerUpdate
from petclinic_customers.app.schemas.pet import PetCreate, PetRead
from petclinic_customers.app.services.rules import OWNER_NOT_FOUND, check_add_pet, check_owner_save


logger = logging.getLogger(__name__)

PET_TYPE_NOT_FOUND = "pet type not found"


class OwnerService:
    """Service for managing owners and attaching pets to them."""

    @classmethod
    async def create_owner(cls, data: OwnerCreate) -> OwnerRead:
        """Create an owner, together with its initial pets if any are given.

        Raises ``DuplicateError`` when the telephone is already
        registered and ``BusinessRuleError`` when the initial pets break
        a pet rule.
        """
        logger.info("Saving owner %s %s", data.first_name, data.last_name)
        try:
            with transaction() as conn:
                owners = OwnerRepository(conn)
                check_owner_save(data.telephone, owners.exists_by_telephone, pets=data.pets)
                owner_id = owners.insert(data)
                for pet in data.pets:
                    owners.insert_pet(owner_id, pet, cls._resolve_type_id(conn, pet))
                saved = owners.find_by_id_with_pets(owner_id)
        except PetClinicError as e:
            logger.warning("Owner %s %s rejected: %s", data.first_name, data.last_name, e.message)
            raise
        logger.info("Owner saved with id %s", saved.id)
        return saved

    @classmethod
    async def update_owner(cls, owner_id: int, data: OwnerUpdate) -> OwnerRead:
        """Overwrite an owner's details.

        First name, last name, address and city are always replaced.  The
        telephone is replaced only when the payload carries one; changing
        it to a number another owner holds raises ``DuplicateError``,
        while resending the owner's own number is accepted.  Pets in the
        payload are ignored.
        """
        try:
            with transaction() as conn:
                owners = OwnerRepository(conn)
                current = owners.find_by_id(owner_id)
                if current is None:
                    raise NotFoundError(OWNER_NOT_FOUND)
                check_owner_save(
                    data.telephone,
                    owners.exists_by_telephone,
                    is_update=True,
                    current_telephone=current.telephone,
                )
                telephone = data.telephone if data.telephone is not None else current.telephone
                owners.update(owner_id, data.first_name, data.last_name, data.address, data.city, telephone)
                updated = owners.find_by_id_with_pets(owner_id)
        except PetClinicError as e:
            logger.warning("Update of owner %s rejected: %s", owner_id, e.message)
            raise
        owner_cache.invalidate(owner_id)
        logger.info("Owner %s updated", owner_id)
        return updated

    @classmethod
    async def delete_owner(cls, owner_id: int) -> None:
        """Delete an owner and, through the cascade, all of its pets."""
        with transaction() as conn:
            if not OwnerRepository(conn).delete_by_id(owner_id):
                raise NotFoundError(OWNER_NOT_FOUND)
        owner_cache.invalidate(owner_id)
        logger.info("Owner %s deleted", owner_id)

    @classmethod
    async def add_pet(cls, owner_id: int, data: PetCreate) -> PetRead:
        """Attach a new pet to an existing owner.

        The owner is loaded with its pets and the add-pet rules run in
        their fixed order (owner exists, birth date, pet limit, name).
        The pet type, if referenced, is resolved only after the rules
        pass.  Returns the stored pet.
        """
        try:
            with transaction() as conn:
                owners = OwnerRepository(conn)
                owner = owners.find_by_id_with_pets(owner_id)
                check_add_pet(owner, data)
                pet_id = owners.insert_pet(owner_id, data, cls._resolve_type_id(conn, data))
                pet = owners.find_pet(pet_id)
        except PetClinicError as e:
            logger.warning("Pet %r for owner %s rejected: %s", data.name, owner_id, e.message)
            raise
        owner_cache.invalidate(owner_id)
        logger.info("Added pet %s to owner %s", data.name, owner_id)
        return pet

    @classmethod
    async def find_owner(cls, owner_id: int) -> OwnerRead:
        """Return an owner with its pets, served from the cache when possible."""
        owner = owner_cache.get_or_load(owner_id, cls._load_owner)
        if owner is None:
            raise NotFoundError(OWNER_NOT_FOUND)
        return owner

    @classmethod
    async def list_owners(cls, last_name: Optional[str] = None) -> List[OwnerRead]:
        """Return all owners, or those whose last name starts with ``last_name``.

        The prefix match is case sensitive.  No match yields an empty list.
        """
        with transaction() as conn:
            owners = OwnerRepository(conn)
            if last_name is not None:
                return owners.find_by_last_name_prefix(last_name)
            return owners.find_all_with_pets()

    @classmethod
    async def list_owners_paged(
        cls,
        page: int = 0,
        size: int = 20,
        sort: Optional[Sequence[str]] = None,
    ) -> OwnerPage:
        """Return one page of owners.

        ``page`` is zero based.  Each ``sort`` entry is ``field`` or
        ``field,asc``/``field,desc``; unknown fields are skipped and the
        default order is by id.
        """
        order_by = cls._parse_sort(sort or [])
        with transaction() as conn:
            owners = OwnerRepository(conn)
            total = owners.count()
            content = owners.find_page(limit=size, offset=page * size, order_by=order_by)
        return OwnerPage(
            content=content,
            total_elements=total,
            total_pages=math.ceil(total / size) if size else 0,
            number=page,
            size=size,
        )

    @classmethod
    async def list_pets(cls, owner_id: int) -> List[PetRead]:
        """Return the pets of an owner."""
        with transaction() as conn:
            owners = OwnerRepository(conn)
            if owners.find_by_id(owner_id) is None:
                raise NotFoundError(OWNER_NOT_FOUND)
            return owners.find_pets(owner_id)

    # -- helpers --------------------------------------------------------

    @staticmethod
    def _load_owner(owner_id: int) -> Optional[OwnerRead]:
        with transaction() as conn:
            return OwnerRepository(conn).find_by_id_with_pets(owner_id)

    @staticmethod
    def _resolve_type_id(conn, pet: PetCreate) -> Optional[int]:
        """Map the pet's type reference (id or name) to a stored type id."""
        types = PetTypeRepository(conn)
        if pet.type_id is not None:
            pet_type = types.find_by_id(pet.type_id)
        elif pet.type_name:
            pet_type = types.find_by_name(pet.type_name)
        else:
            return None
        if pet_type is None:
            raise NotFoundError(PET_TYPE_NOT_FOUND)
        return pet_type.id

    @staticmethod
    def _parse_sort(sort: Sequence[str]) -> List[Tuple[str, str]]:
        order_by: List[Tuple[str, str]] = []
        for entry in sort:
            parts = [part.strip() for part in entry.split(",") if part.strip()]
            if not parts or parts[0] not in OwnerRepository.SORTABLE_FIELDS:
                continue
            direction = parts[1].upper() if len(parts) > 1 else "ASC"
            if direction not in {"ASC", "DESC"}:
                direction = "ASC"
            if any(column == parts[0] for column, _ in order_by):
                continue
            order_by.append((parts[0], direction))
        return order_by or [("id", "ASC")]
