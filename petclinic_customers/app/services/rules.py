"""
Business rules checked before every owner save and every pet addition.

Each operation has an ordered tuple of ``Rule`` entries.  A rule pairs
a predicate that answers "is this rule violated?" with a factory for
the error to raise.  ``enforce`` walks the tuple in order and raises
the error of the first violated rule; predicates after it are never
called.  The order is part of the contract:

* add pet: owner exists, birth date not in the future, owner below the
  pet limit, pet name not already used by that owner;
* save owner: telephone not held by another owner, then (create only)
  the initial pet collection has no repeated names, stays within the
  pet limit and has no future birth dates.

The functions here are pure.  Storage lookups are passed in as
callables and "today" as a value, so every rule can be exercised
without a database.
"""

import datetime
from dataclasses import dataclass, field
from typing import Callable, Iterable, NamedTuple, Optional, Sequence

from petclinic_customers.app.core.exceptions import (
    BusinessRuleError,
    DuplicateError,
    NotFoundError,
    PetClinicError,
)
from petclinic_customers.app.schemas.owner import OwnerRead
from petclinic_customers.app.schemas.pet import PetBase


MAX_PETS_PER_OWNER = 10

OWNER_NOT_FOUND = "owner not found"
DUPLICATE_TELEPHONE = "this telephone is already registered"
FUTURE_BIRTH_DATE = "birth date cannot be in the future"
TOO_MANY_PETS = f"an owner may register at most {MAX_PETS_PER_OWNER} pets"
DUPLICATE_PET_NAME = "pet names must not repeat"


class Rule(NamedTuple):
    name: str
    violated: Callable[..., bool]
    error: Callable[[], PetClinicError]


def first_violation(rules: Iterable[Rule], check) -> Optional[Rule]:
    """Return the first rule ``check`` violates, or ``None``."""
    for rule in rules:
        if rule.violated(check):
            return rule
    return None


def enforce(rules: Iterable[Rule], check) -> None:
    """Raise the error of the first violated rule."""
    rule = first_violation(rules, check)
    if rule is not None:
        raise rule.error()


def _is_future(birth_date: Optional[datetime.date], today: datetime.date) -> bool:
    return birth_date is not None and birth_date > today


# ---------------------------------------------------------------------------
# Add pet
# ---------------------------------------------------------------------------

@dataclass
class AddPetCheck:
    """State the add-pet rules look at.

    ``owner`` is the target owner loaded with its pets, or ``None`` when
    no owner has the requested id.
    """

    owner: Optional[OwnerRead]
    pet: PetBase
    today: datetime.date


def _owner_missing(check: AddPetCheck) -> bool:
    return check.owner is None


def _pet_born_in_future(check: AddPetCheck) -> bool:
    return _is_future(check.pet.birth_date, check.today)


def _owner_at_capacity(check: AddPetCheck) -> bool:
    return len(check.owner.pets) >= MAX_PETS_PER_OWNER


def _pet_name_taken(check: AddPetCheck) -> bool:
    return any(existing.name == check.pet.name for existing in check.owner.pets)


ADD_PET_RULES: Sequence[Rule] = (
    Rule("owner-exists", _owner_missing, lambda: NotFoundError(OWNER_NOT_FOUND)),
    Rule("birth-date-not-in-future", _pet_born_in_future, lambda: BusinessRuleError(FUTURE_BIRTH_DATE)),
    Rule("pet-limit", _owner_at_capacity, lambda: BusinessRuleError(TOO_MANY_PETS)),
    Rule("unique-pet-name", _pet_name_taken, lambda: BusinessRuleError(DUPLICATE_PET_NAME)),
)


def check_add_pet(
    owner: Optional[OwnerRead],
    pet: PetBase,
    today: Optional[datetime.date] = None,
) -> None:
    """Validate attaching ``pet`` to ``owner``.

    ``today`` defaults to the server's current date; it is a parameter so
    tests can pin it.
    """
    enforce(ADD_PET_RULES, AddPetCheck(owner=owner, pet=pet, today=today or datetime.date.today()))


# ---------------------------------------------------------------------------
# Save owner
# ---------------------------------------------------------------------------

@dataclass
class OwnerSaveCheck:
    """State the owner save rules look at.

    ``telephone_in_use`` answers whether any owner currently holds a
    telephone number.  On update ``current_telephone`` is the number
    stored for the owner being changed; an unchanged number is not
    looked up.  ``pets`` is the initial pet collection of a new owner
    and is never inspected on update.
    """

    telephone: Optional[str]
    telephone_in_use: Callable[[str], bool]
    is_update: bool = False
    current_telephone: Optional[str] = None
    pets: Sequence[PetBase] = field(default_factory=tuple)
    today: datetime.date = field(default_factory=datetime.date.today)


def _telephone_taken(check: OwnerSaveCheck) -> bool:
    if not check.telephone:
        return False
    if check.is_update and check.telephone == check.current_telephone:
        return False
    return check.telephone_in_use(check.telephone)


def _pet_names_repeat(check: OwnerSaveCheck) -> bool:
    if check.is_update or not check.pets:
        return False
    return len({pet.name for pet in check.pets}) < len(check.pets)


def _too_many_initial_pets(check: OwnerSaveCheck) -> bool:
    return not check.is_update and len(check.pets) > MAX_PETS_PER_OWNER


def _initial_pet_born_in_future(check: OwnerSaveCheck) -> bool:
    if check.is_update:
        return False
    return any(_is_future(pet.birth_date, check.today) for pet in check.pets)


OWNER_SAVE_RULES: Sequence[Rule] = (
    Rule("unique-telephone", _telephone_taken, lambda: DuplicateError(DUPLICATE_TELEPHONE)),
    Rule("unique-pet-names", _pet_names_repeat, lambda: BusinessRuleError(DUPLICATE_PET_NAME)),
    Rule("pet-limit", _too_many_initial_pets, lambda: BusinessRuleError(TOO_MANY_PETS)),
    Rule("birth-date-not-in-future", _initial_pet_born_in_future, lambda: BusinessRuleError(FUTURE_BIRTH_DATE)),
)


def check_owner_save(
    telephone: Optional[str],
    telephone_in_use: Callable[[str], bool],
    is_update: bool = False,
    current_telephone: Optional[str] = None,
    pets: Sequence[PetBase] = (),
    today: Optional[datetime.date] = None,
) -> None:
    """Validate an owner before it is inserted or updated."""
    enforce(
        OWNER_SAVE_RULES,
        OwnerSaveCheck(
            telephone=telephone,
            telephone_in_use=telephone_in_use,
            is_update=is_update,
            current_telephone=current_telephone,
            pets=tuple(pets),
            today=today or datetime.date.today(),
        ),
    )
