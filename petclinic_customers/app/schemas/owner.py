"""
Pydantic models for owner data.

These schemas define the structure of owner data exchanged via the
API.  ``OwnerBase`` holds the shared fields and their field-level
validation (non-blank names, ten-digit telephone).  ``OwnerCreate`` may
carry an initial pet collection for bulk creation; ``OwnerUpdate``
accepts the same shape but nested pets are ignored by the service.
"""

import re
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .pet import PetCreate, PetRead


# ASCII digits only; used with fullmatch so a trailing newline is rejected.
TELEPHONE_PATTERN = re.compile(r"[0-9]{10}")


class OwnerBase(BaseModel):
    first_name: str = Field(..., examples=["George"])
    last_name: str = Field(..., examples=["Franklin"])
    address: Optional[str] = Field(None, examples=["110 W. Liberty St."])
    city: Optional[str] = Field(None, examples=["Madison"])
    telephone: Optional[str] = Field(None, examples=["6085551023"])

    @field_validator("first_name")
    @classmethod
    def first_name_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("first name must not be blank")
        return v

    @field_validator("last_name")
    @classmethod
    def last_name_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("last name must not be blank")
        return v

    @field_validator("telephone")
    @classmethod
    def telephone_ten_digits(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not TELEPHONE_PATTERN.fullmatch(v):
            raise ValueError("telephone must be exactly 10 digits")
        return v


class OwnerCreate(OwnerBase):
    """Schema for creating an owner, optionally with pets."""

    pets: List[PetCreate] = Field(default_factory=list)


class OwnerUpdate(OwnerBase):
    """Schema for updating an owner.

    Name, address and city are always overwritten.  The telephone is
    only changed when a value is given.  ``pets`` is accepted so that a
    previously read owner can be sent back unchanged, but it is not
    applied.
    """

    pets: List[PetCreate] = Field(default_factory=list)


class OwnerRead(OwnerBase):
    """Schema for reading an owner together with its pets."""

    id: int
    pets: List[PetRead] = Field(default_factory=list)

    model_config = {
        "from_attributes": True,
    }


class OwnerPage(BaseModel):
    """One page of owners plus the paging metadata."""

    content: List[OwnerRead]
    total_elements: int
    total_pages: int
    number: int
    size: int
