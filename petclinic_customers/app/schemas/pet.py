"""
Pydantic models for pet and pet type data.

``PetCreate`` is the body of the add-pet request; the pet type may be
referenced either by id or by name.  ``PetRead`` is returned for stored
pets and carries the owner id back-reference plus the resolved type.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class PetTypeRead(BaseModel):
    """Schema for reading a pet type (species)."""

    id: int
    name: str = Field(..., examples=["dog"])

    model_config = {
        "from_attributes": True,
    }


class PetBase(BaseModel):
    name: str = Field(..., examples=["Leo"])
    birth_date: Optional[date] = Field(None, examples=["2020-05-10"])

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("pet name must not be blank")
        return v


class PetCreate(PetBase):
    """Schema for adding a pet to an owner.

    ``type_id`` takes precedence over ``type_name`` when both are given.
    """

    type_id: Optional[int] = Field(None, examples=[2])
    type_name: Optional[str] = Field(None, examples=["dog"])


class PetRead(PetBase):
    """Schema for reading a pet from the API."""

    id: int
    owner_id: Optional[int] = None
    type_id: Optional[int] = None
    type_name: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }
