"""
Top-level router for version 1 of the API.

This router aggregates the domain-specific routers under a unified
prefix.  When new domains are introduced, update this file to include
their routers.
"""

from fastapi import APIRouter

from .endpoints import owners, pet_types

router = APIRouter()

router.include_router(owners.router, prefix="/owners", tags=["owners"])
router.include_router(pet_types.router, prefix="/pettypes", tags=["pet types"])
