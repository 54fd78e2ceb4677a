"""Pytest configuration and shared fixtures for the customers service tests."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from petclinic_customers.app.core.cache import owner_cache
from petclinic_customers.app.core.config import settings
from petclinic_customers.app.core.db import init_db, transaction
from petclinic_customers.app.repositories.pet_type_repository import PetTypeRepository
from petclinic_customers.app.schemas.owner import OwnerCreate
from petclinic_customers.app.services.owner_service import OwnerService


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    """Point every test at its own empty SQLite file."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "petclinic.db"))
    monkeypatch.setattr(settings, "seed_sample_data", False)
    monkeypatch.setattr(settings, "owner_cache_enabled", True)
    init_db()
    owner_cache.clear()
    yield
    owner_cache.clear()


@pytest.fixture
def client():
    """Test client for the application; startup runs on enter."""
    from petclinic_customers.app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def pet_types():
    """Store a few pet types and return them keyed by name."""
    with transaction() as conn:
        types = PetTypeRepository(conn)
        return {name: types.insert(name) for name in ("cat", "dog", "lizard")}


@pytest.fixture
def make_owner():
    """Factory creating an owner through the service."""

    def _make_owner(first_name="George", last_name="Franklin", telephone=None, **fields):
        data = OwnerCreate(first_name=first_name, last_name=last_name, telephone=telephone, **fields)
        return asyncio.run(OwnerService.create_owner(data))

    return _make_owner
