"""Tests for the one-time sample data seeding."""

from fastapi.testclient import TestClient

from petclinic_customers.app.core.config import settings
from petclinic_customers.app.core.db import transaction
from petclinic_customers.app.core.sample_data import PET_TYPES, seed_sample_data
from petclinic_customers.app.repositories.owner_repository import OwnerRepository
from petclinic_customers.app.repositories.pet_type_repository import PetTypeRepository


def test_seeds_empty_database():
    assert seed_sample_data() is True
    with transaction() as conn:
        owners = OwnerRepository(conn)
        assert owners.count() == 3
        george = owners.find_by_last_name_prefix("Franklin")[0]
        assert [(pet.name, pet.type_name) for pet in george.pets] == [("Leo", "dog"), ("Basil", "cat")]
        assert len(PetTypeRepository(conn).find_all()) == len(PET_TYPES)


def test_seeding_runs_once():
    assert seed_sample_data() is True
    assert seed_sample_data() is False
    with transaction() as conn:
        assert OwnerRepository(conn).count() == 3


def test_skips_database_with_owners(make_owner):
    make_owner("Betty", "Davis")
    assert seed_sample_data() is False
    with transaction() as conn:
        assert OwnerRepository(conn).count() == 1
        assert PetTypeRepository(conn).find_all() == []


def test_startup_seeds_when_enabled(monkeypatch):
    from petclinic_customers.app.main import app

    monkeypatch.setattr(settings, "seed_sample_data", True)
    with TestClient(app) as client:
        owners = client.get("/api/v1/owners/").json()
    assert [owner["last_name"] for owner in owners] == ["Franklin", "Davis", "Rodriquez"]
