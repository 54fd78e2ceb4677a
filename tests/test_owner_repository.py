"""Tests for the owner entity store."""

from datetime import date

from petclinic_customers.app.core.db import transaction
from petclinic_customers.app.repositories.owner_repository import OwnerRepository
from petclinic_customers.app.repositories.pet_type_repository import PetTypeRepository
from petclinic_customers.app.schemas.owner import OwnerBase
from petclinic_customers.app.schemas.pet import PetBase


def insert_owner(first_name, last_name, telephone=None, city=None, pets=()):
    with transaction() as conn:
        owners = OwnerRepository(conn)
        owner_id = owners.insert(
            OwnerBase(first_name=first_name, last_name=last_name, telephone=telephone, city=city)
        )
        for name in pets:
            owners.insert_pet(owner_id, PetBase(name=name, birth_date=date(2020, 1, 1)))
        return owner_id


class TestOwnerRepository:
    """Tests for OwnerRepository queries."""

    def test_find_by_last_name_prefix(self):
        insert_owner("Ming", "Wang", city="Taipei")
        insert_owner("Hua", "Wangsa", city="New Taipei")
        insert_owner("Wei", "Lee", city="Taoyuan")
        with transaction() as conn:
            result = OwnerRepository(conn).find_by_last_name_prefix("Wang")
        assert sorted(owner.first_name for owner in result) == ["Hua", "Ming"]

    def test_prefix_is_case_sensitive(self):
        insert_owner("George", "Franklin")
        with transaction() as conn:
            owners = OwnerRepository(conn)
            assert len(owners.find_by_last_name_prefix("Fr")) == 1
            assert owners.find_by_last_name_prefix("fr") == []

    def test_unknown_prefix_returns_empty_list(self):
        insert_owner("George", "Franklin")
        with transaction() as conn:
            assert OwnerRepository(conn).find_by_last_name_prefix("Nobody") == []

    def test_prefix_lookup_loads_pets_and_is_repeatable(self):
        insert_owner("George", "Franklin", pets=["Leo", "Basil"])
        with transaction() as conn:
            owners = OwnerRepository(conn)
            first = owners.find_by_last_name_prefix("Frank")
            second = owners.find_by_last_name_prefix("Frank")
        assert [pet.name for pet in first[0].pets] == ["Leo", "Basil"]
        assert first == second

    def test_exists_by_telephone(self):
        insert_owner("George", "Franklin", telephone="0912345678")
        with transaction() as conn:
            owners = OwnerRepository(conn)
            assert owners.exists_by_telephone("0912345678")
            assert not owners.exists_by_telephone("0999999999")

    def test_find_by_id_with_pets(self):
        owner_id = insert_owner("George", "Franklin", telephone="0912345678", pets=["Leo"])
        with transaction() as conn:
            owners = OwnerRepository(conn)
            plain = owners.find_by_id(owner_id)
            loaded = owners.find_by_id_with_pets(owner_id)
            missing = owners.find_by_id_with_pets(owner_id + 100)
        assert plain.first_name == "George"
        assert plain.pets == []
        assert [pet.name for pet in loaded.pets] == ["Leo"]
        assert loaded.pets[0].owner_id == owner_id
        assert loaded.pets[0].birth_date == date(2020, 1, 1)
        assert missing is None

    def test_delete_cascades_to_pets(self):
        owner_id = insert_owner("George", "Franklin", pets=["Leo", "Basil"])
        with transaction() as conn:
            assert OwnerRepository(conn).delete_by_id(owner_id)
        with transaction() as conn:
            owners = OwnerRepository(conn)
            assert owners.find_by_id(owner_id) is None
            assert owners.find_pets(owner_id) == []
            remaining = conn.execute("SELECT COUNT(*) AS count FROM pets").fetchone()["count"]
        assert remaining == 0

    def test_delete_missing_owner(self):
        with transaction() as conn:
            assert not OwnerRepository(conn).delete_by_id(42)

    def test_find_page_orders_and_limits(self):
        for last_name in ["Davis", "Franklin", "Black", "Coleman"]:
            insert_owner("Test", last_name)
        with transaction() as conn:
            owners = OwnerRepository(conn)
            first_page = owners.find_page(limit=2, offset=0, order_by=[("last_name", "ASC")])
            second_page = owners.find_page(limit=2, offset=2, order_by=[("last_name", "ASC")])
            assert owners.count() == 4
        assert [o.last_name for o in first_page] == ["Black", "Coleman"]
        assert [o.last_name for o in second_page] == ["Davis", "Franklin"]

    def test_rollback_discards_changes(self):
        try:
            with transaction() as conn:
                OwnerRepository(conn).insert(OwnerBase(first_name="George", last_name="Franklin"))
                raise RuntimeError("storage failure")
        except RuntimeError:
            pass
        with transaction() as conn:
            assert OwnerRepository(conn).count() == 0

    def test_pets_loaded_for_many_owners(self):
        with transaction() as conn:
            owners = OwnerRepository(conn)
            ids = [owners.insert(OwnerBase(first_name="Test", last_name=f"Owner{i}")) for i in range(1200)]
            owners.insert_pet(ids[0], PetBase(name="First"))
            owners.insert_pet(ids[-1], PetBase(name="Last"))
            loaded = owners.find_all_with_pets()
        assert len(loaded) == 1200
        assert [pet.name for pet in loaded[0].pets] == ["First"]
        assert [pet.name for pet in loaded[-1].pets] == ["Last"]
        assert sum(len(owner.pets) for owner in loaded) == 2

    def test_ids_outside_integer_range_find_nothing(self):
        insert_owner("George", "Franklin", pets=["Leo"])
        huge = 2**63
        with transaction() as conn:
            owners = OwnerRepository(conn)
            assert owners.find_by_id(huge) is None
            assert owners.find_by_id_with_pets(-huge - 1) is None
            assert owners.find_pets(huge) == []
            assert owners.find_pet(huge) is None
            assert not owners.delete_by_id(huge)
            assert owners.find_page(limit=20, offset=huge) == []
            assert PetTypeRepository(conn).find_by_id(huge) is None
            assert owners.count() == 1
