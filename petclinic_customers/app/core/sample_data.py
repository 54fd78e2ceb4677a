"""
One-time sample data for an empty database.

``seed_sample_data`` is called once on application startup (when
``settings.seed_sample_data`` is on).  It does nothing if any owner
already exists, so restarting the service never duplicates the sample
rows.  The rows are written straight through the repositories inside a
single transaction.
"""

import logging
from datetime import date

from petclinic_customers.app.core.db import transaction
from petclinic_customers.app.repositories.owner_repository import OwnerRepository
from petclinic_customers.app.repositories.pet_type_repository import PetTypeRepository
from petclinic_customers.app.schemas.owner import OwnerBase
from petclinic_customers.app.schemas.pet import PetBase


logger = logging.getLogger(__name__)

PET_TYPES = ["cat", "dog", "lizard", "snake", "bird", "hamster"]

# (owner fields, [(pet name, birth date, pet type)])
SAMPLE_OWNERS = [
    (
        {
            "first_name": "George",
            "last_name": "Franklin",
            "address": "110 W. Liberty St.",
            "city": "Madison",
            "telephone": "6085551023",
        },
        [("Leo", date(2020, 5, 10), "dog"), ("Basil", date(2019, 8, 15), "cat")],
    ),
    (
        {
            "first_name": "Betty",
            "last_name": "Davis",
            "address": "638 Cardinal Ave.",
            "city": "Sun Prairie",
            "telephone": "6085551749",
        },
        [("Rosy", date(2021, 3, 20), "dog")],
    ),
    (
        {
            "first_name": "Eduardo",
            "last_name": "Rodriquez",
            "address": "2693 Commerce St.",
            "city": "McFarland",
            "telephone": "6085558763",
        },
        [("Jewel", date(2022, 1, 5), "lizard")],
    ),
]


def seed_sample_data() -> bool:
    """Insert the sample pet types, owners and pets into an empty database.

    Returns ``True`` if rows were written and ``False`` if the database
    already held owners.
    """
    with transaction() as conn:
        owners = OwnerRepository(conn)
        if owners.count() > 0:
            logger.info("Database already initialized, skipping sample data")
            return False

        logger.info("Initializing database with sample data")
        types = PetTypeRepository(conn)
        type_ids = {}
        for name in PET_TYPES:
            existing = types.find_by_name(name)
            type_ids[name] = (existing or types.insert(name)).id

        for owner_fields, pets in SAMPLE_OWNERS:
            owner_id = owners.insert(OwnerBase(**owner_fields))
            for pet_name, birth_date, type_name in pets:
                owners.insert_pet(owner_id, PetBase(name=pet_name, birth_date=birth_date), type_ids[type_name])

        logger.info("Sample data created: %s owners", owners.count())
        return True
