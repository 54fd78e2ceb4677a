"""
Owner and pet persistence.

``OwnerRepository`` is the entity store the owner service talks to.  It
exposes the create/read/update/delete operations plus the two query
shapes the service needs: lookup by surname prefix and lookup with the
pets eagerly loaded.  Pets are always read together with their type
name and the owner id, so an ``OwnerRead`` holds its pets while each
``PetRead`` only refers back to its owner by id.

All queries use parameterized statements.  ``ORDER BY`` clauses are
built from column names the service has already checked against
``SORTABLE_FIELDS``.  An id outside the SQLite INTEGER range cannot
belong to a stored row, so lookups with such an id find nothing.
"""

import sqlite3
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from petclinic_customers.app.core.db import MAX_INTEGER, fits_integer
from petclinic_customers.app.schemas.owner import OwnerBase, OwnerRead
from petclinic_customers.app.schemas.pet import PetBase, PetRead


OWNER_COLUMNS = "id, first_name, last_name, address, city, telephone"

PET_SELECT = """
    SELECT p.id, p.name, p.birth_date, p.owner_id, p.type_id, t.name AS type_name
    FROM pets p
    LEFT JOIN types t ON t.id = p.type_id
"""

# Owners per pet query, well below SQLite's bound parameter limit.
PET_BATCH_SIZE = 500


class OwnerRepository:
    """Data access for the ``owners`` and ``pets`` tables."""

    SORTABLE_FIELDS = {"id", "first_name", "last_name", "address", "city", "telephone"}

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    # -- writes ---------------------------------------------------------

    def insert(self, owner: OwnerBase) -> int:
        cursor = self.conn.execute(
            """
            INSERT INTO owners (first_name, last_name, address, city, telephone)
            VALUES (?, ?, ?, ?, ?)
            """,
            (owner.first_name, owner.last_name, owner.address, owner.city, owner.telephone),
        )
        return cursor.lastrowid

    def update(
        self,
        owner_id: int,
        first_name: str,
        last_name: str,
        address: Optional[str],
        city: Optional[str],
        telephone: Optional[str],
    ) -> None:
        self.conn.execute(
            """
            UPDATE owners
            SET first_name = ?, last_name = ?, address = ?, city = ?, telephone = ?
            WHERE id = ?
            """,
            (first_name, last_name, address, city, telephone, owner_id),
        )

    def insert_pet(self, owner_id: int, pet: PetBase, type_id: Optional[int] = None) -> int:
        """Store ``pet`` as belonging to ``owner_id`` and return its id."""
        birth_date = pet.birth_date.isoformat() if pet.birth_date else None
        cursor = self.conn.execute(
            "INSERT INTO pets (name, birth_date, type_id, owner_id) VALUES (?, ?, ?, ?)",
            (pet.name, birth_date, type_id, owner_id),
        )
        return cursor.lastrowid

    def delete_by_id(self, owner_id: int) -> bool:
        """Delete an owner; its pets go with it through ``ON DELETE CASCADE``."""
        if not fits_integer(owner_id):
            return False
        cursor = self.conn.execute("DELETE FROM owners WHERE id = ?", (owner_id,))
        return cursor.rowcount > 0

    # -- reads ----------------------------------------------------------

    def find_by_id(self, owner_id: int, with_pets: bool = False) -> Optional[OwnerRead]:
        if not fits_integer(owner_id):
            return None
        row = self.conn.execute(
            f"SELECT {OWNER_COLUMNS} FROM owners WHERE id = ?",
            (owner_id,),
        ).fetchone()
        if not row:
            return None
        if with_pets:
            return self._with_pets([row])[0]
        return self._row_to_owner(row)

    def find_by_id_with_pets(self, owner_id: int) -> Optional[OwnerRead]:
        return self.find_by_id(owner_id, with_pets=True)

    def exists_by_telephone(self, telephone: str) -> bool:
        row = self.conn.execute(
            "SELECT 1 FROM owners WHERE telephone = ? LIMIT 1",
            (telephone,),
        ).fetchone()
        return row is not None

    def find_by_last_name_prefix(self, prefix: str) -> List[OwnerRead]:
        """Return owners whose last name starts with ``prefix``.

        The comparison is case sensitive (SQLite's ``LIKE`` is not, so a
        ``substr`` comparison is used instead).  An empty prefix matches
        every owner.
        """
        rows = self.conn.execute(
            f"SELECT {OWNER_COLUMNS} FROM owners WHERE substr(last_name, 1, ?) = ? ORDER BY id",
            (len(prefix), prefix),
        ).fetchall()
        return self._with_pets(rows)

    def find_all_with_pets(self) -> List[OwnerRead]:
        rows = self.conn.execute(f"SELECT {OWNER_COLUMNS} FROM owners ORDER BY id").fetchall()
        return self._with_pets(rows)

    def find_page(
        self,
        limit: int,
        offset: int,
        order_by: Sequence[Tuple[str, str]] = (("id", "ASC"),),
    ) -> List[OwnerRead]:
        """Return one page of owners with their pets.

        ``order_by`` is a sequence of ``(column, direction)`` pairs taken
        from ``SORTABLE_FIELDS`` and ``ASC``/``DESC``.  ``id`` is always
        appended as the final tie breaker so pages are stable.
        """
        if offset > MAX_INTEGER:
            return []
        limit = min(limit, MAX_INTEGER)
        clauses = [f"{column} {direction}" for column, direction in order_by]
        if not any(column == "id" for column, _ in order_by):
            clauses.append("id ASC")
        rows = self.conn.execute(
            f"SELECT {OWNER_COLUMNS} FROM owners ORDER BY {', '.join(clauses)} LIMIT ? OFFSET ?",
            (limit, offset),
        ).fetchall()
        return self._with_pets(rows)

    def count(self) -> int:
        row = self.conn.execute("SELECT COUNT(*) AS count FROM owners").fetchone()
        return row["count"]

    def find_pet(self, pet_id: int) -> Optional[PetRead]:
        if not fits_integer(pet_id):
            return None
        row = self.conn.execute(PET_SELECT + " WHERE p.id = ?", (pet_id,)).fetchone()
        if not row:
            return None
        return self._row_to_pet(row)

    def find_pets(self, owner_id: int) -> List[PetRead]:
        if not fits_integer(owner_id):
            return []
        rows = self.conn.execute(
            PET_SELECT + " WHERE p.owner_id = ? ORDER BY p.id",
            (owner_id,),
        ).fetchall()
        return [self._row_to_pet(row) for row in rows]

    # -- row mapping ----------------------------------------------------

    def _with_pets(self, owner_rows: Iterable[sqlite3.Row]) -> List[OwnerRead]:
        owners = [self._row_to_owner(row) for row in owner_rows]
        if not owners:
            return owners
        by_id: Dict[int, OwnerRead] = {owner.id: owner for owner in owners}
        ids = list(by_id)
        for start in range(0, len(ids), PET_BATCH_SIZE):
            batch = ids[start:start + PET_BATCH_SIZE]
            placeholders = ", ".join("?" for _ in batch)
            pet_rows = self.conn.execute(
                PET_SELECT + f" WHERE p.owner_id IN ({placeholders}) ORDER BY p.id",
                batch,
            ).fetchall()
            for row in pet_rows:
                by_id[row["owner_id"]].pets.append(self._row_to_pet(row))
        return owners

    @staticmethod
    def _row_to_owner(row: sqlite3.Row) -> OwnerRead:
        return OwnerRead(
            id=row["id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            address=row["address"],
            city=row["city"],
            telephone=row["telephone"],
        )

    @staticmethod
    def _row_to_pet(row: sqlite3.Row) -> PetRead:
        return PetRead(
            id=row["id"],
            name=row["name"],
            birth_date=row["birth_date"],
            owner_id=row["owner_id"],
            type_id=row["type_id"],
            type_name=row["type_name"],
        )
