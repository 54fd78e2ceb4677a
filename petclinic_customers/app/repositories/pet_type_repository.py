"""Pet type (species) lookup table access."""

import sqlite3
from typing import List, Optional

from petclinic_customers.app.core.db import fits_integer
from petclinic_customers.app.schemas.pet import PetTypeRead


class PetTypeRepository:
    """Data access for the ``types`` table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def insert(self, name: str) -> PetTypeRead:
        cursor = self.conn.execute("INSERT INTO types (name) VALUES (?)", (name,))
        return PetTypeRead(id=cursor.lastrowid, name=name)

    def find_all(self) -> List[PetTypeRead]:
        rows = self.conn.execute("SELECT id, name FROM types ORDER BY name").fetchall()
        return [PetTypeRead(id=row["id"], name=row["name"]) for row in rows]

    def find_by_id(self, type_id: int) -> Optional[PetTypeRead]:
        if not fits_integer(type_id):
            return None
        row = self.conn.execute("SELECT id, name FROM types WHERE id = ?", (type_id,)).fetchone()
        if not row:
            return None
        return PetTypeRead(id=row["id"], name=row["name"])

    def find_by_name(self, name: str) -> Optional[PetTypeRead]:
        row = self.conn.execute("SELECT id, name FROM types WHERE name = ?", (name,)).fetchone()
        if not row:
            return None
        return PetTypeRead(id=row["id"], name=row["name"])
