"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), running a unit of work inside a transaction
(``transaction``) and applying migrations on application start
(``init_db``).  It uses SQLite as a lightweight embedded database; to
switch to another DBMS you would replace connection logic and adapt
SQL syntax accordingly.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings


logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS types (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE
        );

        CREATE TABLE IF NOT EXISTS owners (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            first_name TEXT NOT NULL,
            last_name TEXT NOT NULL,
            address TEXT,
            city TEXT,
            telephone TEXT
        );

        CREATE TABLE IF NOT EXISTS pets (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            birth_date TEXT,
            type_id INTEGER,
            owner_id INTEGER,
            FOREIGN KEY(type_id) REFERENCES types(id),
            FOREIGN KEY(owner_id) REFERENCES owners(id) ON DELETE CASCADE
        );
        """,
    ),
    # Migration 2: lookup indices for surname search, telephone checks
    # and eager loading of pets
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_owners_last_name ON owners(last_name);
        CREATE INDEX IF NOT EXISTS idx_owners_telephone ON owners(telephone);
        CREATE INDEX IF NOT EXISTS idx_pets_owner_id ON pets(owner_id);
        """,
    ),
]

# Bounds of an SQLite INTEGER; larger ids can never be stored.
MAX_INTEGER = 2**63 - 1
MIN_INTEGER = -(2**63)


def fits_integer(value: int) -> bool:
    """Return True when ``value`` can be bound to an SQLite INTEGER."""
    return MIN_INTEGER <= value <= MAX_INTEGER


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # petclinic_customers/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name and has
    foreign key enforcement switched on, which the ``pets`` table relies
    on for cascading deletes when an owner is removed.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    # SQLite disables foreign keys by default; the setting is per connection.
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def transaction() -> Iterator[sqlite3.Connection]:
    """Run a unit of work on a fresh connection.

    Commits when the block exits normally and rolls back when it raises,
    so either every row change made inside the block is stored or none
    is.  The connection is always closed on exit.
    """
    conn = get_connection()
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor inside a transaction."""
    with transaction() as conn:
        yield conn.cursor()


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  If you add a new migration, append it with an
    incremented version number.
    """
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                logger.info("Applied migration %s", version)
                current_version = version
