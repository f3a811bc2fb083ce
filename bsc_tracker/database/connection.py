"""Database connection management and initialization."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from sqlite3 import Connection

from beartype import beartype

from bsc_tracker.database.models import KV_TABLE_SCHEMA
from bsc_tracker.utils.config import DB_PATH


@beartype
def get_connection(db_path: Path = DB_PATH) -> Connection:
    """Create and return a database connection."""
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    return conn


@beartype
def initialize_database(db_path: Path = DB_PATH) -> None:
    """Initialize the database with the key-value table."""
    # Ensure database directory exists
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = get_connection(db_path)
    try:
        cursor = conn.cursor()
        cursor.execute(KV_TABLE_SCHEMA)
        conn.commit()
    finally:
        conn.close()

