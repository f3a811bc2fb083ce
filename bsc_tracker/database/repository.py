"""Data access layer for the key-value store."""

from __future__ import annotations

import json
from pathlib import Path

from beartype import beartype

from bsc_tracker.database.connection import get_connection, initialize_database
from bsc_tracker.utils.config import DB_PATH
from bsc_tracker.utils.logger import get_logger

logger = get_logger(__name__)


class KeyValueStore:
    """Named-key text store backed by SQLite."""

    def __init__(self, db_path: Path = DB_PATH) -> None:
        """
        Open (and create if needed) the store.

        Args:
            db_path: SQLite database file
        """
        self.db_path = db_path
        initialize_database(db_path)

    @beartype
    def get(self, key: str) -> str | None:
        """
        Read the raw value stored under ``key``.

        Returns:
            Stored text or None if the key was never written
        """
        conn = get_connection(self.db_path)
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    @beartype
    def set(self, key: str, value: str) -> None:
        """Write ``value`` under ``key``, replacing any previous value."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP
                """,
                (key, value),
            )
            conn.commit()
        finally:
            conn.close()

    @beartype
    def get_json(self, key: str, default: object = None) -> object:
        """
        Read and decode a JSON value.

        Args:
            key: Store key
            default: Returned when the key is absent or its value is corrupt

        Returns:
            Decoded value or ``default``
        """
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(f"Ignoring corrupt JSON stored under '{key}'")
            return default

    @beartype
    def set_json(self, key: str, value: object) -> None:
        """Encode ``value`` as JSON and store it under ``key``."""
        self.set(key, json.dumps(value, ensure_ascii=False))
