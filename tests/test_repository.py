"""Tests for the key-value store."""

from __future__ import annotations

from bsc_tracker.database.connection import get_connection
from bsc_tracker.database.repository import KeyValueStore


def test_get_missing_key_returns_none(store: KeyValueStore) -> None:
    """Test an unknown key reads as None."""
    assert store.get("missing") is None


def test_set_overwrites_value(store: KeyValueStore) -> None:
    """Test writing a key twice keeps only the latest value."""
    store.set("bscscanApiKey", "first")
    store.set("bscscanApiKey", "second")

    assert store.get("bscscanApiKey") == "second"

    conn = get_connection(store.db_path)
    try:
        count = conn.execute("SELECT COUNT(*) FROM kv_store").fetchone()[0]
    finally:
        conn.close()
    assert count == 1


def test_json_round_trip(store: KeyValueStore) -> None:
    """Test JSON values are decoded back to Python objects."""
    store.set_json("addressHistory", ["0xa", "0xb"])

    assert store.get_json("addressHistory") == ["0xa", "0xb"]


def test_get_json_corrupt_value_returns_default(store: KeyValueStore) -> None:
    """Test a corrupt JSON blob falls back to the default."""
    store.set("txCache", "{not json")

    assert store.get_json("txCache", {}) == {}


def test_values_survive_reopen(tmp_path) -> None:
    """Test a second store on the same file sees earlier writes."""
    KeyValueStore(tmp_path / "kv.db").set("bscscanApiKey", "KEY")

    assert KeyValueStore(tmp_path / "kv.db").get("bscscanApiKey") == "KEY"
