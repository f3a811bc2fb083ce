"""Shared fixtures for tracker tests."""

from __future__ import annotations

import pytest

from bsc_tracker.database.repository import KeyValueStore


@pytest.fixture
def store(tmp_path) -> KeyValueStore:
    return KeyValueStore(tmp_path / "tracker.db")
