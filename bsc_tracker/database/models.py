"""Database schema definitions for persisted tracker state."""

from __future__ import annotations

# Every persisted value (history, transaction cache, API key) is a text blob
# stored under a named key; rows are upserted, never deleted
KV_TABLE_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""

