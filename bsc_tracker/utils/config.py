"""Configuration constants for the BSC daily tracker."""

from __future__ import annotations

from pathlib import Path

# Database configuration
DB_DIR = Path(__file__).parent.parent.parent / "data"
DB_DIR.mkdir(exist_ok=True)
DB_PATH = DB_DIR / "tracker.db"

# Key-value store keys
HISTORY_KEY = "addressHistory"
TX_CACHE_KEY = "txCache"
API_KEY_KEY = "bscscanApiKey"

# Explorer API configuration
BSCSCAN_API_URL = "https://api.bscscan.com/api"
BSCSCAN_API_KEY_URL = "https://bscscan.com/apis"

# Explorer query limits
PAGE_SIZE = 1000
END_BLOCK = 99999999

# API rate limiting (requests per second); the free tier allows 5
API_RATE_LIMIT = 5.0

# Per-request timeout in seconds
HTTP_TIMEOUT = 30.0

# Counterparty every interaction is measured against
TARGET_ADDRESS = "0xb300000b72DEAEb607a12d5f54773D1C19c7028d".lower()

# BSC-USD (USDT) token contract
USDT_CONTRACT = "0x55d398326f99059ff775485246999027b3197955".lower()

# Daily window, local time
WINDOW_START_HOUR = 8

# Address history length
HISTORY_LIMIT = 5

# Upper bound for the volume tier loop
VOLUME_TIER_CAP = 20
