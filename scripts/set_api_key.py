"""Store the BscScan API key used by check_address.py."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from bsc_tracker.database.repository import KeyValueStore
from bsc_tracker.session import TrackerSession
from bsc_tracker.utils.config import BSCSCAN_API_KEY_URL


def main(api_key: str) -> None:
    session = TrackerSession(KeyValueStore())
    session.set_api_key(api_key)
    if session.api_key:
        print("API key saved.")
    else:
        print("API key cleared.")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts/set_api_key.py <api_key>")
        print(f"Get a key at {BSCSCAN_API_KEY_URL}")
        sys.exit(1)

    main(sys.argv[1])
