"""Show today's counterparty interactions and PNL for an address."""

from __future__ import annotations

import asyncio
import sys
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from beartype import beartype

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from bsc_tracker.database.repository import KeyValueStore
from bsc_tracker.parser.models import TradeSide
from bsc_tracker.session import QueryResult, TrackerSession
from bsc_tracker.utils.addresses import to_display_address
from bsc_tracker.utils.config import BSCSCAN_API_KEY_URL


@beartype
def format_timestamp(timestamp: int) -> str:
    """Format a unix timestamp as local wall-clock time."""
    return datetime.fromtimestamp(timestamp).strftime("%H:%M:%S")


@beartype
def format_pnl(pnl: Decimal) -> str:
    sign = "+" if pnl >= 0 else ""
    return f"{sign}{pnl:.6f} USDT"


@beartype
def print_result(result: QueryResult) -> None:
    """Print the summary and trade list of a finished query."""
    pnl = result.pnl
    print("=" * 80)
    print(f"Address: {to_display_address(result.address)}")
    print("=" * 80)
    print(f"Transactions today: {result.tx_count}")
    if pnl.buy_amount > 0:
        print(f"Bought: {pnl.buy_amount:.2f} USDT")
    if pnl.volume_level > 0:
        print(f"Volume tier: {pnl.volume_level}")

    if not pnl.records:
        return

    print(f"\nPNL: {format_pnl(pnl.pnl)}")
    print(f"\n{'Side':<6} {'Amount':<24} {'Time':<10} {'Hash':<66}")
    print("-" * 80)
    for record in pnl.records:
        side = "BUY" if record.side is TradeSide.BUY else "SELL"
        amount = f"{record.stable_amount:.6f} {record.token}"
        print(f"{side:<6} {amount:<24} {format_timestamp(record.timestamp):<10} {record.hash}")


@beartype
def print_history(session: TrackerSession) -> None:
    if not session.history:
        print("No history yet.")
        return
    print("History:")
    for index, address in enumerate(session.history):
        print(f"  [{index}] {to_display_address(address)}")


@beartype
async def main(address: str | None = None, history_index: int | None = None) -> int:
    """
    Run one query and print the result.

    Args:
        address: Address to query
        history_index: Re-query this history entry instead

    Returns:
        Process exit code
    """
    session = TrackerSession(KeyValueStore())

    if history_index is not None:
        try:
            session.select_history(history_index)
        except IndexError:
            print(f"No history entry {history_index}")
            print_history(session)
            return 1

    result = await session.search(address)
    if result is None:
        print(f"Error: {session.error}")
        if session.needs_configuration:
            print(f"Get a key at {BSCSCAN_API_KEY_URL} and run: python scripts/set_api_key.py <key>")
        return 1

    print_result(result)
    session.log_summary()
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts/check_address.py <address>")
        print("       python scripts/check_address.py --history [index]")
        print("Example: python scripts/check_address.py 0x1234...")
        sys.exit(1)

    if sys.argv[1] == "--history":
        if len(sys.argv) < 3:
            print_history(TrackerSession(KeyValueStore()))
            sys.exit(0)
        sys.exit(asyncio.run(main(history_index=int(sys.argv[2]))))

    sys.exit(asyncio.run(main(address=sys.argv[1])))
