"""Record builders and fake explorer wiring for tracker tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import httpx

from bsc_tracker.parser.explorer_client import BscScanClient
from bsc_tracker.parser.models import TokenTransfer, Transaction
from bsc_tracker.utils.config import TARGET_ADDRESS, USDT_CONTRACT

USER = "0x" + "11" * 20
OTHER = "0x" + "22" * 20
OTHER_TOKEN = "0x" + "33" * 20

# Reference "now" for every time-dependent test (naive local time)
NOW = datetime(2026, 10, 19, 12, 0, 0)


def local_ts(hour: int, minute: int = 0, second: int = 0) -> int:
    return int(NOW.replace(hour=hour, minute=minute, second=second).timestamp())


def tx_data(
    tx_hash: str,
    timestamp: int,
    sender: str = USER,
    receiver: str = TARGET_ADDRESS,
    block_number: int = 100,
    is_error: str = "0",
) -> dict[str, str]:
    """Raw ``txlist`` record as the explorer returns it."""
    return {
        "hash": tx_hash,
        "timeStamp": str(timestamp),
        "from": sender,
        "to": receiver,
        "blockNumber": str(block_number),
        "isError": is_error,
    }


def transfer_data(
    tx_hash: str,
    timestamp: int,
    sender: str = USER,
    receiver: str = TARGET_ADDRESS,
    value: str = "1000000000000000000",
    decimals: str = "18",
    contract: str = USDT_CONTRACT,
    symbol: str = "USDT",
) -> dict[str, str]:
    """Raw ``tokentx`` record as the explorer returns it."""
    return {
        "hash": tx_hash,
        "timeStamp": str(timestamp),
        "from": sender,
        "to": receiver,
        "value": value,
        "tokenName": "Tether USD",
        "tokenSymbol": symbol,
        "tokenDecimal": decimals,
        "contractAddress": contract,
    }


def make_tx(tx_hash: str, timestamp: int, **kwargs: object) -> Transaction:
    return Transaction.from_api(tx_data(tx_hash, timestamp, **kwargs))


def make_transfer(tx_hash: str, timestamp: int, **kwargs: object) -> TokenTransfer:
    return TokenTransfer.from_api(transfer_data(tx_hash, timestamp, **kwargs))


def envelope(result: object, status: str = "1", message: str = "OK") -> dict[str, object]:
    return {"status": status, "message": message, "result": result}


def client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[str], BscScanClient]:
    """Build explorer clients whose HTTP traffic goes to ``handler``."""

    def factory(api_key: str) -> BscScanClient:
        return BscScanClient(
            api_key=api_key,
            rate_limit=1000.0,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )

    return factory

