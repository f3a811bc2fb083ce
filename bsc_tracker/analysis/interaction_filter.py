"""Window and counterparty filters for explorer records."""

from __future__ import annotations

from collections.abc import Iterable

from beartype import beartype

from bsc_tracker.parser.models import TokenTransfer, Transaction
from bsc_tracker.utils.addresses import normalize_address
from bsc_tracker.utils.config import TARGET_ADDRESS
from bsc_tracker.utils.time_window import TimeWindow


@beartype
def filter_interactions(
    transactions: Iterable[Transaction],
    window: TimeWindow,
    counterparty: str = TARGET_ADDRESS,
) -> list[Transaction]:
    """
    Keep successful transactions inside the window that touch the counterparty.

    Args:
        transactions: Candidate transactions
        window: Inclusive time window
        counterparty: Address that must be the sender or receiver

    Returns:
        Matching transactions in their original order
    """
    counterparty = normalize_address(counterparty)
    return [
        tx
        for tx in transactions
        if window.contains(tx.timestamp) and not tx.is_error and tx.involves(counterparty)
    ]


@beartype
def filter_transfers_in_window(
    transfers: Iterable[TokenTransfer],
    window: TimeWindow,
) -> list[TokenTransfer]:
    """Keep transfers whose timestamp falls inside the window."""
    return [transfer for transfer in transfers if window.contains(transfer.timestamp)]
