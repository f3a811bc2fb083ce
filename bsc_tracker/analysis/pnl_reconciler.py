"""PNL reconstruction from stablecoin transfers."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal

from beartype import beartype

from bsc_tracker.analysis.volume_tier import classify_volume
from bsc_tracker.parser.models import TokenTransfer, TradeRecord, TradeSide, Transaction
from bsc_tracker.utils.addresses import normalize_address
from bsc_tracker.utils.config import TARGET_ADDRESS, USDT_CONTRACT
from bsc_tracker.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PNLResult:
    """Aggregated outcome of one day's stablecoin legs."""

    records: list[TradeRecord] = field(default_factory=list)
    pnl: Decimal = Decimal(0)
    buy_amount: Decimal = Decimal(0)
    sell_amount: Decimal = Decimal(0)
    volume_level: int = 0
    ignored_count: int = 0

    @classmethod
    def empty(cls) -> PNLResult:
        return cls()

    @property
    def total_volume(self) -> Decimal:
        return self.buy_amount + self.sell_amount


@beartype
def select_stablecoin_transfers(
    transfers: Iterable[TokenTransfer],
    qualifying_transactions: Iterable[Transaction],
    stablecoin: str = USDT_CONTRACT,
) -> list[TokenTransfer]:
    """
    Keep stablecoin transfers that belong to a qualifying transaction.

    Other tokens moved inside the same transaction are dropped.
    """
    stablecoin = normalize_address(stablecoin)
    tx_hashes = {tx.hash for tx in qualifying_transactions}
    return [
        transfer
        for transfer in transfers
        if transfer.hash in tx_hashes and transfer.contract_address == stablecoin
    ]


@beartype
def classify_transfer(transfer: TokenTransfer, user_address: str, counterparty: str) -> TradeSide | None:
    """
    Decide which side of a trade a stablecoin transfer is.

    Returns:
        BUY when the user pays the counterparty, SELL when the counterparty
        pays the user, None for any other pair of addresses
    """
    if transfer.from_address == user_address and transfer.to_address == counterparty:
        return TradeSide.BUY
    if transfer.from_address == counterparty and transfer.to_address == user_address:
        return TradeSide.SELL
    return None


@beartype
def reconcile(
    transfers: Sequence[TokenTransfer],
    qualifying_transactions: Sequence[Transaction],
    user_address: str,
    counterparty: str = TARGET_ADDRESS,
    stablecoin: str = USDT_CONTRACT,
) -> PNLResult:
    """
    Build the trade ledger and PNL for one account.

    Args:
        transfers: Token transfers inside the analysis window
        qualifying_transactions: Transactions already filtered to the
            counterparty and window
        user_address: Account being analysed
        counterparty: Address on the other side of every trade
        stablecoin: Contract of the token PNL is measured in

    Returns:
        PNLResult with records sorted by timestamp, ``pnl = sell - buy``
        and the volume tier of ``buy + sell``
    """
    user_address = normalize_address(user_address)
    counterparty = normalize_address(counterparty)

    relevant = select_stablecoin_transfers(transfers, qualifying_transactions, stablecoin)

    records: list[TradeRecord] = []
    total_buy = Decimal(0)
    total_sell = Decimal(0)
    ignored = 0

    for transfer in relevant:
        side = classify_transfer(transfer, user_address, counterparty)
        if side is None:
            ignored += 1
            continue

        amount = transfer.amount
        if side is TradeSide.BUY:
            total_buy += amount
        else:
            total_sell += amount

        records.append(
            TradeRecord(
                hash=transfer.hash,
                timestamp=transfer.timestamp,
                side=side,
                amount=amount,
                token=transfer.token_symbol,
                stable_amount=amount,
            ),
        )

    # sorted() is stable, ties keep transfer order
    records = sorted(records, key=lambda record: record.timestamp)

    logger.debug(
        f"Reconciled {len(relevant)} stablecoin transfers for {user_address}: "
        f"{len(records)} trades, {ignored} ignored",
    )

    return PNLResult(
        records=records,
        pnl=total_sell - total_buy,
        buy_amount=total_buy,
        sell_amount=total_sell,
        volume_level=classify_volume(total_buy + total_sell),
        ignored_count=ignored,
    )
