"""Per-address transaction cache."""

from __future__ import annotations

import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from beartype import beartype

from bsc_tracker.database.repository import KeyValueStore
from bsc_tracker.parser.models import Transaction
from bsc_tracker.utils.addresses import normalize_address
from bsc_tracker.utils.config import TX_CACHE_KEY
from bsc_tracker.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class CacheEntry:
    """Cached transactions of one address."""

    transactions: list[Transaction] = field(default_factory=list)
    last_update: int = 0  # milliseconds since epoch

    def to_json(self) -> dict[str, object]:
        return {
            "transactions": [tx.to_api() for tx in self.transactions],
            "lastUpdate": self.last_update,
        }

    @classmethod
    def from_json(cls, data: dict[str, object]) -> CacheEntry:
        raw_transactions = data.get("transactions") or []
        if not isinstance(raw_transactions, list):
            raise ValueError("transactions is not a list")
        if not all(isinstance(item, Mapping) for item in raw_transactions):
            raise ValueError("transactions contains a non-object record")
        return cls(
            transactions=[Transaction.from_api(item) for item in raw_transactions],
            last_update=int(data.get("lastUpdate") or 0),
        )


class TransactionStore:
    """
    Cache of native transactions keyed by normalized address.

    The whole cache lives under a single key of the key-value store. It is
    read once on construction and written through on every ``save``.
    Entries only grow: a fetch is merged into what is already known and
    nothing is ever evicted.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self.entries: dict[str, CacheEntry] = self._load()

    def _load(self) -> dict[str, CacheEntry]:
        raw = self.store.get_json(TX_CACHE_KEY, {})
        if not isinstance(raw, dict):
            logger.warning("Transaction cache is not a mapping, starting empty")
            return {}

        entries: dict[str, CacheEntry] = {}
        for address, data in raw.items():
            try:
                entries[normalize_address(address)] = CacheEntry.from_json(data)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"Dropping corrupt cache entry for {address}: {e}")

        logger.debug(f"Loaded transaction cache for {len(entries)} addresses")
        return entries

    @beartype
    def get(self, address: str) -> CacheEntry | None:
        """Return the cached entry for ``address`` if there is one."""
        return self.entries.get(normalize_address(address))

    @beartype
    def resume_block(self, address: str, default_block: int) -> int:
        """
        Pick the block to resume scanning from.

        Args:
            address: Account address
            default_block: Block to use when nothing is cached (the day start)

        Returns:
            Highest cached block number, or ``default_block``
        """
        entry = self.get(address)
        if entry is None or not entry.transactions:
            return default_block
        return max(tx.block_number for tx in entry.transactions)

    @staticmethod
    @beartype
    def merge_and_get(
        address: str,
        new_transactions: Iterable[Transaction],
        cached_transactions: Iterable[Transaction],
    ) -> list[Transaction]:
        """
        Merge a fresh fetch into cached transactions.

        A new record replaces a cached one with the same hash; cached records
        missing from the new batch are kept.

        Args:
            address: Account the transactions belong to
            new_transactions: Records from the latest fetch
            cached_transactions: Records already cached

        Returns:
            Deduplicated list: new records in fetch order, then the
            remaining cached ones
        """
        merged: dict[str, Transaction] = {}
        for tx in new_transactions:
            merged[tx.hash] = tx
        new_count = len(merged)

        for tx in cached_transactions:
            merged.setdefault(tx.hash, tx)

        logger.debug(
            f"Merged {new_count} new transactions for {address}; "
            f"{len(merged) - new_count} kept from cache",
        )
        return list(merged.values())

    @beartype
    def save(self, address: str, transactions: list[Transaction]) -> CacheEntry:
        """
        Replace the entry for ``address`` and persist the whole cache.

        Args:
            address: Account address
            transactions: Already merged transaction list

        Returns:
            The stored entry
        """
        entry = CacheEntry(transactions=list(transactions), last_update=int(time.time() * 1000))
        self.entries[normalize_address(address)] = entry
        self.store.set_json(
            TX_CACHE_KEY,
            {key: value.to_json() for key, value in self.entries.items()},
        )
        return entry
