"""Query orchestration and user-facing state."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from beartype import beartype

from bsc_tracker.analysis import PNLResult, filter_interactions, filter_transfers_in_window, reconcile
from bsc_tracker.database.repository import KeyValueStore
from bsc_tracker.database.transaction_store import TransactionStore
from bsc_tracker.parser.block_resolver import BlockWindowResolver
from bsc_tracker.parser.explorer_client import BscScanClient
from bsc_tracker.parser.transfer_fetcher import TransferFetcher
from bsc_tracker.utils.addresses import is_valid_address, normalize_address
from bsc_tracker.utils.config import API_KEY_KEY, HISTORY_KEY, HISTORY_LIMIT, TARGET_ADDRESS
from bsc_tracker.utils.exceptions import ConfigurationError, TrackerError, ValidationError
from bsc_tracker.utils.logger import get_logger
from bsc_tracker.utils.time_window import today_window

logger = get_logger(__name__)

MISSING_API_KEY_MESSAGE = "Please set a BscScan API key first"
MISSING_ADDRESS_MESSAGE = "Please enter an address"
INVALID_ADDRESS_MESSAGE = "Please enter a valid EVM address"
REQUEST_FAILED_MESSAGE = "Request failed"


class QueryStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class QueryResult:
    """Everything published by a successful query."""

    address: str
    tx_count: int
    pnl: PNLResult = field(default_factory=PNLResult.empty)


class TrackerSession:
    """
    Runs daily queries for one user and holds what the UI shows.

    History, transaction cache and API key are read from the store once,
    here, and written back whenever they change.
    """

    def __init__(
        self,
        store: KeyValueStore,
        client_factory: Callable[[str], BscScanClient] = BscScanClient,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """
        Initialize the session.

        Args:
            store: Persistent key-value store
            client_factory: Builds an explorer client from an API key
            clock: Returns the current local time
        """
        self.store = store
        self.client_factory = client_factory
        self.clock = clock

        self.api_key: str = self.store.get(API_KEY_KEY) or ""
        self.history: list[str] = self._load_history()
        self.transaction_store = TransactionStore(store)

        self.address = ""
        self.status = QueryStatus.IDLE
        self.error = ""
        self.needs_configuration = False
        self.result: QueryResult | None = None

    def _load_history(self) -> list[str]:
        raw = self.store.get_json(HISTORY_KEY, [])
        if not isinstance(raw, list):
            return []
        return [item for item in raw if isinstance(item, str)][:HISTORY_LIMIT]

    def log_summary(self) -> None:
        """Log the metrics of the last successful query."""
        logger.log_summary()

    @property
    def loading(self) -> bool:
        return self.status is QueryStatus.LOADING

    @beartype
    def set_api_key(self, api_key: str) -> None:
        """Store a new explorer API key."""
        self.api_key = api_key.strip()
        self.store.set(API_KEY_KEY, self.api_key)
        if self.api_key:
            self.needs_configuration = False

    @beartype
    def select_history(self, index: int) -> str:
        """
        Make a history entry the current address.

        Raises:
            IndexError: If there is no entry at ``index``
        """
        self.address = self.history[index]
        return self.address

    def _remember(self, address: str) -> None:
        if address in self.history:
            return
        self.history = [address, *self.history][:HISTORY_LIMIT]
        self.store.set_json(HISTORY_KEY, self.history)

    def _validate(self, address: str) -> None:
        if not self.api_key:
            raise ConfigurationError(MISSING_API_KEY_MESSAGE)
        if not address:
            raise ValidationError(MISSING_ADDRESS_MESSAGE)
        if not is_valid_address(address):
            raise ValidationError(INVALID_ADDRESS_MESSAGE)

    @beartype
    async def search(self, address: str | None = None) -> QueryResult | None:
        """
        Run today's query for ``address`` (or the current address).

        Returns:
            The published result, or None when the query was rejected,
            ignored because another one is running, or failed
        """
        if self.loading:
            logger.warning("Query already in progress, ignoring submit")
            return None

        if address is not None:
            self.address = address.strip()

        self.status = QueryStatus.IDLE
        try:
            self._validate(self.address)
        except ConfigurationError as e:
            self.error = str(e)
            self.needs_configuration = True
            return None
        except ValidationError as e:
            self.error = str(e)
            return None

        self.status = QueryStatus.LOADING
        self.error = ""
        self.needs_configuration = False
        self.result = None
        started = time.monotonic()
        address = normalize_address(self.address)
        logger.start_query(address)

        try:
            result = await self._run_pipeline(address)
        except TrackerError:
            logger.exception(f"Query for {self.address} failed")
            self.status = QueryStatus.FAILED
            self.error = REQUEST_FAILED_MESSAGE
            return None
        except Exception:
            self.status = QueryStatus.FAILED
            self.error = REQUEST_FAILED_MESSAGE
            raise

        self.result = result
        self.status = QueryStatus.SUCCESS
        self._remember(result.address)

        logger.record_metric("query_seconds", time.monotonic() - started)
        logger.record_metric("interactions_today", result.tx_count)
        logger.record_metric("trade_records", len(result.pnl.records))
        return result

    async def _run_pipeline(self, address: str) -> QueryResult:
        window = today_window(self.clock())

        async with self.client_factory(self.api_key) as client:
            start_block = await BlockWindowResolver(client).resolve(window.start)

            entry = self.transaction_store.get(address)
            cached = entry.transactions if entry else []
            resume_block = self.transaction_store.resume_block(address, start_block)

            fetched = await client.get_transactions(address, resume_block)
            transactions = self.transaction_store.merge_and_get(address, fetched, cached)

            today_txs = filter_interactions(transactions, window, TARGET_ADDRESS)
            logger.info(f"{address}: {len(today_txs)} interactions today ({len(transactions)} cached)")

            pnl = PNLResult.empty()
            if today_txs:
                transfers = await TransferFetcher(client).fetch(address, start_block)
                today_transfers = filter_transfers_in_window(transfers, window)
                pnl = reconcile(today_transfers, today_txs, address, TARGET_ADDRESS)

        self.transaction_store.save(address, transactions)
        return QueryResult(address=address, tx_count=len(today_txs), pnl=pnl)
