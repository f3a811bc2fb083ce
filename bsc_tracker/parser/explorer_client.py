"""BscScan explorer API client for HTTP requests."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Mapping

from beartype import beartype
from httpx import AsyncClient, HTTPError

from bsc_tracker.parser.models import TokenTransfer, Transaction
from bsc_tracker.utils.config import (
    API_RATE_LIMIT,
    BSCSCAN_API_URL,
    END_BLOCK,
    HTTP_TIMEOUT,
    PAGE_SIZE,
)
from bsc_tracker.utils.exceptions import UpstreamError
from bsc_tracker.utils.logger import get_logger

logger = get_logger(__name__)

SUCCESS_STATUS = "1"


class BscScanClient:
    """Async client for the etherscan-style BscScan API."""

    def __init__(
        self,
        api_key: str = "",
        base_url: str = BSCSCAN_API_URL,
        rate_limit: float = API_RATE_LIMIT,
        http_client: AsyncClient | None = None,
    ) -> None:
        """
        Initialize the async API client.

        Args:
            api_key: BscScan API key (may be empty; callers check it)
            base_url: Explorer API endpoint
            rate_limit: Maximum requests per second
            http_client: Optional preconfigured httpx client
        """
        self.api_key = api_key
        self.base_url = base_url
        self.rate_limit = rate_limit
        self.last_request_time = 0.0
        self.client = http_client or AsyncClient(timeout=HTTP_TIMEOUT)
        self._rate_limit_lock = asyncio.Lock()

    async def _wait_for_rate_limit(self) -> None:
        """Wait if necessary to respect rate limits."""
        async with self._rate_limit_lock:
            current_time = time.time()
            time_since_last = current_time - self.last_request_time
            min_interval = 1.0 / self.rate_limit

            if time_since_last < min_interval:
                sleep_time = min_interval - time_since_last
                await asyncio.sleep(sleep_time)

            self.last_request_time = time.time()

    @beartype
    async def _request(self, params: Mapping[str, object]) -> dict[str, object]:
        """
        Make a GET request to the explorer and decode its JSON envelope.

        Args:
            params: Query parameters without the API key

        Returns:
            Decoded ``{"status", "message", "result"}`` envelope

        Raises:
            UpstreamError: If the request fails or the body is not a JSON object
        """
        await self._wait_for_rate_limit()

        query = {**params, "apikey": self.api_key}
        try:
            response = await self.client.get(self.base_url, params=query)
            response.raise_for_status()
            payload = response.json()
        except (HTTPError, ValueError) as e:
            logger.warning(f"Explorer request {params.get('action')} failed: {e}")
            raise UpstreamError(f"Explorer request {params.get('action')} failed") from e

        if not isinstance(payload, dict):
            raise UpstreamError(f"Unexpected explorer response for {params.get('action')}")
        return payload

    @staticmethod
    def _is_success(payload: Mapping[str, object]) -> bool:
        return str(payload.get("status")) == SUCCESS_STATUS

    @staticmethod
    def _result_list(payload: Mapping[str, object], action: str) -> list[Mapping[str, object]]:
        result = payload.get("result")
        if not isinstance(result, list):
            raise UpstreamError(f"Explorer {action} result is not a list")
        if not all(isinstance(item, Mapping) for item in result):
            raise UpstreamError(f"Explorer {action} result contains a non-object record")
        return result

    @beartype
    async def get_block_number_by_time(self, timestamp: int, closest: str = "before") -> int:
        """
        Resolve the block produced closest to a unix timestamp.

        Args:
            timestamp: Unix timestamp in seconds
            closest: Rounding policy, "before" or "after"

        Returns:
            Block number

        Raises:
            UpstreamError: If the lookup fails or returns a non-success status
        """
        payload = await self._request(
            {
                "module": "block",
                "action": "getblocknobytime",
                "timestamp": timestamp,
                "closest": closest,
            },
        )
        if not self._is_success(payload):
            logger.warning(f"getblocknobytime returned status {payload.get('status')}: {payload.get('message')}")
            raise UpstreamError("Failed to resolve block number")

        try:
            return int(str(payload.get("result")))
        except ValueError as e:
            raise UpstreamError(f"Invalid block number: {payload.get('result')}") from e

    @beartype
    async def get_transactions(
        self,
        address: str,
        start_block: int,
        end_block: int = END_BLOCK,
        page: int = 1,
        offset: int = PAGE_SIZE,
        sort: str = "desc",
    ) -> list[Transaction]:
        """
        Fetch native transactions for an address.

        Args:
            address: Normalized account address
            start_block: First block to scan
            end_block: Last block to scan
            page: Page number
            offset: Page size
            sort: "asc" or "desc"

        Returns:
            Parsed transactions, in explorer order

        Raises:
            UpstreamError: On request failure, non-success status or bad records
        """
        payload = await self._request(
            {
                "module": "account",
                "action": "txlist",
                "address": address,
                "startblock": start_block,
                "endblock": end_block,
                "page": page,
                "offset": offset,
                "sort": sort,
            },
        )
        if not self._is_success(payload):
            logger.warning(f"txlist returned status {payload.get('status')}: {payload.get('message')}")
            raise UpstreamError("Failed to fetch transactions")

        try:
            return [Transaction.from_api(item) for item in self._result_list(payload, "txlist")]
        except (KeyError, ValueError) as e:
            raise UpstreamError(f"Malformed transaction record: {e}") from e

    @beartype
    async def get_token_transfers(
        self,
        address: str,
        start_block: int,
        end_block: int = END_BLOCK,
        page: int = 1,
        offset: int = PAGE_SIZE,
        sort: str = "desc",
    ) -> list[TokenTransfer]:
        """
        Fetch BEP-20 token transfers for an address.

        A non-success status is indistinguishable from "no transfers" and
        yields an empty list.

        Raises:
            UpstreamError: On request failure or bad records
        """
        payload = await self._request(
            {
                "module": "account",
                "action": "tokentx",
                "address": address,
                "startblock": start_block,
                "endblock": end_block,
                "page": page,
                "offset": offset,
                "sort": sort,
            },
        )
        if not self._is_success(payload):
            logger.info(f"tokentx returned no results: {payload.get('message')}")
            return []

        try:
            return [TokenTransfer.from_api(item) for item in self._result_list(payload, "tokentx")]
        except (KeyError, ValueError) as e:
            raise UpstreamError(f"Malformed token transfer record: {e}") from e

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> BscScanClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()
