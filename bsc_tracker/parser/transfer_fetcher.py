"""Token transfer retrieval."""

from __future__ import annotations

from beartype import beartype

from bsc_tracker.parser.explorer_client import BscScanClient
from bsc_tracker.parser.models import TokenTransfer
from bsc_tracker.utils.config import END_BLOCK, PAGE_SIZE
from bsc_tracker.utils.logger import get_logger

logger = get_logger(__name__)


class TransferFetcher:
    """Fetches the newest page of token transfers for an account."""

    def __init__(self, client: BscScanClient, page_size: int = PAGE_SIZE) -> None:
        self.client = client
        self.page_size = page_size

    @beartype
    async def fetch(self, address: str, start_block: int) -> list[TokenTransfer]:
        """
        Fetch token transfers for ``address`` from ``start_block`` onwards.

        Args:
            address: Normalized account address
            start_block: First block to scan

        Returns:
            Transfers newest-first, at most ``page_size`` of them; empty when
            the explorer reports no results

        Raises:
            UpstreamError: If the request itself fails
        """
        transfers = await self.client.get_token_transfers(
            address,
            start_block,
            end_block=END_BLOCK,
            page=1,
            offset=self.page_size,
            sort="desc",
        )
        logger.debug(f"Fetched {len(transfers)} token transfers for {address} from block {start_block}")
        return transfers
