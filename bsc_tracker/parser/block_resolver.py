"""Resolve wall-clock instants to block numbers."""

from __future__ import annotations

from beartype import beartype

from bsc_tracker.parser.explorer_client import BscScanClient
from bsc_tracker.utils.exceptions import ConfigurationError
from bsc_tracker.utils.logger import get_logger

logger = get_logger(__name__)


class BlockWindowResolver:
    """Turns the start of the analysis window into a starting block."""

    def __init__(self, client: BscScanClient) -> None:
        self.client = client

    @beartype
    async def resolve(self, timestamp: int) -> int:
        """
        Get the latest block whose timestamp is at or before ``timestamp``.

        Args:
            timestamp: Unix timestamp in seconds

        Returns:
            Block number

        Raises:
            ConfigurationError: If the client has no API key
            UpstreamError: If the lookup fails
        """
        if not self.client.api_key:
            raise ConfigurationError("BscScan API key is not configured")

        block_number = await self.client.get_block_number_by_time(timestamp, closest="before")
        logger.debug(f"Timestamp {timestamp} resolved to block {block_number}")
        return block_number
