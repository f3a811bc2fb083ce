"""Data models for explorer records and derived trades."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from beartype import beartype

from bsc_tracker.utils.addresses import normalize_address


@dataclass(frozen=True)
class Transaction:
    """A native transaction as returned by the explorer ``txlist`` action."""

    hash: str
    timestamp: int
    from_address: str
    to_address: str
    block_number: int
    is_error: bool

    @classmethod
    @beartype
    def from_api(cls, data: Mapping[str, object]) -> Transaction:
        """
        Parse a raw explorer record.

        Raises:
            KeyError: If a required field is missing
            ValueError: If a numeric field is not an integer string
        """
        return cls(
            hash=str(data["hash"]),
            timestamp=int(str(data["timeStamp"])),
            from_address=normalize_address(str(data.get("from") or "")),
            to_address=normalize_address(str(data.get("to") or "")),
            block_number=int(str(data["blockNumber"])),
            is_error=str(data.get("isError", "0")) != "0",
        )

    def to_api(self) -> dict[str, str]:
        """Serialize back to the explorer's string-typed shape."""
        return {
            "hash": self.hash,
            "timeStamp": str(self.timestamp),
            "from": self.from_address,
            "to": self.to_address,
            "blockNumber": str(self.block_number),
            "isError": "1" if self.is_error else "0",
        }

    def involves(self, address: str) -> bool:
        return address in (self.from_address, self.to_address)


@dataclass(frozen=True)
class TokenTransfer:
    """A BEP-20 transfer event as returned by the explorer ``tokentx`` action."""

    hash: str
    timestamp: int
    from_address: str
    to_address: str
    value: int  # raw, unscaled; may exceed 64 bits
    token_name: str
    token_symbol: str
    token_decimal: int
    contract_address: str

    @classmethod
    @beartype
    def from_api(cls, data: Mapping[str, object]) -> TokenTransfer:
        """
        Parse a raw explorer record.

        Raises:
            KeyError: If a required field is missing
            ValueError: If a numeric field is not an integer string
        """
        return cls(
            hash=str(data["hash"]),
            timestamp=int(str(data["timeStamp"])),
            from_address=normalize_address(str(data.get("from") or "")),
            to_address=normalize_address(str(data.get("to") or "")),
            value=int(str(data["value"])),
            token_name=str(data.get("tokenName", "")),
            token_symbol=str(data.get("tokenSymbol", "")),
            token_decimal=int(str(data.get("tokenDecimal") or 0)),
            contract_address=normalize_address(str(data.get("contractAddress") or "")),
        )

    @property
    def amount(self) -> Decimal:
        """Value scaled by the token's decimal count."""
        return Decimal(self.value).scaleb(-self.token_decimal)


class TradeSide(str, Enum):
    """Direction of a stablecoin leg relative to the user."""

    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class TradeRecord:
    """A classified stablecoin leg of a counterparty interaction."""

    hash: str
    timestamp: int
    side: TradeSide
    amount: Decimal
    token: str
    stable_amount: Decimal
