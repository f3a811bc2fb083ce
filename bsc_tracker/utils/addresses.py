"""Address normalization helpers."""

from __future__ import annotations

from beartype import beartype
from web3 import Web3


@beartype
def normalize_address(address: str | None) -> str:
    """
    Return the canonical (lowercase, stripped) form of an address.

    Every address is normalized once when it enters the system so that
    comparisons elsewhere are plain string equality.
    """
    if not address:
        return ""
    return address.strip().lower()


@beartype
def is_valid_address(address: str) -> bool:
    """Check that the string is a 20-byte hex address."""
    return bool(address) and Web3.is_address(address)


@beartype
def to_display_address(address: str) -> str:
    """
    Format an address for display using the EIP-55 checksum.

    Falls back to the raw value for anything web3 does not accept
    (e.g. the empty receiver of a contract creation).
    """
    if not is_valid_address(address):
        return address
    return Web3.to_checksum_address(address)
