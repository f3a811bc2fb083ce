"""Volume tier scoring."""

from __future__ import annotations

from decimal import Decimal

from beartype import beartype

from bsc_tracker.utils.config import VOLUME_TIER_CAP


@beartype
def classify_volume(total_volume: Decimal | float | int, cap: int = VOLUME_TIER_CAP) -> int:
    """
    Map a traded volume to a tier: floor(log2(volume)), 0 below 2.

    The threshold starts at 2 and doubles; every threshold reached raises
    the tier by one. ``cap`` bounds the loop, so the highest tier is
    ``cap - 1``.

    Args:
        total_volume: Buy plus sell volume in stablecoin units
        cap: Loop bound

    Returns:
        Tier between 0 and ``cap - 1``
    """
    if total_volume < 2:
        return 0

    level = 1
    threshold = 2
    while total_volume >= threshold and level < cap:
        level += 1
        threshold *= 2

    return level - 1
