"""Filtering and PNL analysis of explorer records."""

from __future__ import annotations

from bsc_tracker.analysis.interaction_filter import filter_interactions, filter_transfers_in_window
from bsc_tracker.analysis.pnl_reconciler import PNLResult, reconcile
from bsc_tracker.analysis.volume_tier import classify_volume

__all__ = [
    "PNLResult",
    "classify_volume",
    "filter_interactions",
    "filter_transfers_in_window",
    "reconcile",
]
