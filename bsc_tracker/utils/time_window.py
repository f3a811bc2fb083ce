"""Daily analysis window."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from beartype import beartype

from bsc_tracker.utils.config import WINDOW_START_HOUR


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive [start, end] range in unix seconds."""

    start: int
    end: int

    def contains(self, timestamp: int) -> bool:
        return self.start <= timestamp <= self.end


@beartype
def today_window(now: datetime | None = None) -> TimeWindow:
    """
    Build today's window from local 08:00:00 to 23:59:59.

    Args:
        now: Reference instant (local time if naive); defaults to now

    Returns:
        TimeWindow with both bounds in unix seconds
    """
    if now is None:
        now = datetime.now()

    start = now.replace(hour=WINDOW_START_HOUR, minute=0, second=0, microsecond=0)
    end = now.replace(hour=23, minute=59, second=59, microsecond=999000)
    return TimeWindow(start=int(start.timestamp()), end=int(end.timestamp()))
