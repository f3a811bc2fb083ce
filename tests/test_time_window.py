"""Tests for the daily analysis window."""

from __future__ import annotations

from datetime import datetime

from bsc_tracker.utils.time_window import TimeWindow, today_window


def test_today_window_bounds() -> None:
    """Test the window runs from 08:00:00 to 23:59:59 local time."""
    window = today_window(datetime(2026, 10, 19, 15, 30, 12))

    assert window.start == int(datetime(2026, 10, 19, 8, 0, 0).timestamp())
    assert window.end == int(datetime(2026, 10, 19, 23, 59, 59).timestamp())


def test_today_window_ignores_time_of_day() -> None:
    """Test the window depends only on the calendar day."""
    early = today_window(datetime(2026, 10, 19, 0, 5))
    late = today_window(datetime(2026, 10, 19, 23, 55))

    assert early == late


def test_time_window_contains_is_inclusive() -> None:
    """Test both bounds belong to the window."""
    window = TimeWindow(start=100, end=200)

    assert window.contains(100)
    assert window.contains(200)
    assert not window.contains(99)
    assert not window.contains(201)
