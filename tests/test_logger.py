"""Tests for the query metrics logger."""

from __future__ import annotations

import logging

import pytest

from bsc_tracker.utils.logger import PerformanceLogger


@pytest.fixture
def perf_logger(tmp_path, request) -> PerformanceLogger:
    return PerformanceLogger(f"tests.logger.{request.node.name}", log_file=tmp_path / "logs" / "tracker.log")


def test_log_file_directory_is_created(tmp_path, perf_logger: PerformanceLogger) -> None:
    """Test the file handler creates its directory on first use."""
    perf_logger.info("hello")

    assert (tmp_path / "logs" / "tracker.log").exists()


def test_start_query_resets_metrics(perf_logger: PerformanceLogger) -> None:
    """Test metrics of a previous query do not leak into the next one."""
    perf_logger.start_query("0xaaa")
    perf_logger.record_metric("trade_records", 3)

    perf_logger.start_query("0xbbb")

    assert perf_logger.metrics == {}
    assert perf_logger.query_address == "0xbbb"


def test_log_summary_names_the_queried_address(
    perf_logger: PerformanceLogger, caplog: pytest.LogCaptureFixture
) -> None:
    """Test the summary is headed by the address and lists every metric."""
    perf_logger.start_query("0xaaa")
    perf_logger.record_metric("interactions_today", 2)
    perf_logger.record_metric("query_seconds", 0.5)

    with caplog.at_level(logging.INFO, logger=perf_logger.logger.name):
        perf_logger.log_summary()

    messages = [record.getMessage() for record in caplog.records]
    assert messages == [
        "=== Query Summary: 0xaaa ===",
        "interactions_today: 2.00",
        "query_seconds: 0.50",
    ]


def test_log_summary_without_metrics_is_silent(
    perf_logger: PerformanceLogger, caplog: pytest.LogCaptureFixture
) -> None:
    """Test nothing is logged before any query recorded metrics."""
    with caplog.at_level(logging.DEBUG, logger=perf_logger.logger.name):
        perf_logger.log_summary()

    assert caplog.records == []
