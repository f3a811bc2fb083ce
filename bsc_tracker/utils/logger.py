"""Structured logging configuration for tracker operations."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOGS_DIR = Path(__file__).parent.parent.parent / "logs"
LOG_FILE = LOGS_DIR / "bsc_tracker.log"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"


def _build_handlers(log_file: Path) -> list[logging.Handler]:
    """INFO and above to stdout, everything to ``log_file``."""
    log_file.parent.mkdir(parents=True, exist_ok=True)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))

    return [console_handler, file_handler]


class PerformanceLogger:
    """Logger that also keeps the metrics of the query in progress."""

    def __init__(self, name: str, log_file: Path = LOG_FILE) -> None:
        """
        Initialize the logger.

        Args:
            name: Logger name (usually module name)
            log_file: File receiving DEBUG and above
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)

        # Handlers are attached once per logger name
        if not self.logger.handlers:
            for handler in _build_handlers(log_file):
                self.logger.addHandler(handler)

        self.metrics: dict[str, float] = {}
        self.query_address = ""

    def debug(self, message: str, *args: object, **kwargs: object) -> None:
        """Log debug message."""
        self.logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: object, **kwargs: object) -> None:
        """Log info message."""
        self.logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: object, **kwargs: object) -> None:
        """Log warning message."""
        self.logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: object, **kwargs: object) -> None:
        """Log error message."""
        self.logger.error(message, *args, **kwargs)

    def exception(self, message: str, *args: object, **kwargs: object) -> None:
        """Log exception with traceback."""
        self.logger.exception(message, *args, **kwargs)

    def start_query(self, address: str) -> None:
        """
        Clear metrics left over from the previous query.

        Args:
            address: Address the following metrics belong to
        """
        self.metrics = {}
        self.query_address = address

    def record_metric(self, name: str, value: float) -> None:
        """
        Record a metric of the current query.

        Args:
            name: Metric name (e.g., "query_seconds", "trade_records")
            value: Metric value
        """
        self.metrics[name] = value
        self.debug(f"Metric {name} for {self.query_address or '-'}: {value:.2f}")

    def log_summary(self) -> None:
        """Log the metrics of the last query."""
        if not self.metrics:
            return

        self.info(f"=== Query Summary: {self.query_address} ===")
        for name, value in self.metrics.items():
            self.info(f"{name}: {value:.2f}")


def get_logger(name: str) -> PerformanceLogger:
    """
    Get or create a logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        PerformanceLogger instance
    """
    return PerformanceLogger(name)
