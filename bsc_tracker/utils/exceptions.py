"""Error hierarchy for the tracker pipeline."""

from __future__ import annotations


class TrackerError(Exception):
    """Base class for every error raised by the query pipeline."""


class ConfigurationError(TrackerError):
    """No explorer API key is configured."""


class ValidationError(TrackerError, ValueError):
    """The queried address is empty or malformed."""


class UpstreamError(TrackerError):
    """The explorer API failed, returned a non-success status or bad data."""
