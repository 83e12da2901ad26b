"""Domain errors raised by the aggregator and upstream clients.

Errors that reach the HTTP layer carry the status code and public message
the API responds with. Store and fetcher failures never surface here; those
layers log and degrade to an empty result instead.
"""

from __future__ import annotations


class WinterTrackerError(Exception):
    """Base class for errors the API maps to a JSON error response."""

    status_code = 500
    public_message = "Failed to process temperature data"


class InvalidYearRangeError(WinterTrackerError):
    """Raised when the aggregation year bounds are not a valid range."""

    status_code = 400
    public_message = "Invalid year range"


class NoDataAvailableError(WinterTrackerError):
    """Raised when every source came back empty."""

    status_code = 404
    public_message = "No data available"


class MalformedResponseError(ValueError):
    """Raised when an upstream payload doesn't match the expected shape."""
