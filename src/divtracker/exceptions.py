"""Custom exceptions for the dividend tracker.

Only I/O failures are exceptional. Invalid numeric input (non-positive
price, empty series) produces neutral results instead of raising, and a
missing monthly record is the normal case handled by reconciliation.
"""


class DividendTrackerError(Exception):
    """Base exception for all dividend tracker errors."""


class FetchError(DividendTrackerError):
    """Raised when a price or dividend provider fails or returns bad data."""
