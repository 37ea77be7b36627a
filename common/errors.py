"""Exception types for the crypto portfolio tracker.

None of these are fatal: validation and export errors are reported back to
the user, fetch errors leave the last-known prices in place, and storage
parse errors are treated as an empty holding list.
"""
from __future__ import annotations

from typing import Any, Optional


class TrackerError(Exception):
    """Base exception for all tracker errors."""

    pass


class ValidationError(TrackerError):
    """A holding request is missing a field or carries an invalid value."""

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}={value!r}: {reason}")


class FetchError(TrackerError):
    """Price refresh failed at the transport or HTTP level."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class StorageParseError(TrackerError):
    """Persisted holdings could not be decoded into the expected shape."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Stored value for {key!r} is unreadable: {reason}")


class NothingToExportError(TrackerError):
    """Export was requested while the portfolio holds nothing."""

    def __init__(self, message: str = "No holdings to export"):
        super().__init__(message)
