"""
Exception hierarchy for the condition tracker.

Every error raised by the tracker derives from TrackerError so callers at the
command surface can report any failure uniformly.
"""

from __future__ import annotations

from typing import Any


class TrackerError(Exception):
    """Base exception for all condition tracker errors.

    Attributes:
        message: Human-readable error message
        details: Optional dictionary of additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(TrackerError):
    """A command was rejected before any state was touched.

    Attributes:
        recipient: Who should be told about the failure ("gm" or a player name)
    """

    def __init__(
        self,
        message: str,
        recipient: str = "gm",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.recipient = recipient


class SyncFailure(TrackerError):
    """The conditions table could not be located or read in the config document."""


class CatalogError(TrackerError):
    """The condition catalog would violate its uniqueness invariant."""


class StorageError(TrackerError):
    """Persisted tracker state could not be read."""
