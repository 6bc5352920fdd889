"""Exception types raised by the routing and ETA engine."""

from __future__ import annotations


class EngineValidationError(ValueError):
    """Raised when a numeric input (duration, weight, distance) is malformed."""


class CoordinateValidationError(EngineValidationError):
    """Raised when a latitude/longitude pair is outside the valid range."""


class ReorderIndexError(IndexError):
    """Raised when a reorder index falls outside the reorderable stop list."""


class NotFoundError(LookupError):
    """Raised by repositories when a requested record does not exist."""
