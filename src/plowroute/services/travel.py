"""Travel time estimation and display rounding shared by routes and ETAs."""

from __future__ import annotations

import math

from ..config import settings
from ..errors import EngineValidationError


def travel_minutes(distance_miles: float, average_speed_mph: float | None = None) -> float:
    """Convert a straight-line distance into driving minutes at a fixed average speed."""

    speed = settings.average_speed_mph if average_speed_mph is None else average_speed_mph
    if not math.isfinite(distance_miles) or distance_miles < 0:
        raise EngineValidationError(f"Distance must be a non-negative number, got {distance_miles}.")
    if not math.isfinite(speed) or speed <= 0:
        raise EngineValidationError(f"Average speed must be positive, got {speed}.")
    return (distance_miles / speed) * 60.0


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up (2.5 -> 3), unlike the built-in banker's rounding."""

    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def round_minutes(value: float) -> int:
    return int(round_half_up(value))
