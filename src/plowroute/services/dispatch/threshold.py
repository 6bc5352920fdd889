"""Snowfall threshold evaluation for fleet-wide auto-dispatch."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from ...config import settings
from ...errors import EngineValidationError
from ...models.domain import WeatherSample

ACTIVE_MESSAGE = "Auto-dispatch activated! Fleet deployed for snow removal."
BELOW_THRESHOLD_MESSAGE = "Snowfall below auto-dispatch threshold"


@dataclass(slots=True)
class DispatchTrigger:
    threshold_inches: float
    current_inches: float
    is_triggered: bool
    next_trigger_time: Optional[datetime]
    message: str


def _check_inches(name: str, value: float) -> None:
    if not math.isfinite(value) or value < 0:
        raise EngineValidationError(f"{name} must be a non-negative number of inches, got {value}.")


def evaluate_dispatch_trigger(
    sample: WeatherSample,
    *,
    now: datetime | None = None,
    horizon_hours: float | None = None,
) -> DispatchTrigger:
    """Report whether accumulated snowfall has crossed the dispatch threshold.

    This only reports status; acting on it is up to the dispatcher.
    """
    _check_inches("threshold_inches", sample.threshold_inches)
    _check_inches("accumulated_inches", sample.accumulated_inches)
    if not math.isfinite(sample.rate_inches_per_hour):
        raise EngineValidationError(f"rate_inches_per_hour must be finite, got {sample.rate_inches_per_hour}.")

    horizon = settings.dispatch_projection_horizon_hours if horizon_hours is None else horizon_hours
    now = now if now is not None else datetime.now(timezone.utc)
    is_triggered = sample.accumulated_inches >= sample.threshold_inches

    next_trigger_time: Optional[datetime] = None
    if is_triggered:
        message = ACTIVE_MESSAGE
        next_trigger_time = now
    else:
        remaining = sample.threshold_inches - sample.accumulated_inches
        hours_until_trigger = remaining / sample.rate_inches_per_hour if sample.rate_inches_per_hour > 0 else math.inf
        if hours_until_trigger < horizon:
            next_trigger_time = now + timedelta(hours=hours_until_trigger)
            message = (
                f'Auto-dispatch will trigger at {remaining:.1f}" more snowfall '
                f"(est. {hours_until_trigger:.1f} hours)"
            )
        else:
            message = BELOW_THRESHOLD_MESSAGE

    return DispatchTrigger(
        threshold_inches=sample.threshold_inches,
        current_inches=sample.accumulated_inches,
        is_triggered=is_triggered,
        next_trigger_time=next_trigger_time,
        message=message,
    )
