"""On-site service duration lookup."""

from __future__ import annotations

import math
from typing import Callable, Optional

from ...errors import EngineValidationError
from ...models.domain import Job, PropertyProfile
from .models import RoutingParameters

PropertyLookup = Callable[[str], Optional[PropertyProfile]]


def _no_profiles(customer_id: str) -> Optional[PropertyProfile]:
    return None


def _checked_minutes(value: float, source: str) -> float:
    if not math.isfinite(value) or value < 0:
        raise EngineValidationError(f"{source} must be a non-negative number of minutes, got {value}.")
    return float(value)


class ServiceDurationResolver:
    """Resolve how long an operator is expected to spend at a stop.

    A measured property profile wins over the job's own estimate, which in turn
    wins over the configured default. Harder properties (long, steep, cluttered)
    therefore take longer without any change to the routing algorithm.
    """

    def __init__(
        self,
        property_lookup: PropertyLookup | None = None,
        *,
        parameters: RoutingParameters | None = None,
    ) -> None:
        self._lookup = property_lookup or _no_profiles
        self._default = (parameters or RoutingParameters()).default_service_minutes

    def service_minutes(self, job: Job) -> float:
        profile = self._lookup(job.customer_id)
        if profile is not None:
            return _checked_minutes(profile.estimated_clear_time_min, f"Clear time for customer {job.customer_id}")
        if job.estimated_duration_min:
            return _checked_minutes(job.estimated_duration_min, f"Estimated duration for job {job.job_id}")
        return _checked_minutes(self._default, "Default service time")
