"""Customer-facing arrival estimates.

The customer view does not know the service time of the stops ahead of it, so each
one counts as a flat number of minutes. Distance and travel time come from the same
helpers the route builder uses, so the operator and customer views cannot drift
apart on those.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable, Sequence

from ...errors import EngineValidationError
from ...models.domain import Coordinate, Job, JobStatus, PricingTier, PriorityTier
from ..geospatial import haversine_miles
from ..routing.models import RoutingParameters
from ..travel import round_half_up, round_minutes, travel_minutes

QUEUE_STATUSES = (JobStatus.IN_PROGRESS, JobStatus.EN_ROUTE)


@dataclass(slots=True)
class EtaEstimate:
    minutes: int
    arrival_time: datetime
    distance_miles: float
    jobs_ahead: int


def count_jobs_ahead(jobs: Iterable[Job], operator_id: str, own_job_id: str) -> int:
    """Count the operator's other jobs that are in progress or en route."""

    return sum(
        1
        for job in jobs
        if job.operator_id == operator_id
        and job.job_id != own_job_id
        and JobStatus(job.status) in QUEUE_STATUSES
    )


def base_eta_minutes(
    operator_location: Coordinate,
    customer_location: Coordinate,
    jobs_ahead: int,
    *,
    parameters: RoutingParameters | None = None,
) -> tuple[int, float]:
    """Return the unmodified ETA in whole minutes and the raw distance in miles."""

    if isinstance(jobs_ahead, bool) or not isinstance(jobs_ahead, int) or jobs_ahead < 0:
        raise EngineValidationError(f"jobs_ahead must be a non-negative integer, got {jobs_ahead!r}.")
    parameters = parameters or RoutingParameters()
    distance = haversine_miles(operator_location, customer_location)
    travel = travel_minutes(distance, parameters.average_speed_mph)
    return round_minutes(travel + jobs_ahead * parameters.eta_minutes_per_job_ahead), distance


def apply_tier_modifier(base_minutes: int, tier: PricingTier) -> int:
    if not math.isfinite(tier.eta_modifier) or tier.eta_modifier < 0:
        raise EngineValidationError(f"ETA modifier for tier {tier.tier} must be >= 0, got {tier.eta_modifier}.")
    return round_minutes(base_minutes * tier.eta_modifier)


def project_eta(
    operator_location: Coordinate,
    customer_location: Coordinate,
    jobs_ahead: int,
    tier: PricingTier,
    *,
    now: datetime | None = None,
    parameters: RoutingParameters | None = None,
) -> EtaEstimate:
    """Project when the operator will reach the customer's stop."""

    base_minutes, distance = base_eta_minutes(
        operator_location, customer_location, jobs_ahead, parameters=parameters
    )
    minutes = apply_tier_modifier(base_minutes, tier)
    now = now if now is not None else datetime.now(timezone.utc)
    return EtaEstimate(
        minutes=minutes,
        arrival_time=now + timedelta(minutes=minutes),
        distance_miles=round_half_up(distance, 1),
        jobs_ahead=jobs_ahead,
    )


def preview_tier_etas(
    operator_location: Coordinate,
    customer_location: Coordinate,
    jobs_ahead: int,
    tiers: Sequence[PricingTier],
    *,
    parameters: RoutingParameters | None = None,
) -> dict[str, int]:
    """Projected minutes for each pricing tier, for upgrade/downgrade previews."""

    base_minutes, _ = base_eta_minutes(operator_location, customer_location, jobs_ahead, parameters=parameters)
    return {PriorityTier(tier.tier).value: apply_tier_modifier(base_minutes, tier) for tier in tiers}
