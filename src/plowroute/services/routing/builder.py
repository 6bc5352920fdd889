"""Priority-weighted greedy route construction.

Stops are picked one at a time by a blended score of proximity and paid urgency
(nearest-neighbor with priority). The pick order is then walked once more from the
operator's real start position and time to produce the timings shown to the
operator and customer. The same walk is used by manual reordering so both paths
always agree on timing math.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Sequence

from ...config import settings
from ...errors import EngineValidationError
from ...models.domain import Coordinate, Job, JobStatus, Operator
from ..geospatial import haversine_miles
from ..travel import round_half_up, round_minutes, travel_minutes
from .models import OptimizedRoute, RouteStats, RouteStop, RoutingParameters
from .priority import MAX_PRIORITY_WEIGHT, priority_weight
from .service_time import ServiceDurationResolver

REORDERABLE_STATUSES = (JobStatus.PENDING, JobStatus.EN_ROUTE)


@dataclass(slots=True)
class JobPartition:
    completed: list[Job] = field(default_factory=list)
    in_progress: list[Job] = field(default_factory=list)
    candidates: list[Job] = field(default_factory=list)


def partition_jobs(jobs: Sequence[Job]) -> JobPartition:
    """Split jobs into completed, locked in-progress, and reorderable candidates.

    Cancelled jobs are dropped. Duplicate job ids keep their first occurrence.
    """
    partition = JobPartition()
    seen: set[str] = set()
    for job in jobs:
        if job.job_id in seen:
            logging.warning(f"Job {job.job_id} listed more than once, using first occurrence")
            continue
        seen.add(job.job_id)
        status = JobStatus(job.status)
        if status == JobStatus.COMPLETED:
            partition.completed.append(job)
        elif status == JobStatus.IN_PROGRESS:
            partition.in_progress.append(job)
        elif status in REORDERABLE_STATUSES:
            partition.candidates.append(job)

    if len(partition.in_progress) > 1:
        logging.warning(
            f"{len(partition.in_progress)} jobs are in progress at once "
            f"({', '.join(job.job_id for job in partition.in_progress)}); keeping them in input order"
        )
    return partition


def _resolve_start(start_time: datetime | None) -> datetime:
    return start_time if start_time is not None else datetime.now(timezone.utc)


def walk_route(
    operator: Operator,
    ordered_jobs: Sequence[Job],
    *,
    completed: Sequence[Job] = (),
    start_time: datetime,
    resolver: ServiceDurationResolver,
    parameters: RoutingParameters,
) -> OptimizedRoute:
    """Propagate arrival/departure times and distances along a fixed stop order."""

    stops: list[RouteStop] = []
    route_path: list[Coordinate] = [operator.coordinate]
    current_location = operator.coordinate
    current_time = start_time
    total_distance = 0.0
    total_travel = 0.0
    total_service = 0.0

    for sequence, job in enumerate(ordered_jobs, start=1):
        distance = haversine_miles(current_location, job.coordinate)
        travel = travel_minutes(distance, parameters.average_speed_mph)
        service = resolver.service_minutes(job)

        arrival = current_time + timedelta(minutes=travel)
        departure = arrival + timedelta(minutes=service)
        stops.append(
            RouteStop(
                job=job,
                sequence=sequence,
                estimated_arrival=arrival,
                estimated_departure=departure,
                distance_from_prev_miles=round_half_up(distance, 1),
                travel_time_from_prev_min=round_minutes(travel),
            )
        )
        route_path.append(job.coordinate)
        total_distance += distance
        total_travel += travel
        total_service += service
        current_location = job.coordinate
        current_time = departure

    stats = RouteStats(
        stop_count=len(stops),
        total_distance_miles=round_half_up(total_distance, 1),
        total_travel_min=round_minutes(total_travel),
        total_service_min=round_minutes(total_service),
        total_time_min=round_minutes(total_travel + total_service),
        estimated_end_time=current_time,
    )
    return OptimizedRoute(
        operator_id=operator.operator_id,
        stops=stops,
        stats=stats,
        completed=list(completed),
        route_path=route_path,
    )


def empty_route(operator: Operator, partition: JobPartition, start_time: datetime) -> OptimizedRoute:
    """Route for an operator with no pending work: listed stops, no travel."""

    listed = [*partition.completed, *partition.in_progress]
    stops = [
        RouteStop(
            job=job,
            sequence=sequence,
            estimated_arrival=start_time,
            estimated_departure=start_time,
            distance_from_prev_miles=0.0,
            travel_time_from_prev_min=0,
        )
        for sequence, job in enumerate(listed, start=1)
    ]
    stats = RouteStats(
        stop_count=0,
        total_distance_miles=0.0,
        total_travel_min=0,
        total_service_min=0,
        total_time_min=0,
        estimated_end_time=start_time,
    )
    return OptimizedRoute(
        operator_id=operator.operator_id,
        stops=stops,
        stats=stats,
        completed=list(partition.completed),
        route_path=[operator.coordinate],
    )


def _selection_score(
    distance: float,
    weight: int,
    priority_weight_fraction: float,
    horizon_miles: float,
) -> float:
    normalized_distance = max(0.0, 1.0 - distance / horizon_miles)
    normalized_priority = weight / MAX_PRIORITY_WEIGHT
    return normalized_distance * (1 - priority_weight_fraction) + normalized_priority * priority_weight_fraction


def build_route(
    operator: Operator,
    jobs: Sequence[Job],
    *,
    priority_weight_fraction: float | None = None,
    start_time: datetime | None = None,
    resolver: ServiceDurationResolver | None = None,
    parameters: RoutingParameters | None = None,
) -> OptimizedRoute:
    """Order an operator's outstanding jobs by blended proximity and priority.

    Args:
        operator: Operator whose current position is the route start.
        jobs: All of the operator's jobs; status decides how each one is used.
        priority_weight_fraction: 0 routes purely by distance, 1 purely by weight.
        start_time: Clock time the route starts at (defaults to now, UTC).
        resolver: Service duration lookup (defaults to job estimates only).
        parameters: Speed, default service time and distance horizon.

    Returns:
        OptimizedRoute with the locked in-progress stops first, then the greedy order.
    """
    fraction = settings.default_priority_weight_fraction if priority_weight_fraction is None else priority_weight_fraction
    if not math.isfinite(fraction) or not 0.0 <= fraction <= 1.0:
        raise EngineValidationError(f"priority_weight_fraction must be within [0, 1], got {fraction}.")
    parameters = parameters or RoutingParameters()
    resolver = resolver or ServiceDurationResolver(parameters=parameters)
    start = _resolve_start(start_time)

    partition = partition_jobs(jobs)
    if not partition.candidates:
        return empty_route(operator, partition, start)

    ordered: list[Job] = list(partition.in_progress)
    remaining = list(partition.candidates)
    current_location = operator.coordinate
    provisional_time = start
    for job in partition.in_progress:
        current_location = job.coordinate
        provisional_time += timedelta(minutes=resolver.service_minutes(job))

    while remaining:
        best_index = -1
        best_score = -math.inf
        best_distance = 0.0
        for index, job in enumerate(remaining):
            distance = haversine_miles(current_location, job.coordinate)
            score = _selection_score(
                distance,
                priority_weight(job),
                fraction,
                parameters.distance_horizon_miles,
            )
            if score > best_score:
                best_index, best_score, best_distance = index, score, distance

        selected = remaining.pop(best_index)
        ordered.append(selected)
        provisional_time += timedelta(
            minutes=travel_minutes(best_distance, parameters.average_speed_mph) + resolver.service_minutes(selected)
        )
        current_location = selected.coordinate

    logging.debug(
        f"Selected order for operator {operator.operator_id}: {[job.job_id for job in ordered]} "
        f"(provisional finish {provisional_time.isoformat()})"
    )
    return walk_route(
        operator,
        ordered,
        completed=partition.completed,
        start_time=start,
        resolver=resolver,
        parameters=parameters,
    )
