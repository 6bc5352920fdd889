"""Routing orchestration service: request payloads and repository data in, responses out."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Sequence

from ...data.fleet_repository import FleetRepository
from ...models.domain import Coordinate, Job, Operator, PropertyProfile
from ...schemas.routing import (
    CoordinateModel,
    JobModel,
    OperatorModel,
    PropertyProfileModel,
    RouteOptimizeRequest,
    RouteReorderRequest,
    RouteResponse,
    RouteStatsModel,
    RouteStopModel,
)
from .builder import build_route
from .models import OptimizedRoute, RoutingParameters
from .mutator import reorder_route
from .recompute import RouteRecomputeRegistry
from .service_time import ServiceDurationResolver


def _coordinate(model: CoordinateModel) -> Coordinate:
    return Coordinate(latitude=model.latitude, longitude=model.longitude)


def _coordinate_model(coordinate: Coordinate) -> CoordinateModel:
    return CoordinateModel(latitude=coordinate.latitude, longitude=coordinate.longitude)


def operator_from_model(model: OperatorModel) -> Operator:
    return Operator(
        operator_id=model.operator_id,
        name=model.name or model.operator_id,
        coordinate=_coordinate(model.location),
        status=model.status,
    )


def job_from_model(model: JobModel) -> Job:
    return Job(
        job_id=model.job_id,
        customer_id=model.customer_id,
        operator_id=model.operator_id,
        status=model.status,
        coordinate=_coordinate(model.location),
        scheduled_date=model.scheduled_date,
        priority=model.priority,
        priority_tier=model.priority_tier,
        estimated_duration_min=model.estimated_duration_min,
        actual_duration_min=model.actual_duration_min,
        actual_start_time=model.actual_start_time,
        price=model.price,
    )


def _resolver_from_profiles(
    profiles: Sequence[PropertyProfileModel] | None,
    parameters: RoutingParameters,
) -> ServiceDurationResolver:
    lookup = {
        profile.customer_id: PropertyProfile(**profile.model_dump())
        for profile in profiles or []
    }
    return ServiceDurationResolver(lookup.get, parameters=parameters)


def route_to_response(route: OptimizedRoute) -> RouteResponse:
    return RouteResponse(
        operator_id=route.operator_id,
        stops=[
            RouteStopModel(
                sequence=stop.sequence,
                job_id=stop.job.job_id,
                customer_id=stop.job.customer_id,
                status=stop.job.status,
                location=_coordinate_model(stop.job.coordinate),
                priority=stop.job.priority,
                priority_tier=stop.job.priority_tier,
                estimated_arrival=stop.estimated_arrival,
                estimated_departure=stop.estimated_departure,
                distance_from_prev_miles=stop.distance_from_prev_miles,
                travel_time_from_prev_min=stop.travel_time_from_prev_min,
            )
            for stop in route.stops
        ],
        stats=RouteStatsModel(
            stop_count=route.stats.stop_count,
            total_distance_miles=route.stats.total_distance_miles,
            total_travel_min=route.stats.total_travel_min,
            total_service_min=route.stats.total_service_min,
            total_time_min=route.stats.total_time_min,
            estimated_end_time=route.stats.estimated_end_time,
        ),
        completed_job_ids=[job.job_id for job in route.completed],
        route_path=[_coordinate_model(point) for point in route.route_path],
    )


def optimize_route(payload: RouteOptimizeRequest) -> RouteResponse:
    parameters = RoutingParameters()
    route = build_route(
        operator_from_model(payload.operator),
        [job_from_model(job) for job in payload.jobs],
        priority_weight_fraction=payload.priority_weight_fraction,
        start_time=payload.start_time,
        resolver=_resolver_from_profiles(payload.property_profiles, parameters),
        parameters=parameters,
    )
    logging.info(
        f"Optimized route for operator {route.operator_id}: {route.stats.stop_count} stops, "
        f"{route.stats.total_distance_miles} mi"
    )
    return route_to_response(route)


def reorder(payload: RouteReorderRequest) -> RouteResponse:
    parameters = RoutingParameters()
    route = reorder_route(
        operator_from_model(payload.operator),
        [job_from_model(job) for job in payload.jobs],
        payload.from_index,
        payload.to_index,
        start_time=payload.start_time,
        resolver=_resolver_from_profiles(payload.property_profiles, parameters),
        parameters=parameters,
    )
    return route_to_response(route)


def recompute_operator_route(
    operator_id: str,
    *,
    repository: FleetRepository,
    registry: RouteRecomputeRegistry,
    priority_weight_fraction: float | None = None,
    start_time: datetime | None = None,
) -> OptimizedRoute:
    """Recompute an operator's route from the repository; newer requests win.

    If another recompute for the same operator began while this one was running,
    this result is not adopted. The newer request's route is returned instead once
    it has been adopted; until then the caller gets its own result.
    """
    ticket = registry.begin(operator_id)
    operator = repository.get_operator(operator_id)
    jobs = repository.jobs_for_operator(operator_id)
    if not registry.is_current(ticket):
        newer = registry.newer_than(ticket)
        if newer is not None:
            return newer
    parameters = RoutingParameters()
    route = build_route(
        operator,
        jobs,
        priority_weight_fraction=priority_weight_fraction,
        start_time=start_time or datetime.now(timezone.utc),
        resolver=ServiceDurationResolver(repository.get_property_profile, parameters=parameters),
        parameters=parameters,
    )
    if registry.adopt(ticket, route):
        return route
    return registry.newer_than(ticket) or route
