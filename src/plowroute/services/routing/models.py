"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from ...config import settings
from ...models.domain import Coordinate, Job


@dataclass(slots=True)
class RoutingParameters:
    average_speed_mph: float = settings.average_speed_mph
    default_service_minutes: float = settings.default_service_minutes
    distance_horizon_miles: float = settings.distance_horizon_miles
    eta_minutes_per_job_ahead: float = settings.eta_minutes_per_job_ahead


@dataclass(slots=True)
class RouteStop:
    job: Job
    sequence: int
    estimated_arrival: datetime
    estimated_departure: datetime
    distance_from_prev_miles: float
    travel_time_from_prev_min: int


@dataclass(slots=True)
class RouteStats:
    stop_count: int
    total_distance_miles: float
    total_travel_min: int
    total_service_min: int
    total_time_min: int
    estimated_end_time: datetime


@dataclass(slots=True)
class OptimizedRoute:
    operator_id: str
    stops: List[RouteStop]
    stats: RouteStats
    completed: List[Job] = field(default_factory=list)
    route_path: List[Coordinate] = field(default_factory=list)

    @property
    def job_ids(self) -> list[str]:
        return [stop.job.job_id for stop in self.stops]
