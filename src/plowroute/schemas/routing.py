"""Routing request/response schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import JobPriority, JobStatus, OperatorStatus, PriorityTier


class CoordinateModel(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class OperatorModel(BaseModel):
    operator_id: str
    name: Optional[str] = None
    location: CoordinateModel
    status: OperatorStatus = OperatorStatus.AVAILABLE


class JobModel(BaseModel):
    job_id: str
    customer_id: str
    operator_id: Optional[str] = None
    status: JobStatus
    location: CoordinateModel
    scheduled_date: date
    priority: JobPriority = JobPriority.NORMAL
    priority_tier: PriorityTier = PriorityTier.STANDARD
    estimated_duration_min: Optional[float] = Field(None, ge=0)
    actual_duration_min: Optional[float] = Field(None, ge=0)
    actual_start_time: Optional[datetime] = None
    price: float = Field(0.0, ge=0)


class PropertyProfileModel(BaseModel):
    customer_id: str
    estimated_clear_time_min: float = Field(..., ge=0)
    difficulty_rating: int = Field(1, ge=1, le=5)
    area_sq_ft: float = Field(0.0, ge=0)
    is_sloped: bool = False


class RouteOptimizeRequest(BaseModel):
    operator: OperatorModel
    jobs: List[JobModel]
    priority_weight_fraction: Optional[float] = Field(
        default=None,
        ge=0,
        le=1,
        description="0 routes purely by distance, 1 purely by priority. Defaults to the configured value.",
    )
    start_time: Optional[datetime] = None
    property_profiles: Optional[List[PropertyProfileModel]] = Field(
        default=None,
        description="Measured clearing times that override the jobs' own estimates.",
    )


class RouteReorderRequest(BaseModel):
    operator: OperatorModel
    jobs: List[JobModel] = Field(..., description="Jobs in their current route order.")
    from_index: int
    to_index: int
    start_time: Optional[datetime] = None
    property_profiles: Optional[List[PropertyProfileModel]] = None


class RouteStopModel(BaseModel):
    sequence: int
    job_id: str
    customer_id: str
    status: JobStatus
    location: CoordinateModel
    priority: JobPriority
    priority_tier: PriorityTier
    estimated_arrival: datetime
    estimated_departure: datetime
    distance_from_prev_miles: float
    travel_time_from_prev_min: int


class RouteStatsModel(BaseModel):
    stop_count: int
    total_distance_miles: float
    total_travel_min: int
    total_service_min: int
    total_time_min: int
    estimated_end_time: datetime


class RouteResponse(BaseModel):
    operator_id: str
    stops: List[RouteStopModel]
    stats: RouteStatsModel
    completed_job_ids: List[str]
    route_path: List[CoordinateModel]


class TrailPointModel(BaseModel):
    location: CoordinateModel
    timestamp: datetime
