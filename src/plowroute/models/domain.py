"""Domain models for operators, jobs, pricing and weather records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


class JobStatus(str, Enum):
    PENDING = "pending"
    EN_ROUTE = "en_route"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class JobPriority(str, Enum):
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class PriorityTier(str, Enum):
    ECONOMY = "economy"
    STANDARD = "standard"
    PRIORITY = "priority"


class OperatorStatus(str, Enum):
    AVAILABLE = "available"
    BUSY = "busy"
    OFFLINE = "offline"


@dataclass(frozen=True, slots=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(slots=True)
class Job:
    """A single service visit at a customer location."""

    job_id: str
    customer_id: str
    operator_id: Optional[str]
    status: JobStatus
    coordinate: Coordinate
    scheduled_date: date
    priority: JobPriority = JobPriority.NORMAL
    priority_tier: PriorityTier = PriorityTier.STANDARD
    estimated_duration_min: Optional[float] = None
    actual_duration_min: Optional[float] = None
    actual_start_time: Optional[datetime] = None
    price: float = 0.0


@dataclass(slots=True)
class Operator:
    """A field worker with one vehicle and a current position."""

    operator_id: str
    name: str
    coordinate: Coordinate
    status: OperatorStatus = OperatorStatus.AVAILABLE


@dataclass(frozen=True, slots=True)
class PricingTier:
    tier: PriorityTier
    name: str
    price: float
    eta_modifier: float


@dataclass(frozen=True, slots=True)
class PropertyProfile:
    """Pre-measured clearing estimate for a customer's property."""

    customer_id: str
    estimated_clear_time_min: float
    difficulty_rating: int = 1
    area_sq_ft: float = 0.0
    is_sloped: bool = False


@dataclass(frozen=True, slots=True)
class WeatherSample:
    threshold_inches: float
    accumulated_inches: float
    rate_inches_per_hour: float
    observed_at: Optional[datetime] = None
