"""Seeded demo fleet around Truckee, CA.

All randomness goes through ``numpy.random.default_rng(seed)`` so the same seed
always yields the same operators, jobs and trails.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List

import numpy as np

from ..models.domain import (
    Coordinate,
    Job,
    JobPriority,
    JobStatus,
    Operator,
    OperatorStatus,
    PricingTier,
    PriorityTier,
    PropertyProfile,
    WeatherSample,
)
from .snapshot import FleetSnapshot

BASE_LAT = 39.3280
BASE_LNG = -120.1833

PRICING_TIERS = (
    PricingTier(tier=PriorityTier.ECONOMY, name="Economy", price=35.0, eta_modifier=2.0),
    PricingTier(tier=PriorityTier.STANDARD, name="Standard", price=45.0, eta_modifier=1.0),
    PricingTier(tier=PriorityTier.PRIORITY, name="Priority", price=75.0, eta_modifier=0.3),
)

# (operator_id, name, lat offset, lng offset, status)
_OPERATORS = (
    ("op-001", "Tom Bradley", 0.003, 0.006, OperatorStatus.BUSY),
    ("op-002", "Maria Santos", -0.005, 0.012, OperatorStatus.BUSY),
    ("op-003", "Carlos Rivera", 0.01, -0.005, OperatorStatus.AVAILABLE),
    ("op-004", "Jessica Wong", -0.008, 0.003, OperatorStatus.OFFLINE),
)

# (clear minutes, difficulty, area sq ft, sloped)
_PROPERTIES = (
    (12, 1, 480, False),
    (18, 3, 1120, True),
    (20, 2, 600, False),
    (10, 1, 350, False),
    (14, 2, 540, True),
    (18, 3, 720, False),
    (10, 1, 300, False),
    (15, 2, 456, True),
)

# (operator_id, status, priority, tier)
_JOBS = (
    ("op-001", JobStatus.COMPLETED, JobPriority.NORMAL, PriorityTier.PRIORITY),
    ("op-001", JobStatus.IN_PROGRESS, JobPriority.HIGH, PriorityTier.STANDARD),
    ("op-001", JobStatus.EN_ROUTE, JobPriority.NORMAL, PriorityTier.STANDARD),
    ("op-001", JobStatus.PENDING, JobPriority.URGENT, PriorityTier.PRIORITY),
    ("op-002", JobStatus.COMPLETED, JobPriority.NORMAL, PriorityTier.ECONOMY),
    ("op-002", JobStatus.EN_ROUTE, JobPriority.NORMAL, PriorityTier.STANDARD),
    ("op-002", JobStatus.PENDING, JobPriority.HIGH, PriorityTier.ECONOMY),
    (None, JobStatus.PENDING, JobPriority.NORMAL, PriorityTier.STANDARD),
)


@dataclass(slots=True)
class TrailPoint:
    coordinate: Coordinate
    timestamp: datetime


def _nearby(lat_offset: float, lng_offset: float) -> Coordinate:
    return Coordinate(latitude=BASE_LAT + lat_offset, longitude=BASE_LNG + lng_offset)


def generate_demo_fleet(seed: int, today: date) -> FleetSnapshot:
    rng = np.random.default_rng(seed)
    tier_prices = {tier.tier: tier.price for tier in PRICING_TIERS}

    operators = [
        Operator(operator_id=op_id, name=name, coordinate=_nearby(dlat, dlng), status=status)
        for op_id, name, dlat, dlng, status in _OPERATORS
    ]

    offsets = rng.uniform(-0.02, 0.02, size=(len(_JOBS), 2))
    profiles: List[PropertyProfile] = []
    jobs: List[Job] = []
    for index, ((operator_id, status, priority, tier), (clear_min, difficulty, area, sloped)) in enumerate(
        zip(_JOBS, _PROPERTIES), start=1
    ):
        customer_id = f"cust-{index:03d}"
        profiles.append(
            PropertyProfile(
                customer_id=customer_id,
                estimated_clear_time_min=clear_min,
                difficulty_rating=difficulty,
                area_sq_ft=area,
                is_sloped=sloped,
            )
        )
        dlat, dlng = offsets[index - 1]
        jobs.append(
            Job(
                job_id=f"job-{index:03d}",
                customer_id=customer_id,
                operator_id=operator_id,
                status=status,
                coordinate=_nearby(float(dlat), float(dlng)),
                scheduled_date=today,
                priority=priority,
                priority_tier=tier,
                estimated_duration_min=15,
                actual_duration_min=float(rng.integers(10, 20)) if status == JobStatus.COMPLETED else None,
                price=tier_prices[tier],
            )
        )

    weather = WeatherSample(threshold_inches=3.0, accumulated_inches=2.5, rate_inches_per_hour=0.5)
    return FleetSnapshot(
        operators=operators,
        jobs=jobs,
        pricing_tiers=list(PRICING_TIERS),
        property_profiles=profiles,
        weather_samples=[weather],
    )


def simulate_plow_trail(
    start: Coordinate,
    end: Coordinate,
    *,
    steps: int = 20,
    seed: int = 0,
    start_time: datetime,
    interval: timedelta = timedelta(seconds=30),
) -> list[TrailPoint]:
    """Straight-line breadcrumb trail with small seeded jitter, for map previews."""

    if steps < 1:
        raise ValueError("steps must be >= 1")
    rng = np.random.default_rng(seed)
    jitter = (rng.random((steps + 1, 2)) - 0.5) * 0.0005
    progress = np.linspace(0.0, 1.0, steps + 1)
    lats = start.latitude + (end.latitude - start.latitude) * progress + jitter[:, 0]
    lngs = start.longitude + (end.longitude - start.longitude) * progress + jitter[:, 1]
    return [
        TrailPoint(
            coordinate=Coordinate(latitude=float(lat), longitude=float(lng)),
            timestamp=start_time + interval * i,
        )
        for i, (lat, lng) in enumerate(zip(lats, lngs))
    ]
