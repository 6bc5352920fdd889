"""Fleet records repository: snapshot file first, seeded demo fleet as fallback."""

from __future__ import annotations

import functools
import logging
import threading
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional, Protocol, Sequence

from ..config import settings
from ..errors import NotFoundError
from ..models.domain import Job, Operator, PricingTier, PriorityTier, PropertyProfile, WeatherSample
from .demo import generate_demo_fleet
from .snapshot import FleetSnapshot, load_fleet_snapshot


class FleetRepository(Protocol):
    def list_operators(self) -> Sequence[Operator]: ...

    def get_operator(self, operator_id: str) -> Operator: ...

    def list_jobs(self) -> Sequence[Job]: ...

    def jobs_for_operator(self, operator_id: str) -> list[Job]: ...

    def job_for_customer(self, customer_id: str, *, on: date | None = None) -> Job: ...

    def pricing_tiers(self) -> Sequence[PricingTier]: ...

    def get_pricing_tier(self, tier: PriorityTier | str) -> PricingTier: ...

    def get_property_profile(self, customer_id: str) -> Optional[PropertyProfile]: ...

    def latest_weather_sample(self) -> Optional[WeatherSample]: ...

    def record_weather_sample(self, sample: WeatherSample) -> None: ...


class InMemoryFleetRepository:
    """Read-mostly view over a fleet snapshot; only weather samples are appended."""

    def __init__(self, snapshot: FleetSnapshot) -> None:
        self._snapshot = snapshot
        self._operators = {operator.operator_id: operator for operator in snapshot.operators}
        self._tiers = {PriorityTier(tier.tier): tier for tier in snapshot.pricing_tiers}
        self._profiles = {profile.customer_id: profile for profile in snapshot.property_profiles}
        self._weather_lock = threading.Lock()

    def list_operators(self) -> Sequence[Operator]:
        return tuple(self._snapshot.operators)

    def get_operator(self, operator_id: str) -> Operator:
        operator = self._operators.get(operator_id)
        if operator is None:
            raise NotFoundError(f"Operator '{operator_id}' not found.")
        return operator

    def list_jobs(self) -> Sequence[Job]:
        return tuple(self._snapshot.jobs)

    def jobs_for_operator(self, operator_id: str) -> list[Job]:
        self.get_operator(operator_id)
        return [job for job in self._snapshot.jobs if job.operator_id == operator_id]

    def job_for_customer(self, customer_id: str, *, on: date | None = None) -> Job:
        for job in self._snapshot.jobs:
            if job.customer_id == customer_id and (on is None or job.scheduled_date == on):
                return job
        raise NotFoundError(f"No job found for customer '{customer_id}'.")

    def pricing_tiers(self) -> Sequence[PricingTier]:
        return tuple(self._snapshot.pricing_tiers)

    def get_pricing_tier(self, tier: PriorityTier | str) -> PricingTier:
        found = self._tiers.get(PriorityTier(tier))
        if found is None:
            raise NotFoundError(f"Pricing tier '{tier}' not configured.")
        return found

    def get_property_profile(self, customer_id: str) -> Optional[PropertyProfile]:
        return self._profiles.get(customer_id)

    def latest_weather_sample(self) -> Optional[WeatherSample]:
        with self._weather_lock:
            return self._snapshot.weather_samples[-1] if self._snapshot.weather_samples else None

    def record_weather_sample(self, sample: WeatherSample) -> None:
        with self._weather_lock:
            self._snapshot.weather_samples.append(sample)


@functools.lru_cache(maxsize=1)
def get_fleet_repository(source: Optional[Path] = None) -> InMemoryFleetRepository:
    """Build the process-wide repository from the snapshot file, or the demo fleet."""

    snapshot_path = source or settings.fleet_snapshot_file
    if snapshot_path.exists():
        snapshot = load_fleet_snapshot(snapshot_path)
        logging.info(
            f"Loaded fleet snapshot from {snapshot_path}: "
            f"{len(snapshot.operators)} operators, {len(snapshot.jobs)} jobs"
        )
    else:
        logging.info(f"Fleet snapshot {snapshot_path} not found, using demo fleet (seed={settings.demo_seed})")
        snapshot = generate_demo_fleet(settings.demo_seed, datetime.now(timezone.utc).date())
    return InMemoryFleetRepository(snapshot)
