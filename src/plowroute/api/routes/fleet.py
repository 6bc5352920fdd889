"""Fleet summary endpoints."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date, datetime, timezone

from fastapi import APIRouter, Depends, Query, status

from ...data.fleet_repository import InMemoryFleetRepository
from ...schemas.dispatch import FleetStatsResponse
from ...services.fleet.stats import compute_fleet_stats
from ..deps import fleet_repository

router = APIRouter(prefix="/fleet", tags=["fleet"])


@router.get("/stats", response_model=FleetStatsResponse, status_code=status.HTTP_200_OK)
def get_fleet_stats(
    day: date | None = Query(default=None, description="Service day (defaults to today, UTC)."),
    repository: InMemoryFleetRepository = Depends(fleet_repository),
) -> FleetStatsResponse:
    stats = compute_fleet_stats(
        repository.list_operators(),
        repository.list_jobs(),
        today=day or datetime.now(timezone.utc).date(),
    )
    return FleetStatsResponse(**asdict(stats))
