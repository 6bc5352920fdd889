"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...data.fleet_repository import InMemoryFleetRepository
from ..deps import fleet_repository

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/data", status_code=status.HTTP_200_OK)
def health_data(repository: InMemoryFleetRepository = Depends(fleet_repository)) -> dict:
    """Report how many fleet records the repository is serving."""
    return {
        "operators": len(repository.list_operators()),
        "jobs": len(repository.list_jobs()),
        "pricing_tiers": len(repository.pricing_tiers()),
        "has_weather_sample": repository.latest_weather_sample() is not None,
    }
