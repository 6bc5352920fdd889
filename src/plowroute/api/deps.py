"""Shared FastAPI dependencies."""

from __future__ import annotations

from functools import lru_cache

from ..data.fleet_repository import InMemoryFleetRepository, get_fleet_repository
from ..services.routing.recompute import RouteRecomputeRegistry


def fleet_repository() -> InMemoryFleetRepository:
    return get_fleet_repository()


@lru_cache()
def recompute_registry() -> RouteRecomputeRegistry:
    return RouteRecomputeRegistry()
