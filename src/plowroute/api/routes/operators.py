"""Operator route endpoints backed by the fleet repository."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ...config import settings
from ...data.demo import simulate_plow_trail
from ...data.fleet_repository import InMemoryFleetRepository
from ...schemas.routing import CoordinateModel, RouteResponse, TrailPointModel
from ...services.outputs.formatter import route_to_csv, route_to_json
from ...services.routing.models import OptimizedRoute
from ...services.routing.recompute import RouteRecomputeRegistry
from ...services.routing.service import recompute_operator_route, route_to_response
from ..deps import fleet_repository, recompute_registry

router = APIRouter(prefix="/operators", tags=["operators"])


def _recompute(
    operator_id: str,
    priority_weight_fraction: float | None,
    repository: InMemoryFleetRepository,
    registry: RouteRecomputeRegistry,
) -> OptimizedRoute:
    try:
        return recompute_operator_route(
            operator_id,
            repository=repository,
            registry=registry,
            priority_weight_fraction=priority_weight_fraction,
        )
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error computing route for operator {operator_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to compute route: {str(exc)}"
        ) from exc


@router.get("/{operator_id}/route", response_model=RouteResponse, status_code=status.HTTP_200_OK)
def get_operator_route(
    operator_id: str,
    priority_weight_fraction: float | None = Query(default=None, ge=0, le=1),
    repository: InMemoryFleetRepository = Depends(fleet_repository),
    registry: RouteRecomputeRegistry = Depends(recompute_registry),
) -> RouteResponse:
    route = _recompute(operator_id, priority_weight_fraction, repository, registry)
    return route_to_response(route)


@router.get("/{operator_id}/route/export", status_code=status.HTTP_200_OK)
def export_operator_route(
    operator_id: str,
    format: Literal["csv", "json"] = Query(default="csv"),
    repository: InMemoryFleetRepository = Depends(fleet_repository),
    registry: RouteRecomputeRegistry = Depends(recompute_registry),
):
    """Export the operator's current route as a CSV run sheet or JSON summary."""
    route = _recompute(operator_id, None, repository, registry)
    if format == "json":
        return route_to_json(route)
    return Response(
        content=route_to_csv(route),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="route_{operator_id}.csv"'},
    )


@router.get("/{operator_id}/trail", response_model=List[TrailPointModel], status_code=status.HTTP_200_OK)
def get_operator_trail(
    operator_id: str,
    steps: int = Query(default=20, ge=1, le=200),
    repository: InMemoryFleetRepository = Depends(fleet_repository),
    registry: RouteRecomputeRegistry = Depends(recompute_registry),
) -> List[TrailPointModel]:
    """Simulated breadcrumb trail from the operator to their next stop."""
    route = _recompute(operator_id, None, repository, registry)
    if not route.stats.stop_count:
        return []
    operator = repository.get_operator(operator_id)
    trail = simulate_plow_trail(
        operator.coordinate,
        route.stops[0].job.coordinate,
        steps=steps,
        seed=settings.demo_seed,
        start_time=datetime.now(timezone.utc),
    )
    return [
        TrailPointModel(
            location=CoordinateModel(latitude=point.coordinate.latitude, longitude=point.coordinate.longitude),
            timestamp=point.timestamp,
        )
        for point in trail
    ]
