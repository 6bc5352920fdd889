"""Routing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.routing import RouteOptimizeRequest, RouteReorderRequest, RouteResponse
from ...services.routing.service import optimize_route, reorder

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/optimize", response_model=RouteResponse, status_code=status.HTTP_200_OK)
def optimize(payload: RouteOptimizeRequest) -> RouteResponse:
    try:
        return optimize_route(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error optimizing route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize route: {str(exc)}"
        ) from exc


@router.post("/reorder", response_model=RouteResponse, status_code=status.HTTP_200_OK)
def reorder_stops(payload: RouteReorderRequest) -> RouteResponse:
    """Move one pending stop to a new position and recompute timings."""
    try:
        return reorder(payload)
    except IndexError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error reordering route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to reorder route: {str(exc)}"
        ) from exc
