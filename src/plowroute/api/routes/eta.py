"""ETA endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...data.fleet_repository import InMemoryFleetRepository
from ...models.domain import Coordinate, PricingTier, PriorityTier
from ...schemas.eta import EtaRequest, EtaResponse, TierPreviewResponse
from ...services.eta.projector import EtaEstimate, project_eta
from ...services.eta.service import customer_eta, customer_tier_preview
from ..deps import fleet_repository

router = APIRouter(tags=["eta"])


def _to_response(estimate: EtaEstimate) -> EtaResponse:
    return EtaResponse(
        minutes=estimate.minutes,
        arrival_time=estimate.arrival_time,
        distance_miles=estimate.distance_miles,
        jobs_ahead=estimate.jobs_ahead,
    )


@router.post("/eta/project", response_model=EtaResponse, status_code=status.HTTP_200_OK)
def project(payload: EtaRequest) -> EtaResponse:
    """Project an ETA from explicit positions, queue depth and tier modifier."""
    tier = PricingTier(tier=PriorityTier.STANDARD, name="Request", price=0.0, eta_modifier=payload.eta_modifier)
    try:
        estimate = project_eta(
            Coordinate(payload.operator_location.latitude, payload.operator_location.longitude),
            Coordinate(payload.customer_location.latitude, payload.customer_location.longitude),
            payload.jobs_ahead,
            tier,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_response(estimate)


@router.get("/customers/{customer_id}/eta", response_model=EtaResponse, status_code=status.HTTP_200_OK)
def get_customer_eta(
    customer_id: str,
    repository: InMemoryFleetRepository = Depends(fleet_repository),
) -> EtaResponse:
    try:
        return _to_response(customer_eta(customer_id, repository=repository))
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error projecting ETA for customer {customer_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to project ETA: {str(exc)}"
        ) from exc


@router.get("/customers/{customer_id}/eta/tiers", response_model=TierPreviewResponse, status_code=status.HTTP_200_OK)
def get_customer_tier_preview(
    customer_id: str,
    repository: InMemoryFleetRepository = Depends(fleet_repository),
) -> TierPreviewResponse:
    """Projected minutes under each pricing tier, for upgrade/downgrade previews."""
    try:
        current, minutes = customer_tier_preview(customer_id, repository=repository)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return TierPreviewResponse(customer_id=customer_id, current_tier=current.value, minutes_by_tier=minutes)
