"""Auto-dispatch trigger endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from ...config import settings
from ...data.fleet_repository import InMemoryFleetRepository
from ...models.domain import WeatherSample
from ...schemas.dispatch import DispatchTriggerResponse, WeatherSampleModel
from ...services.dispatch.threshold import DispatchTrigger, evaluate_dispatch_trigger
from ..deps import fleet_repository

router = APIRouter(prefix="/dispatch", tags=["dispatch"])


def _sample_from_model(payload: WeatherSampleModel) -> WeatherSample:
    threshold = settings.dispatch_threshold_inches if payload.threshold_inches is None else payload.threshold_inches
    return WeatherSample(
        threshold_inches=threshold,
        accumulated_inches=payload.accumulated_inches,
        rate_inches_per_hour=payload.rate_inches_per_hour,
        observed_at=payload.observed_at,
    )


def _to_response(trigger: DispatchTrigger) -> DispatchTriggerResponse:
    return DispatchTriggerResponse(
        threshold_inches=trigger.threshold_inches,
        current_inches=trigger.current_inches,
        is_triggered=trigger.is_triggered,
        next_trigger_time=trigger.next_trigger_time,
        message=trigger.message,
    )


def _evaluate(sample: WeatherSample) -> DispatchTriggerResponse:
    try:
        return _to_response(evaluate_dispatch_trigger(sample))
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post("/evaluate", response_model=DispatchTriggerResponse, status_code=status.HTTP_200_OK)
def evaluate(payload: WeatherSampleModel) -> DispatchTriggerResponse:
    """Evaluate a weather sample without recording it."""
    return _evaluate(_sample_from_model(payload))


@router.post("/samples", response_model=DispatchTriggerResponse, status_code=status.HTTP_201_CREATED)
def record_sample(
    payload: WeatherSampleModel,
    repository: InMemoryFleetRepository = Depends(fleet_repository),
) -> DispatchTriggerResponse:
    sample = _sample_from_model(payload)
    response = _evaluate(sample)
    repository.record_weather_sample(sample)
    return response


@router.get("/status", response_model=DispatchTriggerResponse, status_code=status.HTTP_200_OK)
def get_status(repository: InMemoryFleetRepository = Depends(fleet_repository)) -> DispatchTriggerResponse:
    sample = repository.latest_weather_sample()
    if sample is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No weather sample recorded yet.")
    return _evaluate(sample)
