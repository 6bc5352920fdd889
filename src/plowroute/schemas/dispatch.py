"""Auto-dispatch and fleet summary schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class WeatherSampleModel(BaseModel):
    threshold_inches: Optional[float] = Field(
        default=None,
        ge=0,
        description="Accumulation that triggers dispatch. Defaults to the configured threshold.",
    )
    accumulated_inches: float = Field(..., ge=0)
    rate_inches_per_hour: float = 0.0
    observed_at: Optional[datetime] = None


class DispatchTriggerResponse(BaseModel):
    threshold_inches: float
    current_inches: float
    is_triggered: bool
    next_trigger_time: Optional[datetime]
    message: str


class FleetStatsResponse(BaseModel):
    total_operators: int
    active_operators: int
    offline_operators: int
    total_jobs_today: int
    completed_jobs_today: int
    in_progress_jobs: int
    pending_jobs: int
    total_revenue_today: float
    average_completion_min: int
