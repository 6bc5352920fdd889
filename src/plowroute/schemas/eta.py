"""ETA request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Dict

from pydantic import BaseModel, Field

from .routing import CoordinateModel


class EtaRequest(BaseModel):
    operator_location: CoordinateModel
    customer_location: CoordinateModel
    jobs_ahead: int = Field(0, ge=0)
    eta_modifier: float = Field(1.0, ge=0, description="Multiplier of the customer's pricing tier.")


class EtaResponse(BaseModel):
    minutes: int
    arrival_time: datetime
    distance_miles: float
    jobs_ahead: int


class TierPreviewResponse(BaseModel):
    customer_id: str
    current_tier: str
    minutes_by_tier: Dict[str, int]
