"""Fleet snapshot container and JSON loader."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, List, Optional

from ..models.domain import (
    Coordinate,
    Job,
    JobPriority,
    JobStatus,
    Operator,
    OperatorStatus,
    PricingTier,
    PriorityTier,
    PropertyProfile,
    WeatherSample,
)


@dataclass(slots=True)
class FleetSnapshot:
    operators: List[Operator] = field(default_factory=list)
    jobs: List[Job] = field(default_factory=list)
    pricing_tiers: List[PricingTier] = field(default_factory=list)
    property_profiles: List[PropertyProfile] = field(default_factory=list)
    weather_samples: List[WeatherSample] = field(default_factory=list)


def _coordinate(row: dict[str, Any]) -> Coordinate:
    return Coordinate(latitude=float(row["latitude"]), longitude=float(row["longitude"]))


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def _optional_datetime(value: Any) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(str(value))


def _parse_operator(row: dict[str, Any]) -> Operator:
    return Operator(
        operator_id=str(row["operator_id"]),
        name=str(row.get("name") or row["operator_id"]),
        coordinate=_coordinate(row),
        status=OperatorStatus(row.get("status", "available")),
    )


def _parse_job(row: dict[str, Any]) -> Job:
    return Job(
        job_id=str(row["job_id"]),
        customer_id=str(row["customer_id"]),
        operator_id=row.get("operator_id") or None,
        status=JobStatus(row["status"]),
        coordinate=_coordinate(row),
        scheduled_date=date.fromisoformat(str(row["scheduled_date"])),
        priority=JobPriority(row.get("priority", "normal")),
        priority_tier=PriorityTier(row.get("priority_tier", "standard")),
        estimated_duration_min=_optional_float(row.get("estimated_duration_min")),
        actual_duration_min=_optional_float(row.get("actual_duration_min")),
        actual_start_time=_optional_datetime(row.get("actual_start_time")),
        price=float(row.get("price") or 0.0),
    )


def _parse_tier(row: dict[str, Any]) -> PricingTier:
    return PricingTier(
        tier=PriorityTier(row["tier"]),
        name=str(row.get("name") or row["tier"]).strip(),
        price=float(row.get("price") or 0.0),
        eta_modifier=float(row["eta_modifier"]),
    )


def _parse_profile(row: dict[str, Any]) -> PropertyProfile:
    return PropertyProfile(
        customer_id=str(row["customer_id"]),
        estimated_clear_time_min=float(row["estimated_clear_time_min"]),
        difficulty_rating=int(row.get("difficulty_rating", 1)),
        area_sq_ft=float(row.get("area_sq_ft") or 0.0),
        is_sloped=bool(row.get("is_sloped", False)),
    )


def _parse_weather(row: dict[str, Any]) -> WeatherSample:
    return WeatherSample(
        threshold_inches=float(row["threshold_inches"]),
        accumulated_inches=float(row["accumulated_inches"]),
        rate_inches_per_hour=float(row.get("rate_inches_per_hour") or 0.0),
        observed_at=_optional_datetime(row.get("observed_at")),
    )


def _parse_rows(kind: str, rows: list[dict[str, Any]], parser) -> list:
    parsed = []
    for row in rows:
        try:
            parsed.append(parser(row))
        except (KeyError, ValueError, TypeError) as e:
            # Skip invalid rows but continue processing
            logging.warning(f"Skipping invalid {kind} row: {e}")
            continue
    return parsed


def load_fleet_snapshot(path: Path) -> FleetSnapshot:
    """Load operators, jobs, tiers, property profiles and weather from a JSON file."""

    if not path.exists():
        raise FileNotFoundError(f"Fleet snapshot not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"Fleet snapshot '{path}' must contain a JSON object.")

    return FleetSnapshot(
        operators=_parse_rows("operator", payload.get("operators", []), _parse_operator),
        jobs=_parse_rows("job", payload.get("jobs", []), _parse_job),
        pricing_tiers=_parse_rows("pricing tier", payload.get("pricing_tiers", []), _parse_tier),
        property_profiles=_parse_rows("property profile", payload.get("property_profiles", []), _parse_profile),
        weather_samples=_parse_rows("weather sample", payload.get("weather_samples", []), _parse_weather),
    )
