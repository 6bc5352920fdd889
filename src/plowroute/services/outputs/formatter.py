"""Serializers and display helpers for route outputs."""

from __future__ import annotations

import csv
import io
from datetime import datetime

from ...models.domain import JobStatus
from ..routing.models import OptimizedRoute
from ..travel import round_minutes


def format_duration(minutes: float) -> str:
    total = round_minutes(minutes)
    if total < 60:
        return f"{total} min"
    hours, mins = divmod(total, 60)
    return f"{hours}h {mins}m" if mins > 0 else f"{hours}h"


def format_clock_time(moment: datetime) -> str:
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"


def route_to_json(route: OptimizedRoute) -> dict:
    stats = route.stats
    return {
        "operator_id": route.operator_id,
        "stats": {
            "stop_count": stats.stop_count,
            "total_distance_miles": stats.total_distance_miles,
            "total_travel_min": stats.total_travel_min,
            "total_service_min": stats.total_service_min,
            "total_time_min": stats.total_time_min,
            "total_time_display": format_duration(stats.total_time_min),
            "estimated_end_time": stats.estimated_end_time.isoformat(),
        },
        "stops": [
            {
                "sequence": stop.sequence,
                "job_id": stop.job.job_id,
                "customer_id": stop.job.customer_id,
                "status": JobStatus(stop.job.status).value,
                "estimated_arrival": stop.estimated_arrival.isoformat(),
                "estimated_departure": stop.estimated_departure.isoformat(),
                "distance_from_prev_miles": stop.distance_from_prev_miles,
                "travel_time_from_prev_min": stop.travel_time_from_prev_min,
            }
            for stop in route.stops
        ],
        "completed_job_ids": [job.job_id for job in route.completed],
    }


def route_to_csv(route: OptimizedRoute) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "operator_id",
        "sequence",
        "job_id",
        "customer_id",
        "status",
        "arrival",
        "departure",
        "distance_from_prev_miles",
        "travel_time_from_prev_min",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for stop in route.stops:
        writer.writerow(
            {
                "operator_id": route.operator_id,
                "sequence": stop.sequence,
                "job_id": stop.job.job_id,
                "customer_id": stop.job.customer_id,
                "status": JobStatus(stop.job.status).value,
                "arrival": format_clock_time(stop.estimated_arrival),
                "departure": format_clock_time(stop.estimated_departure),
                "distance_from_prev_miles": stop.distance_from_prev_miles,
                "travel_time_from_prev_min": stop.travel_time_from_prev_min,
            }
        )
    return buffer.getvalue()
