"""Fleet-wide daily summary figures."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Sequence

from ...models.domain import Job, JobStatus, Operator, OperatorStatus
from ..travel import round_minutes


@dataclass(slots=True)
class FleetStats:
    total_operators: int
    active_operators: int
    offline_operators: int
    total_jobs_today: int
    completed_jobs_today: int
    in_progress_jobs: int
    pending_jobs: int
    total_revenue_today: float
    average_completion_min: int


def compute_fleet_stats(operators: Sequence[Operator], jobs: Sequence[Job], *, today: date) -> FleetStats:
    statuses = [OperatorStatus(operator.status) for operator in operators]
    todays_jobs = [job for job in jobs if job.scheduled_date == today]
    by_status: dict[JobStatus, list[Job]] = {}
    for job in todays_jobs:
        by_status.setdefault(JobStatus(job.status), []).append(job)

    completed = by_status.get(JobStatus.COMPLETED, [])
    in_progress = by_status.get(JobStatus.IN_PROGRESS, [])
    pending = by_status.get(JobStatus.PENDING, []) + by_status.get(JobStatus.EN_ROUTE, [])

    # Revenue counts work that has started, not work that is only booked.
    revenue = sum(job.price for job in [*completed, *in_progress])
    durations = [job.actual_duration_min or 0 for job in completed]
    average = round_minutes(sum(durations) / len(durations)) if durations else 0

    return FleetStats(
        total_operators=len(operators),
        active_operators=statuses.count(OperatorStatus.BUSY) + statuses.count(OperatorStatus.AVAILABLE),
        offline_operators=statuses.count(OperatorStatus.OFFLINE),
        total_jobs_today=len(todays_jobs),
        completed_jobs_today=len(completed),
        in_progress_jobs=len(in_progress),
        pending_jobs=len(pending),
        total_revenue_today=revenue,
        average_completion_min=average,
    )
