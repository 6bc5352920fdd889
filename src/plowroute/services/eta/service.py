"""Customer ETA lookups backed by the fleet repository."""

from __future__ import annotations

from datetime import datetime

from ...data.fleet_repository import FleetRepository
from ...errors import NotFoundError
from ...models.domain import Job, Operator, PriorityTier
from .projector import EtaEstimate, count_jobs_ahead, preview_tier_etas, project_eta


def _assigned_operator(job: Job, repository: FleetRepository) -> Operator:
    if not job.operator_id:
        raise NotFoundError(f"Job {job.job_id} has no operator assigned yet.")
    return repository.get_operator(job.operator_id)


def customer_eta(customer_id: str, *, repository: FleetRepository, now: datetime | None = None) -> EtaEstimate:
    job = repository.job_for_customer(customer_id)
    operator = _assigned_operator(job, repository)
    jobs_ahead = count_jobs_ahead(repository.list_jobs(), operator.operator_id, job.job_id)
    return project_eta(
        operator.coordinate,
        job.coordinate,
        jobs_ahead,
        repository.get_pricing_tier(job.priority_tier),
        now=now,
    )


def customer_tier_preview(customer_id: str, *, repository: FleetRepository) -> tuple[PriorityTier, dict[str, int]]:
    job = repository.job_for_customer(customer_id)
    operator = _assigned_operator(job, repository)
    jobs_ahead = count_jobs_ahead(repository.list_jobs(), operator.operator_id, job.job_id)
    minutes = preview_tier_etas(operator.coordinate, job.coordinate, jobs_ahead, repository.pricing_tiers())
    return PriorityTier(job.priority_tier), minutes
