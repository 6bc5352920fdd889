"""Priority weighting for stops."""

from __future__ import annotations

from ...models.domain import Job, JobPriority, PriorityTier

PRIORITY_WEIGHTS: dict[JobPriority, int] = {
    JobPriority.URGENT: 100,
    JobPriority.HIGH: 50,
    JobPriority.NORMAL: 10,
}

TIER_WEIGHTS: dict[PriorityTier, int] = {
    PriorityTier.PRIORITY: 80,
    PriorityTier.STANDARD: 20,
    PriorityTier.ECONOMY: 5,
}

# Normalization constant for route scoring; 180 with the tables above.
MAX_PRIORITY_WEIGHT = max(PRIORITY_WEIGHTS.values()) + max(TIER_WEIGHTS.values())


def priority_weight(job: Job) -> int:
    """Return the combined urgency + paid-tier weight of a job (higher = sooner)."""

    return PRIORITY_WEIGHTS[JobPriority(job.priority)] + TIER_WEIGHTS[PriorityTier(job.priority_tier)]
