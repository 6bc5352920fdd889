from datetime import date

import pytest

from plowroute.errors import EngineValidationError
from plowroute.models.domain import Coordinate, Job, JobPriority, JobStatus, PriorityTier, PropertyProfile
from plowroute.services.routing import MAX_PRIORITY_WEIGHT, RoutingParameters, ServiceDurationResolver, priority_weight


def _job(priority=JobPriority.NORMAL, tier=PriorityTier.STANDARD, duration=None, customer_id="cust-001") -> Job:
    return Job(
        job_id="job-001",
        customer_id=customer_id,
        operator_id=None,
        status=JobStatus.PENDING,
        coordinate=Coordinate(39.328, -120.1833),
        scheduled_date=date(2025, 1, 5),
        priority=priority,
        priority_tier=tier,
        estimated_duration_min=duration,
    )


@pytest.mark.parametrize(
    "priority,tier,expected",
    [
        (JobPriority.URGENT, PriorityTier.PRIORITY, 180),
        (JobPriority.HIGH, PriorityTier.STANDARD, 70),
        (JobPriority.NORMAL, PriorityTier.ECONOMY, 15),
        ("urgent", "economy", 105),
    ],
)
def test_priority_weight_sums_both_tables(priority, tier, expected):
    assert priority_weight(_job(priority=priority, tier=tier)) == expected


def test_max_priority_weight_matches_tables():
    assert MAX_PRIORITY_WEIGHT == 180


def test_service_minutes_prefers_property_profile():
    profiles = {"cust-001": PropertyProfile(customer_id="cust-001", estimated_clear_time_min=18, is_sloped=True)}
    resolver = ServiceDurationResolver(profiles.get)

    assert resolver.service_minutes(_job(duration=12)) == 18
    assert resolver.service_minutes(_job(duration=12, customer_id="cust-999")) == 12


def test_service_minutes_falls_back_to_default():
    assert ServiceDurationResolver().service_minutes(_job()) == 15
    resolver = ServiceDurationResolver(parameters=RoutingParameters(default_service_minutes=25))
    assert resolver.service_minutes(_job()) == 25


def test_service_minutes_rejects_bad_profile_values():
    profiles = {"cust-001": PropertyProfile(customer_id="cust-001", estimated_clear_time_min=float("nan"))}

    with pytest.raises(EngineValidationError):
        ServiceDurationResolver(profiles.get).service_minutes(_job())
    with pytest.raises(EngineValidationError):
        ServiceDurationResolver().service_minutes(_job(duration=-5))
