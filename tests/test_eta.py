import math
from datetime import date, datetime, timedelta, timezone

import pytest

from plowroute.errors import EngineValidationError
from plowroute.models.domain import Coordinate, Job, JobStatus, PricingTier, PriorityTier
from plowroute.services.eta import count_jobs_ahead, preview_tier_etas, project_eta
from plowroute.services.geospatial import EARTH_RADIUS_MILES

OPERATOR_AT = Coordinate(39.3280, -120.1833)
NOW = datetime(2025, 1, 5, 7, 0, tzinfo=timezone.utc)

ECONOMY = PricingTier(tier=PriorityTier.ECONOMY, name="Economy", price=35, eta_modifier=2.0)
STANDARD = PricingTier(tier=PriorityTier.STANDARD, name="Standard", price=45, eta_modifier=1.0)
PRIORITY = PricingTier(tier=PriorityTier.PRIORITY, name="Priority", price=75, eta_modifier=0.3)


def _miles_north(miles: float) -> Coordinate:
    return Coordinate(OPERATOR_AT.latitude + math.degrees(miles / EARTH_RADIUS_MILES), OPERATOR_AT.longitude)


def _job(jid: str, status: JobStatus, operator_id: str | None = "op-001") -> Job:
    return Job(
        job_id=jid,
        customer_id=f"cust-{jid}",
        operator_id=operator_id,
        status=status,
        coordinate=OPERATOR_AT,
        scheduled_date=date(2025, 1, 5),
    )


def test_one_mile_standard_eta_is_three_minutes():
    estimate = project_eta(OPERATOR_AT, _miles_north(1.0), 0, STANDARD, now=NOW)

    assert estimate.minutes == 3
    assert estimate.distance_miles == pytest.approx(1.0)
    assert estimate.jobs_ahead == 0
    assert estimate.arrival_time == NOW + timedelta(minutes=3)


def test_priority_upgrade_rounds_after_modifier():
    estimate = project_eta(OPERATOR_AT, _miles_north(1.0), 0, PRIORITY, now=NOW)

    assert estimate.minutes == 1


def test_jobs_ahead_add_fifteen_minutes_each():
    estimate = project_eta(OPERATOR_AT, _miles_north(2.0), 2, STANDARD, now=NOW)

    assert estimate.minutes == 6 + 30


def test_minutes_never_decrease_with_distance_or_queue():
    by_distance = [project_eta(OPERATOR_AT, _miles_north(d), 1, STANDARD, now=NOW).minutes for d in (0, 0.4, 1, 2.5, 6)]
    by_queue = [project_eta(OPERATOR_AT, _miles_north(1.0), n, ECONOMY, now=NOW).minutes for n in range(5)]

    assert by_distance == sorted(by_distance)
    assert by_queue == sorted(by_queue)


@pytest.mark.parametrize("miles,jobs_ahead", [(0.5, 0), (1.0, 0), (2.0, 1), (4.0, 3)])
def test_tier_changes_move_eta_strictly(miles, jobs_ahead):
    location = _miles_north(miles)
    standard = project_eta(OPERATOR_AT, location, jobs_ahead, STANDARD, now=NOW).minutes
    priority = project_eta(OPERATOR_AT, location, jobs_ahead, PRIORITY, now=NOW).minutes
    economy = project_eta(OPERATOR_AT, location, jobs_ahead, ECONOMY, now=NOW).minutes

    assert priority < standard < economy


def test_preview_lists_every_tier():
    preview = preview_tier_etas(OPERATOR_AT, _miles_north(2.0), 1, [ECONOMY, STANDARD, PRIORITY])

    assert preview == {"economy": 42, "standard": 21, "priority": 6}


def test_count_jobs_ahead_only_counts_active_work_of_same_operator():
    jobs = [
        _job("mine", JobStatus.EN_ROUTE),
        _job("working", JobStatus.IN_PROGRESS),
        _job("driving", JobStatus.EN_ROUTE),
        _job("queued", JobStatus.PENDING),
        _job("done", JobStatus.COMPLETED),
        _job("other-op", JobStatus.IN_PROGRESS, operator_id="op-002"),
    ]

    assert count_jobs_ahead(jobs, "op-001", "mine") == 2


def test_negative_inputs_are_rejected():
    with pytest.raises(EngineValidationError):
        project_eta(OPERATOR_AT, _miles_north(1.0), -1, STANDARD, now=NOW)
    bad_tier = PricingTier(tier=PriorityTier.STANDARD, name="Broken", price=0, eta_modifier=-0.5)
    with pytest.raises(EngineValidationError):
        project_eta(OPERATOR_AT, _miles_north(1.0), 0, bad_tier, now=NOW)
