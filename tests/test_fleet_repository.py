import json
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest

from plowroute.data import InMemoryFleetRepository, get_fleet_repository, load_fleet_snapshot
from plowroute.data.demo import generate_demo_fleet, simulate_plow_trail
from plowroute.errors import NotFoundError
from plowroute.models.domain import Coordinate, JobStatus, PriorityTier, WeatherSample

TODAY = date(2025, 1, 5)


@pytest.fixture(autouse=True)
def clear_repository_cache():
    get_fleet_repository.cache_clear()
    yield
    get_fleet_repository.cache_clear()


def _write_snapshot(path: Path) -> Path:
    payload = {
        "operators": [
            {"operator_id": "op-100", "name": "Dana Kim", "latitude": 39.33, "longitude": -120.18, "status": "busy"},
            {"operator_id": "op-bad", "latitude": "north", "longitude": -120.18},
        ],
        "jobs": [
            {
                "job_id": "job-100",
                "customer_id": "cust-100",
                "operator_id": "op-100",
                "status": "pending",
                "latitude": 39.34,
                "longitude": -120.19,
                "scheduled_date": "2025-01-05",
                "priority_tier": "priority",
                "estimated_duration_min": "",
                "price": 75,
            },
            {
                "job_id": "job-101",
                "customer_id": "cust-101",
                "status": "flying",
                "latitude": 39.34,
                "longitude": -120.19,
                "scheduled_date": "2025-01-05",
            },
            {"job_id": "job-102", "customer_id": "cust-102", "latitude": 39.34, "longitude": -120.19},
        ],
        "pricing_tiers": [{"tier": "priority", "name": " Priority ", "price": 75, "eta_modifier": 0.3}],
        "property_profiles": [{"customer_id": "cust-100", "estimated_clear_time_min": 22, "is_sloped": True}],
        "weather_samples": [
            {"threshold_inches": 3.0, "accumulated_inches": 1.0, "observed_at": "2025-01-05T04:00:00+00:00"}
        ],
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_snapshot_loader_skips_invalid_rows(tmp_path: Path):
    snapshot = load_fleet_snapshot(_write_snapshot(tmp_path / "fleet.json"))

    assert [operator.operator_id for operator in snapshot.operators] == ["op-100"]
    assert [job.job_id for job in snapshot.jobs] == ["job-100"]
    assert snapshot.jobs[0].estimated_duration_min is None
    assert snapshot.pricing_tiers[0].name == "Priority"
    assert snapshot.weather_samples[0].rate_inches_per_hour == 0.0
    assert snapshot.weather_samples[0].observed_at == datetime(2025, 1, 5, 4, 0, tzinfo=timezone.utc)


def test_snapshot_loader_requires_existing_object(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_fleet_snapshot(tmp_path / "missing.json")

    not_an_object = tmp_path / "list.json"
    not_an_object.write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_fleet_snapshot(not_an_object)


def test_repository_prefers_snapshot_file(tmp_path: Path):
    repository = get_fleet_repository(_write_snapshot(tmp_path / "fleet.json"))

    assert repository.get_operator("op-100").name == "Dana Kim"
    assert repository.get_property_profile("cust-100").estimated_clear_time_min == 22
    assert repository.get_pricing_tier("priority").eta_modifier == 0.3


def test_repository_falls_back_to_demo_fleet(tmp_path: Path):
    repository = get_fleet_repository(tmp_path / "missing.json")

    assert len(repository.list_operators()) == 4
    assert len(repository.list_jobs()) == 8
    assert len(repository.pricing_tiers()) == 3


def test_repository_lookups():
    repository = InMemoryFleetRepository(generate_demo_fleet(7, TODAY))

    assert [job.job_id for job in repository.jobs_for_operator("op-002")] == ["job-005", "job-006", "job-007"]
    assert repository.jobs_for_operator("op-003") == []
    assert repository.job_for_customer("cust-004", on=TODAY).job_id == "job-004"
    assert repository.get_pricing_tier(PriorityTier.ECONOMY).eta_modifier == 2.0
    assert repository.get_property_profile("cust-999") is None

    with pytest.raises(NotFoundError):
        repository.get_operator("op-999")
    with pytest.raises(NotFoundError):
        repository.jobs_for_operator("op-999")
    with pytest.raises(NotFoundError):
        repository.job_for_customer("cust-004", on=TODAY + timedelta(days=1))


def test_recorded_weather_sample_becomes_latest():
    repository = InMemoryFleetRepository(generate_demo_fleet(7, TODAY))
    sample = WeatherSample(threshold_inches=3.0, accumulated_inches=4.2, rate_inches_per_hour=1.0)

    repository.record_weather_sample(sample)

    assert repository.latest_weather_sample() is sample


def test_demo_fleet_is_reproducible_for_a_seed():
    first = generate_demo_fleet(7, TODAY)

    assert first == generate_demo_fleet(7, TODAY)
    assert first.jobs != generate_demo_fleet(8, TODAY).jobs


def test_demo_fleet_shape():
    snapshot = generate_demo_fleet(7, TODAY)
    statuses = {job.job_id: job.status for job in snapshot.jobs}

    assert statuses["job-002"] == JobStatus.IN_PROGRESS
    assert statuses["job-008"] == JobStatus.PENDING
    assert snapshot.jobs[-1].operator_id is None
    assert all(job.scheduled_date == TODAY for job in snapshot.jobs)
    assert all(
        job.actual_duration_min is not None for job in snapshot.jobs if job.status == JobStatus.COMPLETED
    )
    assert [profile.estimated_clear_time_min for profile in snapshot.property_profiles] == [
        12, 18, 20, 10, 14, 18, 10, 15
    ]


def test_plow_trail_runs_from_start_to_end():
    start = Coordinate(39.3310, -120.1773)
    end = Coordinate(39.3400, -120.1900)
    began = datetime(2025, 1, 5, 6, 0, tzinfo=timezone.utc)

    trail = simulate_plow_trail(start, end, steps=10, seed=3, start_time=began)

    assert len(trail) == 11
    assert trail[0].coordinate.latitude == pytest.approx(start.latitude, abs=0.0003)
    assert trail[-1].coordinate.longitude == pytest.approx(end.longitude, abs=0.0003)
    assert trail[-1].timestamp == began + timedelta(minutes=5)
    assert trail == simulate_plow_trail(start, end, steps=10, seed=3, start_time=began)


def test_plow_trail_requires_a_step():
    with pytest.raises(ValueError):
        simulate_plow_trail(Coordinate(39.0, -120.0), Coordinate(39.1, -120.1), steps=0, start_time=datetime.now())
