import csv
import io
import math
from datetime import date, datetime, timedelta, timezone

import pytest

from plowroute.data.demo import generate_demo_fleet
from plowroute.models.domain import Coordinate, Job, JobStatus, Operator
from plowroute.services.fleet import compute_fleet_stats
from plowroute.services.geospatial import EARTH_RADIUS_MILES
from plowroute.services.outputs import format_clock_time, format_duration, route_to_csv, route_to_json
from plowroute.services.routing import build_route

TODAY = date(2025, 1, 5)
BASE = Coordinate(39.3280, -120.1833)
START = datetime(2025, 1, 5, 6, 0, tzinfo=timezone.utc)


def _job(jid: str, miles_north: float, status: JobStatus = JobStatus.PENDING) -> Job:
    return Job(
        job_id=jid,
        customer_id=f"cust-{jid}",
        operator_id="op-001",
        status=status,
        coordinate=Coordinate(BASE.latitude + math.degrees(miles_north / EARTH_RADIUS_MILES), BASE.longitude),
        scheduled_date=TODAY,
        estimated_duration_min=15,
    )


def test_fleet_stats_for_demo_day():
    snapshot = generate_demo_fleet(7, TODAY)

    stats = compute_fleet_stats(snapshot.operators, snapshot.jobs, today=TODAY)

    assert stats.total_operators == 4
    assert stats.active_operators == 3
    assert stats.offline_operators == 1
    assert stats.total_jobs_today == 8
    assert stats.completed_jobs_today == 2
    assert stats.in_progress_jobs == 1
    assert stats.pending_jobs == 5
    assert stats.total_revenue_today == pytest.approx(75 + 35 + 45)
    assert 10 <= stats.average_completion_min <= 19


def test_fleet_stats_ignore_other_days():
    snapshot = generate_demo_fleet(7, TODAY)

    stats = compute_fleet_stats(snapshot.operators, snapshot.jobs, today=TODAY + timedelta(days=1))

    assert stats.total_jobs_today == 0
    assert stats.total_revenue_today == 0
    assert stats.average_completion_min == 0


def test_fleet_stats_with_no_operators():
    stats = compute_fleet_stats([], [], today=TODAY)

    assert stats.total_operators == 0
    assert stats.active_operators == 0


@pytest.mark.parametrize(
    "minutes,expected",
    [(0, "0 min"), (45, "45 min"), (59.4, "59 min"), (60, "1h"), (90, "1h 30m"), (119.7, "2h"), (125.4, "2h 5m")],
)
def test_format_duration(minutes, expected):
    assert format_duration(minutes) == expected


@pytest.mark.parametrize(
    "moment,expected",
    [
        (datetime(2025, 1, 5, 0, 5), "12:05 AM"),
        (datetime(2025, 1, 5, 9, 30), "9:30 AM"),
        (datetime(2025, 1, 5, 12, 0), "12:00 PM"),
        (datetime(2025, 1, 5, 13, 45), "1:45 PM"),
    ],
)
def test_format_clock_time(moment, expected):
    assert format_clock_time(moment) == expected


def _route():
    operator = Operator(operator_id="op-001", name="Tom Bradley", coordinate=BASE)
    jobs = [_job("done", 0.2, JobStatus.COMPLETED), _job("A", 1.1), _job("B", 2.0)]
    return build_route(operator, jobs, priority_weight_fraction=0.0, start_time=START)


def test_route_csv_has_one_row_per_stop():
    rows = list(csv.DictReader(io.StringIO(route_to_csv(_route()))))

    assert [row["job_id"] for row in rows] == ["A", "B"]
    assert [row["sequence"] for row in rows] == ["1", "2"]
    assert rows[0]["arrival"] == "6:03 AM"
    assert rows[0]["status"] == "pending"
    assert rows[0]["operator_id"] == "op-001"


def test_route_json_summary():
    summary = route_to_json(_route())

    assert summary["operator_id"] == "op-001"
    assert summary["stats"]["stop_count"] == 2
    assert summary["stats"]["total_time_display"] == format_duration(summary["stats"]["total_time_min"])
    assert summary["completed_job_ids"] == ["done"]
    assert summary["stops"][1]["job_id"] == "B"
    assert summary["stops"][0]["estimated_arrival"].startswith("2025-01-05T06:03")
