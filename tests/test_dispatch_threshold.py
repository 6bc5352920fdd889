from datetime import datetime, timedelta, timezone

import pytest

from plowroute.errors import EngineValidationError
from plowroute.models.domain import WeatherSample
from plowroute.services.dispatch import evaluate_dispatch_trigger
from plowroute.services.dispatch.threshold import ACTIVE_MESSAGE, BELOW_THRESHOLD_MESSAGE

NOW = datetime(2025, 1, 5, 5, 0, tzinfo=timezone.utc)


def test_projects_trigger_time_when_close_to_threshold():
    sample = WeatherSample(threshold_inches=3.0, accumulated_inches=2.5, rate_inches_per_hour=0.5)

    trigger = evaluate_dispatch_trigger(sample, now=NOW)

    assert trigger.is_triggered is False
    assert trigger.next_trigger_time == NOW + timedelta(hours=1)
    assert trigger.message == 'Auto-dispatch will trigger at 0.5" more snowfall (est. 1.0 hours)'
    assert trigger.threshold_inches == 3.0
    assert trigger.current_inches == 2.5


@pytest.mark.parametrize("accumulated,expected", [(2.99, False), (3.0, True), (3.01, True), (6.2, True)])
def test_trigger_boundary_is_inclusive(accumulated, expected):
    sample = WeatherSample(threshold_inches=3.0, accumulated_inches=accumulated, rate_inches_per_hour=1.5)

    trigger = evaluate_dispatch_trigger(sample, now=NOW)

    assert trigger.is_triggered is expected


def test_active_trigger_reports_now():
    sample = WeatherSample(threshold_inches=3.0, accumulated_inches=6.2, rate_inches_per_hour=1.5)

    trigger = evaluate_dispatch_trigger(sample, now=NOW)

    assert trigger.next_trigger_time == NOW
    assert trigger.message == ACTIVE_MESSAGE


@pytest.mark.parametrize("rate", [0.0, -0.2, 0.1])
def test_no_projection_without_snowfall_or_beyond_a_day(rate):
    # 0.1 in/hr needs 25 hours for the remaining 2.5 inches
    sample = WeatherSample(threshold_inches=3.0, accumulated_inches=0.5, rate_inches_per_hour=rate)

    trigger = evaluate_dispatch_trigger(sample, now=NOW)

    assert trigger.is_triggered is False
    assert trigger.next_trigger_time is None
    assert trigger.message == BELOW_THRESHOLD_MESSAGE


def test_custom_horizon_limits_projection():
    sample = WeatherSample(threshold_inches=3.0, accumulated_inches=1.0, rate_inches_per_hour=0.5)

    assert evaluate_dispatch_trigger(sample, now=NOW, horizon_hours=5).next_trigger_time == NOW + timedelta(hours=4)
    assert evaluate_dispatch_trigger(sample, now=NOW, horizon_hours=4).next_trigger_time is None


def test_negative_accumulation_is_rejected():
    with pytest.raises(EngineValidationError):
        evaluate_dispatch_trigger(
            WeatherSample(threshold_inches=3.0, accumulated_inches=-1.0, rate_inches_per_hour=0.5), now=NOW
        )
