from datetime import datetime, timedelta, timezone

import pytest

from batch_attendance.common.datetime_utils import day_key
from batch_attendance.core.exceptions import ScheduleConfigurationError
from batch_attendance.schedules.model import DaySchedule, WeeklySchedule
from batch_attendance.schedules.resolver import ScheduleResolver, resolve_session

UTC = timezone.utc
OFFSET = 180


def test_monday_session_is_anchored_to_utc_by_subtracting_offset(monday_schedule):
    # Monday 2025-01-06, local 10:00 (UTC+3)
    window = resolve_session(monday_schedule, datetime(2025, 1, 6, 7, 0, tzinfo=UTC), utc_offset_minutes=OFFSET)

    assert window.start == datetime(2025, 1, 6, 6, 0, tzinfo=UTC)
    assert window.end == datetime(2025, 1, 6, 8, 0, tzinfo=UTC)


@pytest.mark.parametrize("day", [5, 7, 8, 9, 10, 11])
def test_days_without_entry_have_no_session(monday_schedule, day):
    reference = datetime(2025, 1, day, 9, 0, tzinfo=UTC)

    assert resolve_session(monday_schedule, reference, utc_offset_minutes=OFFSET) is None


def test_weekday_is_read_in_configured_offset_not_utc(monday_schedule):
    # Sunday 22:30 UTC is already Monday 01:30 at UTC+3
    reference = datetime(2025, 1, 5, 22, 30, tzinfo=UTC)

    window = resolve_session(monday_schedule, reference, utc_offset_minutes=OFFSET)

    assert window is not None
    assert window.start == datetime(2025, 1, 6, 6, 0, tzinfo=UTC)


def test_window_falls_on_the_local_day_of_the_reference():
    schedule = WeeklySchedule(days={d: DaySchedule(start_time="00:30", end_time="23:45") for d in range(7)})

    for hour in range(0, 24, 5):
        reference = datetime(2025, 3, 12, hour, 0, tzinfo=UTC)
        window = resolve_session(schedule, reference, utc_offset_minutes=OFFSET)

        assert window.end > window.start
        assert day_key(window.start, OFFSET) == day_key(reference, OFFSET)
        assert day_key(window.end, OFFSET) == day_key(reference, OFFSET)


def test_negative_offset_moves_instants_forward():
    schedule = WeeklySchedule(days={1: DaySchedule(start_time="09:00", end_time="10:00")})

    window = resolve_session(schedule, datetime(2025, 1, 6, 15, 0, tzinfo=UTC), utc_offset_minutes=-300)

    assert window.start == datetime(2025, 1, 6, 14, 0, tzinfo=UTC)


@pytest.mark.parametrize(
    "start,end",
    [
        ("22:00", "01:00"),  # crosses midnight
        ("09:00", "09:00"),
        ("9h", "11:00"),
        ("09:00", "25:00"),
    ],
)
def test_invalid_day_schedule_is_a_configuration_error(start, end):
    schedule = WeeklySchedule(days={1: DaySchedule(start_time=start, end_time=end)})

    with pytest.raises(ScheduleConfigurationError):
        resolve_session(schedule, datetime(2025, 1, 6, 7, 0, tzinfo=UTC), utc_offset_minutes=OFFSET)


def test_resolver_without_schedule_returns_none():
    resolver = ScheduleResolver(utc_offset_minutes=OFFSET)

    assert resolver.resolve(None, datetime(2025, 1, 6, 7, 0, tzinfo=UTC)) is None


def test_naive_reference_is_treated_as_utc(monday_schedule):
    aware = resolve_session(monday_schedule, datetime(2025, 1, 6, 7, 0, tzinfo=UTC), utc_offset_minutes=OFFSET)
    naive = resolve_session(monday_schedule, datetime(2025, 1, 6, 7, 0), utc_offset_minutes=OFFSET)

    assert aware == naive
    assert aware.end - aware.start == timedelta(hours=2)
