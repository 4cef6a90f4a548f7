from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from ..common.datetime_utils import to_local
from ..common.validators import require_clock
from ..core.constants import DEFAULT_UTC_OFFSET_MINUTES
from ..core.exceptions import ScheduleConfigurationError
from .model import SessionWindow, WeeklySchedule


def resolve_session(
    schedule: WeeklySchedule,
    reference: datetime,
    *,
    utc_offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES,
) -> Optional[SessionWindow]:
    """Session window on the local calendar day of `reference`, or None.

    Raises ScheduleConfigurationError for malformed clock strings or a
    session that ends at/before its start (overnight sessions unsupported).
    """

    local = to_local(reference, utc_offset_minutes)
    weekday = (local.weekday() + 1) % 7  # Python: Monday=0; schedules: Sunday=0

    day = schedule.day_schedule(weekday)
    if day is None:
        return None

    start_clock = require_clock(day.start_time, "startTime")
    end_clock = require_clock(day.end_time, "endTime")
    if end_clock <= start_clock:
        raise ScheduleConfigurationError(
            f"Session must end after it starts ({day.start_time}-{day.end_time})"
        )

    offset = timedelta(minutes=utc_offset_minutes)
    start = (datetime.combine(local.date(), start_clock) - offset).replace(tzinfo=timezone.utc)
    end = (datetime.combine(local.date(), end_clock) - offset).replace(tzinfo=timezone.utc)
    return SessionWindow(start=start, end=end)


@dataclass(frozen=True)
class ScheduleResolver:
    """`resolve_session` bound to the configured offset."""

    utc_offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES

    def resolve(self, schedule: Optional[WeeklySchedule], reference: datetime) -> Optional[SessionWindow]:
        if schedule is None:
            return None
        return resolve_session(schedule, reference, utc_offset_minutes=self.utc_offset_minutes)
