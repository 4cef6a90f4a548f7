from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

from ..core.constants import CLOCK_FORMAT
from ..core.exceptions import ScheduleConfigurationError


def duration_between(start_time: str, end_time: str) -> int:
    """Minutes between two HH:mm strings (negative if end is before start)."""
    start = datetime.strptime(start_time, CLOCK_FORMAT)
    end = datetime.strptime(end_time, CLOCK_FORMAT)
    return int((end - start).total_seconds() // 60)


@dataclass(frozen=True)
class DaySchedule:
    """One weekday's session, clock strings in the configured UTC offset."""

    start_time: str
    end_time: str
    duration_minutes: Optional[int] = None

    @property
    def duration(self) -> int:
        if self.duration_minutes is not None:
            return int(self.duration_minutes)
        return duration_between(self.start_time, self.end_time)


@dataclass(frozen=True)
class SessionWindow:
    """Concrete start/end instants (UTC) of a session on one calendar day."""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class WeeklySchedule:
    """A course's recurring meeting pattern.

    Weekdays are 0=Sunday..6=Saturday. Both stored shapes are normalized here:

    - current: ``{"days": {"1": {"startTime": "09:00", "endTime": "11:00"}}}``
    - legacy: ``{"weekdays": [1, 3], "startTime": "09:00", "endTime": "11:00"}``

    A weekday listed in both takes the current-form entry.
    """

    days: Mapping[int, DaySchedule] = field(default_factory=dict)

    def day_schedule(self, weekday: int) -> Optional[DaySchedule]:
        return self.days.get(int(weekday))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WeeklySchedule":
        if not isinstance(data, Mapping):
            raise ScheduleConfigurationError(f"Schedule must be an object, got {type(data).__name__}")

        days: dict[int, DaySchedule] = {}

        start_time = data.get("startTime")
        end_time = data.get("endTime")
        if start_time and end_time:
            weekdays = data.get("weekdays") or []
            if not isinstance(weekdays, (list, tuple)):
                raise ScheduleConfigurationError("Schedule 'weekdays' must be a list")
            for weekday in weekdays:
                days[_weekday(weekday)] = DaySchedule(
                    start_time=str(start_time),
                    end_time=str(end_time),
                    duration_minutes=_duration(data.get("duration")),
                )

        entries = data.get("days") or {}
        if not isinstance(entries, Mapping):
            raise ScheduleConfigurationError("Schedule 'days' must be an object keyed by weekday")
        for weekday, entry in entries.items():
            if not isinstance(entry, Mapping) or not entry.get("startTime") or not entry.get("endTime"):
                raise ScheduleConfigurationError(f"Weekday {weekday!r} needs startTime and endTime")
            days[_weekday(weekday)] = DaySchedule(
                start_time=str(entry["startTime"]),
                end_time=str(entry["endTime"]),
                duration_minutes=_duration(entry.get("duration")),
            )

        return cls(days=days)


def _weekday(value: Any) -> int:
    try:
        weekday = int(value)
    except (TypeError, ValueError) as e:
        raise ScheduleConfigurationError(f"Invalid weekday {value!r}") from e
    if not 0 <= weekday <= 6:
        raise ScheduleConfigurationError(f"Weekday {weekday} out of range 0..6")
    return weekday


def _duration(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ScheduleConfigurationError(f"Invalid duration {value!r}") from e


# Twice a week: Monday and Wednesday, 09:00-11:00.
DEFAULT_WEEKLY_SCHEDULE = WeeklySchedule(
    days={
        1: DaySchedule(start_time="09:00", end_time="11:00", duration_minutes=120),
        3: DaySchedule(start_time="09:00", end_time="11:00", duration_minutes=120),
    }
)
