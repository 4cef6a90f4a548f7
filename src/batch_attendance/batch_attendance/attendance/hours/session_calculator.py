from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...common.datetime_utils import as_utc
from .base import HoursCalculator

_SECONDS_PER_HOUR = 3600.0


class SessionHoursCalculator(HoursCalculator):
    """Standard rule: (out - in) in hours, not below 0.

    Without a checkout the session is closed at min(now, scheduled end), so a
    member who forgets to scan out earns the scheduled time but no more.
    """

    def compute_hours(
        self,
        check_in: datetime,
        check_out: Optional[datetime],
        scheduled_end: Optional[datetime],
        *,
        now: datetime,
    ) -> float:
        if check_out is not None:
            end = as_utc(check_out)
        elif scheduled_end is not None:
            end = min(as_utc(now), as_utc(scheduled_end))
        else:
            end = as_utc(now)

        seconds = (end - as_utc(check_in)).total_seconds()
        return max(seconds / _SECONDS_PER_HOUR, 0.0)
