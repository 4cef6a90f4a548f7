from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import as_utc, format_local_time
from ..core.constants import DEFAULT_CHECKIN_OPEN_MINUTES, DEFAULT_UTC_OFFSET_MINUTES
from ..schedules.model import SessionWindow


@dataclass(frozen=True)
class CheckInDecision:
    allowed: bool
    reason: Optional[str] = None


def _plural_minutes(n: int) -> str:
    return f"{n} minute" if n == 1 else f"{n} minutes"


@dataclass(frozen=True)
class CheckInPolicy:
    """Decides whether a first scan of the day is accepted.

    The eligibility window runs from `open_minutes` before the session start
    through the session end, both ends inclusive. Without a window
    (scheduleless course) every check-in is accepted.
    """

    utc_offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES
    open_minutes: int = DEFAULT_CHECKIN_OPEN_MINUTES

    def evaluate(self, now: datetime, window: Optional[SessionWindow]) -> CheckInDecision:
        if window is None:
            return CheckInDecision(allowed=True)

        now = as_utc(now)
        open_time = window.start - timedelta(minutes=self.open_minutes)

        if now < open_time:
            minutes_until_open = math.ceil((open_time - now).total_seconds() / 60)
            starts_at = format_local_time(window.start, self.utc_offset_minutes)
            return CheckInDecision(
                allowed=False,
                reason=(
                    f"Check-in opens {self.open_minutes} minutes before class "
                    f"(in {_plural_minutes(minutes_until_open)}). Class starts at {starts_at}"
                ),
            )

        if now > window.end:
            ended_at = format_local_time(window.end, self.utc_offset_minutes)
            return CheckInDecision(
                allowed=False,
                reason=f"Check-in window has closed. Class ended at {ended_at}",
            )

        return CheckInDecision(allowed=True)
