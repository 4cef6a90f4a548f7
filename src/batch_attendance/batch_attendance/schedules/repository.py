from __future__ import annotations

from typing import Optional, Protocol

from .model import WeeklySchedule


class CourseScheduleRepository(Protocol):
    def get_schedule_for_member(self, member_id: int) -> Optional[WeeklySchedule]:
        """Effective schedule of the course the member's batch belongs to.

        None means the course is scheduleless (free-form check-in).
        """

        raise NotImplementedError
