from __future__ import annotations

import json
from typing import Optional

from ..core.exceptions import ScheduleConfigurationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import WeeklySchedule
from .repository import CourseScheduleRepository


def _load_schedule(raw) -> Optional[WeeklySchedule]:
    if raw is None:
        return None
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise ScheduleConfigurationError(f"Course schedule is not valid JSON: {e}") from e
    if not raw:
        return None
    return WeeklySchedule.from_dict(raw)


class MySQLCourseScheduleRepository(CourseScheduleRepository):
    """Reads `courses.schedule` (JSON) through the member's batch.

    `default_schedule` is handed back for courses stored without a schedule;
    leave it None to treat those courses as scheduleless.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, default_schedule: Optional[WeeklySchedule] = None):
        self._conn_factory = conn_factory
        self._default_schedule = default_schedule

    def get_schedule_for_member(self, member_id: int) -> Optional[WeeklySchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT c.schedule
                FROM members m
                JOIN batches b ON b.batch_id = m.batch_id
                JOIN courses c ON c.course_id = b.course_id
                WHERE m.member_id=%s
                """,
                (int(member_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return _load_schedule(r.get("schedule")) or self._default_schedule
