from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.policy import CheckInPolicy
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceLedger
from .common.background import run_in_background
from .core.constants import (
    DEFAULT_ABSENCE_BLOCK_THRESHOLD,
    DEFAULT_ABSENCE_WARNING_THRESHOLD,
    DEFAULT_CHECKIN_OPEN_MINUTES,
    DEFAULT_UTC_OFFSET_MINUTES,
)
from .database.connection import DBConfig, DatabaseConnection
from .escalation.service import EscalationSweep
from .members.mysql_member_repository import MySQLMemberRepository
from .members.repository import MemberRepository
from .notifications.sender import NotificationSender
from .ranking.service import RankingAggregator
from .schedules.model import DEFAULT_WEEKLY_SCHEDULE
from .schedules.mysql_schedule_repository import MySQLCourseScheduleRepository
from .schedules.repository import CourseScheduleRepository


@dataclass(frozen=True)
class Container:
    members_repo: MemberRepository
    attendance_repo: AttendanceRepository
    schedules_repo: CourseScheduleRepository

    ledger: AttendanceLedger
    ranking: RankingAggregator
    sweep: EscalationSweep

    conn: Optional[DatabaseConnection] = None


def wire_services(
    *,
    members: MemberRepository,
    attendance: AttendanceRepository,
    schedules: CourseScheduleRepository,
    notifier: NotificationSender,
    utc_offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES,
    checkin_open_minutes: int = DEFAULT_CHECKIN_OPEN_MINUTES,
    warning_threshold: int = DEFAULT_ABSENCE_WARNING_THRESHOLD,
    block_threshold: int = DEFAULT_ABSENCE_BLOCK_THRESHOLD,
    recompute_in_background: bool = True,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    ranking = RankingAggregator(members, attendance)

    def _recompute_after_checkout(_member_id: int) -> None:
        if recompute_in_background:
            run_in_background(ranking.recompute, name="ranking-recompute")
        else:
            ranking.recompute()

    ledger = AttendanceLedger(
        attendance,
        members,
        schedules,
        utc_offset_minutes=utc_offset_minutes,
        policy=CheckInPolicy(utc_offset_minutes=utc_offset_minutes, open_minutes=checkin_open_minutes),
        on_checkout=_recompute_after_checkout,
    )
    sweep = EscalationSweep(
        ledger,
        members,
        attendance,
        schedules,
        notifier,
        ranking=ranking,
        utc_offset_minutes=utc_offset_minutes,
        warning_threshold=warning_threshold,
        block_threshold=block_threshold,
    )

    return Container(
        members_repo=members,
        attendance_repo=attendance,
        schedules_repo=schedules,
        ledger=ledger,
        ranking=ranking,
        sweep=sweep,
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    notifier: NotificationSender,
    use_default_schedule: bool = False,
    **options,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_services(
        members=MySQLMemberRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        schedules=MySQLCourseScheduleRepository(
            conn,
            default_schedule=DEFAULT_WEEKLY_SCHEDULE if use_default_schedule else None,
        ),
        notifier=notifier,
        conn=conn,
        **options,
    )
