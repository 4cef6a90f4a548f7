from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Callable, Optional

from ..attendance.hours.base import HoursCalculator
from ..attendance.hours.session_calculator import SessionHoursCalculator
from ..attendance.repository import AttendanceRepository
from ..attendance.service import AttendanceLedger
from ..common.datetime_utils import as_utc, day_key, utc_now
from ..core.constants import (
    DEFAULT_ABSENCE_BLOCK_THRESHOLD,
    DEFAULT_ABSENCE_WARNING_THRESHOLD,
    DEFAULT_UTC_OFFSET_MINUTES,
)
from ..core.enums import AttendanceStatus
from ..core.exceptions import ScheduleConfigurationError
from ..members.model import Member
from ..members.repository import MemberRepository
from ..notifications.sender import NotificationSender
from ..ranking.service import RankingAggregator
from ..schedules.repository import CourseScheduleRepository
from ..schedules.resolver import ScheduleResolver

logger = logging.getLogger(__name__)


@dataclass
class SweepSummary:
    day: str
    checked: int = 0
    warnings_sent: int = 0
    blocks_applied: int = 0
    hours_finalized: int = 0
    already_swept: int = 0
    notification_failures: int = 0
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "date": self.day,
            "checked": self.checked,
            "warningsSent": self.warnings_sent,
            "blocksApplied": self.blocks_applied,
            "hoursFinalized": self.hours_finalized,
            "alreadySwept": self.already_swept,
            "notificationFailures": self.notification_failures,
            "errors": list(self.errors),
        }


class EscalationSweep:
    """Once-a-day absence pass: finalize open records, count absences, escalate.

    Members are processed one after another so a block is visible to the next
    check-in. Each absent member is counted at most once per day (the member
    repository refuses a second increment for the same day), which makes a
    re-run for the same day a no-op.
    """

    def __init__(
        self,
        ledger: AttendanceLedger,
        members: MemberRepository,
        attendance: AttendanceRepository,
        schedules: CourseScheduleRepository,
        notifier: NotificationSender,
        *,
        ranking: Optional[RankingAggregator] = None,
        utc_offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES,
        warning_threshold: int = DEFAULT_ABSENCE_WARNING_THRESHOLD,
        block_threshold: int = DEFAULT_ABSENCE_BLOCK_THRESHOLD,
        hours_calculator: HoursCalculator | None = None,
    ):
        self._ledger = ledger
        self._members = members
        self._attendance = attendance
        self._schedules = schedules
        self._notifier = notifier
        self._ranking = ranking
        self._offset = int(utc_offset_minutes)
        self._resolver = ScheduleResolver(utc_offset_minutes=self._offset)
        self._warning_threshold = int(warning_threshold)
        self._block_threshold = int(block_threshold)
        self._hours = hours_calculator or SessionHoursCalculator()

    def run(self, day: str | None = None, *, now: datetime | None = None) -> SweepSummary:
        now = as_utc(now or utc_now())
        day = day or day_key(now, self._offset)
        summary = SweepSummary(day=day)
        logger.info("Starting absence sweep for %s", day)

        self._finalize_open_records(day, now, summary)

        present = self._ledger.present_member_ids(day)
        for member in self._members.list_all():
            summary.checked += 1
            if member.is_blocked:
                continue

            if member.member_id in present:
                if member.absence_streak > 0:
                    self._members.reset_absence_streak(member.member_id)
                    logger.info("Member %s present, absence streak reset", member.member_id)
                continue

            self._record_absence(member, day, summary)

        if self._ranking is not None:
            try:
                self._ranking.recompute()
            except Exception as e:
                summary.errors.append(f"ranking recompute failed: {e}")
                logger.exception("Ranking recompute after sweep for %s failed", day)

        logger.info(
            "Absence sweep for %s done: checked=%d warnings=%d blocks=%d hours=%d skipped=%d failures=%d",
            day,
            summary.checked,
            summary.warnings_sent,
            summary.blocks_applied,
            summary.hours_finalized,
            summary.already_swept,
            summary.notification_failures,
        )
        return summary

    def _finalize_open_records(self, day: str, now: datetime, summary: SweepSummary) -> None:
        for record in self._attendance.list_for_day(day):
            if record.status != AttendanceStatus.IN or record.check_out_time is not None:
                continue
            try:
                schedule = self._schedules.get_schedule_for_member(record.member_id)
                window = self._resolver.resolve(schedule, record.check_in_time)
                if window is None:
                    continue

                hours = self._hours.compute_hours(record.check_in_time, None, window.end, now=now)
                self._attendance.update_hours(attendance_id=record.attendance_id, hours=hours)
                summary.hours_finalized += 1
            except ScheduleConfigurationError as e:
                logger.error("Cannot finalize hours for attendance %s: %s", record.attendance_id, e)
                summary.errors.append(f"attendance {record.attendance_id}: {e}")
            except Exception as e:
                logger.exception("Finalizing hours for attendance %s failed", record.attendance_id)
                summary.errors.append(f"attendance {record.attendance_id}: {e}")

    def _record_absence(self, member: Member, day: str, summary: SweepSummary) -> None:
        streak = self._members.increment_absence_streak(member.member_id, day=day)
        if streak is None:
            summary.already_swept += 1
            return

        member = replace(member, absence_streak=streak)
        logger.info("Member %s absent, streak=%d", member.member_id, streak)

        if streak == self._warning_threshold:
            if self._notify(member.member_id, lambda: self._notifier.send_warning(member, streak), summary):
                summary.warnings_sent += 1

        if streak >= self._block_threshold and self._members.set_blocked(member.member_id):
            summary.blocks_applied += 1
            logger.warning("Member %s blocked after %d absences", member.member_id, streak)
            blocked = replace(member, is_blocked=True)
            self._notify(member.member_id, lambda: self._notifier.send_block(blocked), summary)

    def _notify(self, member_id: int, send: Callable[[], None], summary: SweepSummary) -> bool:
        try:
            send()
            return True
        except Exception as e:
            summary.notification_failures += 1
            summary.errors.append(f"notification to member {member_id} failed: {e}")
            logger.exception("Notification to member %s failed", member_id)
            return False
