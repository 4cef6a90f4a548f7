from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Sequence

from ..common.datetime_utils import as_utc, day_key, utc_now
from ..core.constants import DEFAULT_UTC_OFFSET_MINUTES
from ..core.enums import AttendanceStatus, ScanAction
from ..core.exceptions import (
    AlreadyCheckedOut,
    MemberBlocked,
    MemberNotFound,
    NoActiveSession,
    OutsideWindow,
    ValidationError,
)
from ..members.repository import MemberRepository
from ..schedules.repository import CourseScheduleRepository
from ..schedules.resolver import ScheduleResolver
from .hours.base import HoursCalculator
from .hours.session_calculator import SessionHoursCalculator
from .model import AttendanceRecord, ScanResult
from .policy import CheckInPolicy
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceLedger:
    """Owns the per-member, per-day attendance record.

    ABSENT (no record) -> IN -> OUT, with OUT terminal for the day. Duplicate
    check-ins are answered with the existing record; uniqueness of the
    (member, day) key is left to the repository.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        members: MemberRepository,
        schedules: CourseScheduleRepository,
        *,
        utc_offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES,
        resolver: ScheduleResolver | None = None,
        policy: CheckInPolicy | None = None,
        hours_calculator: HoursCalculator | None = None,
        on_checkout: Callable[[int], None] | None = None,
    ):
        self._attendance = attendance
        self._members = members
        self._schedules = schedules
        self._offset = int(utc_offset_minutes)
        self._resolver = resolver or ScheduleResolver(utc_offset_minutes=self._offset)
        self._policy = policy or CheckInPolicy(utc_offset_minutes=self._offset)
        self._hours = hours_calculator or SessionHoursCalculator()
        self._on_checkout = on_checkout

    def day_for(self, now: datetime | None = None) -> str:
        return day_key(now or utc_now(), self._offset)

    def check_in(self, member_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = as_utc(now or utc_now())

        member = self._members.get_by_id(member_id)
        if not member:
            raise MemberNotFound("Member not found")
        if member.is_blocked:
            raise MemberBlocked(member_id)

        day = day_key(now, self._offset)
        existing = self._attendance.get_for_member_and_day(member_id, day)
        if existing:
            return existing

        schedule = self._schedules.get_schedule_for_member(member_id)
        window = self._resolver.resolve(schedule, now)
        decision = self._policy.evaluate(now, window)
        if not decision.allowed:
            logger.info("Check-in refused for member %s: %s", member_id, decision.reason)
            raise OutsideWindow(decision.reason)

        # A concurrent request may have inserted while the schedule was resolved.
        existing = self._attendance.get_for_member_and_day(member_id, day)
        if existing:
            return existing

        attendance_id = self._attendance.create_checkin(member_id=member_id, day=day, check_in_time=now)
        if attendance_id is None:
            existing = self._attendance.get_for_member_and_day(member_id, day)
            if existing is None:
                raise ValidationError("Check-in could not be recorded, please retry")
            return existing

        if member.absence_streak > 0:
            self._members.reset_absence_streak(member_id)

        logger.info("Member %s checked in for %s", member_id, day)
        return AttendanceRecord(
            attendance_id=attendance_id,
            member_id=member_id,
            day=day,
            status=AttendanceStatus.IN,
            check_in_time=now,
        )

    def check_out(self, member_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = as_utc(now or utc_now())
        day = day_key(now, self._offset)

        record = self._attendance.get_for_member_and_day(member_id, day)
        if not record:
            raise NoActiveSession()
        if record.status == AttendanceStatus.OUT:
            raise AlreadyCheckedOut()

        schedule = self._schedules.get_schedule_for_member(member_id)
        window = self._resolver.resolve(schedule, record.check_in_time)
        hours = self._hours.compute_hours(
            record.check_in_time,
            now,
            window.end if window else None,
            now=now,
        )

        if not self._attendance.update_checkout(attendance_id=record.attendance_id, check_out_time=now, hours=hours):
            raise AlreadyCheckedOut()

        logger.info("Member %s checked out for %s (%.2f h)", member_id, day, hours)
        self._after_checkout(member_id)
        return replace(record, status=AttendanceStatus.OUT, check_out_time=now, hours=hours)

    def scan(self, member_id: int, *, now: datetime | None = None) -> ScanResult:
        """Token scan: first scan checks in, second checks out, third is refused.

        A member blocked while checked in can still close the open session.
        """

        now = as_utc(now or utc_now())

        member = self._members.get_by_id(member_id)
        if not member:
            raise MemberNotFound("Member not found")

        record = self._attendance.get_for_member_and_day(member_id, day_key(now, self._offset))
        if record is not None and record.status == AttendanceStatus.IN:
            return ScanResult(action=ScanAction.CHECK_OUT, record=self.check_out(member_id, now=now))
        if member.is_blocked:
            raise MemberBlocked(member_id)
        if record is None:
            return ScanResult(action=ScanAction.CHECK_IN, record=self.check_in(member_id, now=now))
        raise AlreadyCheckedOut()

    def records_for_day(self, day: str) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_day(day)

    def present_member_ids(self, day: str) -> set[int]:
        """Members with any record (IN or OUT) for the day."""
        return {r.member_id for r in self._attendance.list_for_day(day)}

    def _after_checkout(self, member_id: int) -> None:
        if not self._on_checkout:
            return
        try:
            self._on_checkout(member_id)
        except Exception:
            # checkout is already committed
            logger.exception("Post-checkout hook failed for member %s", member_id)
