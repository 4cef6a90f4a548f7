from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

import pytest

from batch_attendance.attendance.model import AttendanceRecord
from batch_attendance.core.enums import AttendanceStatus
from batch_attendance.members.model import Member
from batch_attendance.schedules.model import DaySchedule, WeeklySchedule


class InMemoryMembers:
    def __init__(self, members: list[Member] | None = None):
        self._by_id: dict[int, Member] = {}
        for m in members or []:
            self.add(m)

    def add(self, member: Member) -> Member:
        self._by_id[member.member_id] = member
        return member

    def get_by_id(self, member_id: int) -> Optional[Member]:
        return self._by_id.get(member_id)

    def list_all(self):
        return list(self._by_id.values())

    def reset_absence_streak(self, member_id: int) -> None:
        self._by_id[member_id] = replace(self._by_id[member_id], absence_streak=0)

    def increment_absence_streak(self, member_id: int, *, day: str) -> Optional[int]:
        m = self._by_id[member_id]
        if m.is_blocked or m.last_swept_day == day:
            return None
        m = replace(m, absence_streak=m.absence_streak + 1, last_swept_day=day)
        self._by_id[member_id] = m
        return m.absence_streak

    def set_blocked(self, member_id: int) -> bool:
        m = self._by_id[member_id]
        if m.is_blocked:
            return False
        self._by_id[member_id] = replace(m, is_blocked=True)
        return True

    def set_total_hours(self, member_id: int, total_hours: float) -> None:
        self._by_id[member_id] = replace(self._by_id[member_id], total_hours=total_hours)

    def set_rank(self, member_id: int, rank: int) -> None:
        self._by_id[member_id] = replace(self._by_id[member_id], rank=rank)


class InMemoryAttendance:
    def __init__(self):
        self._by_member_day: dict[tuple[int, str], AttendanceRecord] = {}
        self._id = 0

    def all(self) -> list[AttendanceRecord]:
        return list(self._by_member_day.values())

    def get_for_member_and_day(self, member_id: int, day: str) -> Optional[AttendanceRecord]:
        return self._by_member_day.get((member_id, day))

    def create_checkin(self, *, member_id: int, day: str, check_in_time: datetime) -> Optional[int]:
        if (member_id, day) in self._by_member_day:
            return None
        self._id += 1
        self._by_member_day[(member_id, day)] = AttendanceRecord(
            attendance_id=self._id,
            member_id=member_id,
            day=day,
            status=AttendanceStatus.IN,
            check_in_time=check_in_time,
        )
        return self._id

    def _find(self, attendance_id: int) -> Optional[AttendanceRecord]:
        for rec in self._by_member_day.values():
            if rec.attendance_id == attendance_id:
                return rec
        return None

    def update_checkout(self, *, attendance_id: int, check_out_time: datetime, hours: float) -> bool:
        rec = self._find(attendance_id)
        if not rec or rec.status != AttendanceStatus.IN:
            return False
        self._by_member_day[(rec.member_id, rec.day)] = replace(
            rec, status=AttendanceStatus.OUT, check_out_time=check_out_time, hours=hours
        )
        return True

    def update_hours(self, *, attendance_id: int, hours: float) -> bool:
        rec = self._find(attendance_id)
        if not rec:
            return False
        self._by_member_day[(rec.member_id, rec.day)] = replace(rec, hours=hours)
        return True

    def list_for_day(self, day: str):
        return [r for r in self._by_member_day.values() if r.day == day]

    def sum_hours_by_member(self):
        totals: dict[int, float] = {}
        for r in self._by_member_day.values():
            totals[r.member_id] = totals.get(r.member_id, 0.0) + (r.hours or 0.0)
        return totals


class InMemorySchedules:
    def __init__(self, by_member: dict[int, WeeklySchedule] | None = None):
        self.by_member = dict(by_member or {})

    def get_schedule_for_member(self, member_id: int) -> Optional[WeeklySchedule]:
        return self.by_member.get(member_id)


class RecordingNotifier:
    def __init__(self, *, fail: bool = False):
        self.fail = fail
        self.warnings: list[tuple[int, int]] = []
        self.blocks: list[int] = []

    def send_warning(self, member: Member, streak: int) -> None:
        if self.fail:
            raise ConnectionError("smtp down")
        self.warnings.append((member.member_id, streak))

    def send_block(self, member: Member) -> None:
        if self.fail:
            raise ConnectionError("smtp down")
        self.blocks.append(member.member_id)


def make_member(member_id: int, **overrides) -> Member:
    fields = {
        "member_id": member_id,
        "full_name": f"Member {member_id}",
        "email": f"member{member_id}@example.com",
        "batch_id": 1,
    }
    fields.update(overrides)
    return Member(**fields)


@pytest.fixture
def monday_schedule() -> WeeklySchedule:
    return WeeklySchedule(days={1: DaySchedule(start_time="09:00", end_time="11:00")})


@pytest.fixture
def members() -> InMemoryMembers:
    return InMemoryMembers([make_member(1), make_member(2), make_member(3)])


@pytest.fixture
def attendance() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def schedules(monday_schedule) -> InMemorySchedules:
    return InMemorySchedules({1: monday_schedule, 2: monday_schedule, 3: monday_schedule})


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()
