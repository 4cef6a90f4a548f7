from datetime import datetime, timezone

import pytest

from batch_attendance.ranking.service import RankingAggregator

from conftest import InMemoryAttendance, InMemoryMembers, make_member


def _record(attendance: InMemoryAttendance, member_id: int, day: str, hours: float) -> None:
    attendance_id = attendance.create_checkin(
        member_id=member_id,
        day=day,
        check_in_time=datetime(2025, 1, 6, 6, 0, tzinfo=timezone.utc),
    )
    attendance.update_checkout(
        attendance_id=attendance_id,
        check_out_time=datetime(2025, 1, 6, 8, 0, tzinfo=timezone.utc),
        hours=hours,
    )


def test_totals_and_ranks():
    members = InMemoryMembers([make_member(1), make_member(2), make_member(3)])
    attendance = InMemoryAttendance()
    _record(attendance, 1, "2025-01-06", 1.0)
    _record(attendance, 2, "2025-01-06", 2.0)
    _record(attendance, 2, "2025-01-08", 1.5)
    _record(attendance, 3, "2025-01-06", 1.25)

    RankingAggregator(members, attendance).recompute()

    assert members.get_by_id(2).total_hours == pytest.approx(3.5)
    assert [members.get_by_id(i).rank for i in (1, 2, 3)] == [3, 1, 2]


def test_ties_keep_registration_order():
    members = InMemoryMembers([make_member(7), make_member(3), make_member(5)])
    attendance = InMemoryAttendance()
    _record(attendance, 5, "2025-01-06", 2.0)

    ranking = RankingAggregator(members, attendance)
    ranking.recompute()

    assert [m.member_id for m in ranking.leaderboard()] == [5, 7, 3]
    assert members.get_by_id(7).total_hours == 0.0


def test_open_records_count_as_zero_until_finalized():
    members = InMemoryMembers([make_member(1)])
    attendance = InMemoryAttendance()
    attendance.create_checkin(member_id=1, day="2025-01-06", check_in_time=datetime(2025, 1, 6, tzinfo=timezone.utc))

    RankingAggregator(members, attendance).recompute()

    assert members.get_by_id(1).total_hours == 0.0
    assert members.get_by_id(1).rank == 1
