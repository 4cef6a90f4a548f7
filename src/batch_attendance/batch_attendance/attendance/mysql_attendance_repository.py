from __future__ import annotations

import logging
from datetime import datetime
from typing import Mapping, Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..common.datetime_utils import as_utc
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_hours, db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_COLUMNS = "attendance_id, member_id, day, status, check_in_time, check_out_time, hours"


def _naive_utc(value: datetime) -> datetime:
    # DATETIME columns carry no zone; everything is stored as UTC
    return as_utc(value).replace(tzinfo=None)


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        member_id=int(r["member_id"]),
        day=str(r["day"]),
        status=AttendanceStatus(r["status"]),
        check_in_time=as_utc(r["check_in_time"]),
        check_out_time=as_utc(r["check_out_time"]) if r.get("check_out_time") else None,
        hours=as_hours(r.get("hours")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_member_and_day(self, member_id: int, day: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE member_id=%s AND day=%s",
                (int(member_id), day),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_checkin(self, *, member_id: int, day: str, check_in_time: datetime) -> Optional[int]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(member_id, day, status, check_in_time)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (int(member_id), day, AttendanceStatus.IN.value, _naive_utc(check_in_time)),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            if not is_duplicate_key(e):
                raise
            logger.info("Check-in for member %s on %s already recorded", member_id, day)
            return None

    def update_checkout(self, *, attendance_id: int, check_out_time: datetime, hours: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET status=%s, check_out_time=%s, hours=%s
                WHERE attendance_id=%s AND status=%s
                """,
                (
                    AttendanceStatus.OUT.value,
                    _naive_utc(check_out_time),
                    round(float(hours), 4),
                    int(attendance_id),
                    AttendanceStatus.IN.value,
                ),
            )
            return cur.rowcount > 0

    def update_hours(self, *, attendance_id: int, hours: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_records SET hours=%s WHERE attendance_id=%s",
                (round(float(hours), 4), int(attendance_id)),
            )
            return cur.rowcount > 0

    def list_for_day(self, day: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE day=%s ORDER BY check_in_time ASC",
                (day,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def sum_hours_by_member(self) -> Mapping[int, float]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT member_id, COALESCE(SUM(hours), 0) AS total_hours
                FROM attendance_records
                GROUP BY member_id
                """
            )
            return {int(r["member_id"]): as_hours(r["total_hours"]) or 0.0 for r in fetchall(cur)}
