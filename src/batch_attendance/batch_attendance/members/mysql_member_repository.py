from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_hours, db_cursor, fetchall, fetchone
from .model import Member
from .repository import MemberRepository

_COLUMNS = """
    member_id, full_name, email, batch_id, absence_streak, is_blocked,
    total_hours, `rank`, last_swept_day
"""


def _to_member(r: dict) -> Member:
    return Member(
        member_id=int(r["member_id"]),
        full_name=r["full_name"],
        email=r["email"],
        batch_id=r.get("batch_id"),
        absence_streak=int(r.get("absence_streak") or 0),
        is_blocked=bool(r.get("is_blocked")),
        total_hours=as_hours(r.get("total_hours")) or 0.0,
        rank=r.get("rank"),
        last_swept_day=r.get("last_swept_day"),
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, member_id: int) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members WHERE member_id=%s", (int(member_id),))
            r = fetchone(cur)
            return _to_member(r) if r else None

    def list_all(self) -> Sequence[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members ORDER BY created_at ASC, member_id ASC")
            return [_to_member(r) for r in fetchall(cur)]

    def reset_absence_streak(self, member_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE members SET absence_streak=0 WHERE member_id=%s AND absence_streak<>0",
                (int(member_id),),
            )

    def increment_absence_streak(self, member_id: int, *, day: str) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE members
                SET absence_streak = absence_streak + 1, last_swept_day=%s
                WHERE member_id=%s AND is_blocked=0
                  AND (last_swept_day IS NULL OR last_swept_day<>%s)
                """,
                (day, int(member_id), day),
            )
            if cur.rowcount == 0:
                return None

            cur.execute("SELECT absence_streak FROM members WHERE member_id=%s", (int(member_id),))
            r = fetchone(cur)
            return int(r["absence_streak"]) if r else None

    def set_blocked(self, member_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE members SET is_blocked=1 WHERE member_id=%s AND is_blocked=0", (int(member_id),))
            return cur.rowcount > 0

    def set_total_hours(self, member_id: int, total_hours: float) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE members SET total_hours=%s WHERE member_id=%s",
                (round(float(total_hours), 4), int(member_id)),
            )

    def set_rank(self, member_id: int, rank: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE members SET `rank`=%s WHERE member_id=%s", (int(rank), int(member_id)))
