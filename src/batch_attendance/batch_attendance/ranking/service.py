from __future__ import annotations

import logging
from typing import Sequence

from ..attendance.repository import AttendanceRepository
from ..members.model import Member
from ..members.repository import MemberRepository

logger = logging.getLogger(__name__)


class RankingAggregator:
    """Recomputes cumulative hours and the 1-based rank of every member.

    Safe to run while check-ins are being written: a snapshot taken mid-write
    is corrected by the next run.
    """

    def __init__(self, members: MemberRepository, attendance: AttendanceRepository):
        self._members = members
        self._attendance = attendance

    def recompute(self) -> None:
        members = list(self._members.list_all())
        totals = self._attendance.sum_hours_by_member()

        for m in members:
            self._members.set_total_hours(m.member_id, float(totals.get(m.member_id, 0.0)))

        # sorted() is stable, so ties keep registration order
        ordered = sorted(members, key=lambda m: float(totals.get(m.member_id, 0.0)), reverse=True)
        for rank, m in enumerate(ordered, start=1):
            self._members.set_rank(m.member_id, rank)

        logger.info("Ranking recomputed for %d members", len(members))

    def leaderboard(self) -> Sequence[Member]:
        members = list(self._members.list_all())
        return sorted(members, key=lambda m: (m.rank is None, m.rank or 0))
