from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_member_and_day(self, member_id: int, day: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(self, *, member_id: int, day: str, check_in_time: datetime) -> Optional[int]:
        """Insert the IN record for (member_id, day).

        Returns the new attendance_id, or None when a record for the key
        already exists (the storage layer enforces uniqueness).
        """

        raise NotImplementedError

    def update_checkout(self, *, attendance_id: int, check_out_time: datetime, hours: float) -> bool:
        """IN -> OUT. Returns False when the record is not IN any more."""

        raise NotImplementedError

    def update_hours(self, *, attendance_id: int, hours: float) -> bool:
        raise NotImplementedError

    def list_for_day(self, day: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def sum_hours_by_member(self) -> Mapping[int, float]:
        """Total recorded hours per member id (members without hours may be absent)."""

        raise NotImplementedError
