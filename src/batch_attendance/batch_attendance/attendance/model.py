from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus, ScanAction


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one member's attendance for one local calendar day."""

    attendance_id: int
    member_id: int
    day: str
    status: AttendanceStatus
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    hours: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "member_id": self.member_id,
            "date": self.day,
            "status": self.status.value,
            "check_in_time": self.check_in_time.isoformat(),
            "check_out_time": self.check_out_time.isoformat() if self.check_out_time else None,
            "hours": self.hours,
        }


@dataclass(frozen=True)
class ScanResult:
    action: ScanAction
    record: AttendanceRecord
