from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status of a member's attendance record for one day."""

    IN = "IN"
    OUT = "OUT"


class ScanAction(str, Enum):
    """What a token scan ended up doing."""

    CHECK_IN = "CHECK_IN"
    CHECK_OUT = "CHECK_OUT"
