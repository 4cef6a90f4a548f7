from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Member:
    """Domain entity: a course participant who scans in and out.

    Note: Plain data object; no DB access here.
    """

    member_id: int
    full_name: str
    email: str
    batch_id: Optional[int]
    absence_streak: int = 0
    is_blocked: bool = False
    total_hours: float = 0.0
    rank: Optional[int] = None
    last_swept_day: Optional[str] = None
