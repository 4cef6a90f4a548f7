from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional


class HoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for earned hours)."""

    @abstractmethod
    def compute_hours(
        self,
        check_in: datetime,
        check_out: Optional[datetime],
        scheduled_end: Optional[datetime],
        *,
        now: datetime,
    ) -> float:
        raise NotImplementedError
