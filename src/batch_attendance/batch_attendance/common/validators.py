from __future__ import annotations

from datetime import datetime, time

from ..core.constants import CLOCK_FORMAT
from ..core.exceptions import ScheduleConfigurationError, ValidationError


def require_positive_id(value, field_name: str) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is invalid")
    if parsed <= 0:
        raise ValidationError(f"{field_name} is invalid")
    return parsed


def require_clock(value: str, field_name: str) -> time:
    """Parse an HH:mm schedule string."""
    try:
        return datetime.strptime((value or "").strip(), CLOCK_FORMAT).time()
    except ValueError:
        raise ScheduleConfigurationError(f"{field_name} must be HH:mm, got {value!r}")
