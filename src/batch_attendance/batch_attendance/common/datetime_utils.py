from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from ..core.constants import CLOCK_FORMAT, DAY_KEY_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DAY_KEY_FORMAT).date()


def utc_now() -> datetime:
    """Current instant (timezone-aware UTC).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (as returned by MySQL DATETIME) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_local(instant: datetime, utc_offset_minutes: int) -> datetime:
    """Shift an instant to the institution's wall clock (naive result)."""
    return as_utc(instant).replace(tzinfo=None) + timedelta(minutes=utc_offset_minutes)


def day_key(instant: datetime, utc_offset_minutes: int) -> str:
    """Calendar day of `instant` under the configured offset, as YYYY-MM-DD."""
    return to_local(instant, utc_offset_minutes).strftime(DAY_KEY_FORMAT)


def format_local_time(instant: datetime, utc_offset_minutes: int) -> str:
    return to_local(instant, utc_offset_minutes).strftime(CLOCK_FORMAT)
