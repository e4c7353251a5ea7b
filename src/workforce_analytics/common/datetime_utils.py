from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional

from ..core.constants import DATE_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def is_iso_date(value: object) -> bool:
    if not isinstance(value, str) or len(value) != 10:
        return False
    try:
        parse_iso_date(value)
    except ValueError:
        return False
    return True


def calendar_date(instant: datetime, *, utc_offset_minutes: int = 0) -> Optional[str]:
    """Canonical calendar date of an instant.

    Every component derives dates with this single rule (UTC shifted by a
    fixed offset) so event dates line up with stored YYYY-MM-DD strings.
    Returns None when the shifted instant falls outside the datetime range.
    """
    try:
        shifted = instant.astimezone(timezone.utc) + timedelta(minutes=utc_offset_minutes)
    except OverflowError:
        return None
    return shifted.strftime(DATE_FORMAT)


def now_utc() -> datetime:
    """Current time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def today(*, utc_offset_minutes: int = 0) -> str:
    return calendar_date(now_utc(), utc_offset_minutes=utc_offset_minutes)
