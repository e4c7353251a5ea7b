from __future__ import annotations

import calendar
import re
from dataclasses import dataclass

from ..common.validators import require_iso_date
from ..core.constants import MAX_CALENDAR_DATE, MIN_CALENDAR_DATE
from ..core.exceptions import ValidationError

_MONTH_RE = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")
_YEAR_RE = re.compile(r"^\d{4}$")


@dataclass(frozen=True)
class DateRange:
    """Inclusive window of calendar dates in canonical YYYY-MM-DD form.

    Dates are compared as strings; the canonical format makes lexicographic
    order equal to chronological order. A start after the end is a valid,
    empty window.
    """

    start: str
    end: str

    @classmethod
    def parse(cls, start: str, end: str) -> "DateRange":
        return cls(require_iso_date(start, "start_date"), require_iso_date(end, "end_date"))

    @classmethod
    def for_day(cls, day: str) -> "DateRange":
        day = require_iso_date(day, "day")
        return cls(day, day)

    @classmethod
    def for_month(cls, month: str) -> "DateRange":
        m = _MONTH_RE.match(month or "")
        if not m:
            raise ValidationError(f"month must be YYYY-MM, got {month!r}")
        year, mon = int(m.group(1)), int(m.group(2))
        last_day = calendar.monthrange(year, mon)[1]
        return cls(f"{month}-01", f"{month}-{last_day:02d}")

    @classmethod
    def for_year(cls, year: str) -> "DateRange":
        if not _YEAR_RE.match(year or ""):
            raise ValidationError(f"year must be YYYY, got {year!r}")
        return cls(f"{year}-01-01", f"{year}-12-31")

    @classmethod
    def month_to_date(cls, today: str) -> "DateRange":
        """First day of the month of `today` through `today`."""
        today = require_iso_date(today, "today")
        return cls(today[:8] + "01", today)

    @classmethod
    def unbounded(cls) -> "DateRange":
        return cls(MIN_CALENDAR_DATE, MAX_CALENDAR_DATE)

    @property
    def is_empty(self) -> bool:
        return self.start > self.end

    def contains(self, day: str | None) -> bool:
        if not day:
            return False
        return self.start <= day <= self.end
