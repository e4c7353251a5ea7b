from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AnomalyKind
from ..records.model import AttendanceEvent


@dataclass(frozen=True)
class WorkSession:
    """Derived interval between a check-in and its check-out.

    An open session has no check-out and a zero duration.
    """

    user_id: str
    check_in_at: datetime
    check_out_at: Optional[datetime]
    duration_ms: int

    @property
    def is_open(self) -> bool:
        return self.check_out_at is None


@dataclass(frozen=True)
class Anomaly:
    kind: AnomalyKind
    event: AttendanceEvent


@dataclass(frozen=True)
class SessionSummary:
    sessions: tuple[WorkSession, ...] = ()
    anomalies: tuple[Anomaly, ...] = ()
    days_present: int = 0
    total_duration_ms: int = 0

    @property
    def open_session(self) -> Optional[WorkSession]:
        if self.sessions and self.sessions[-1].is_open:
            return self.sessions[-1]
        return None

    @property
    def anomaly_count(self) -> int:
        return len(self.anomalies)


@dataclass(frozen=True)
class DayLog:
    """One user's attendance events on one calendar date, oldest first."""

    day: str
    events: tuple[AttendanceEvent, ...]
    is_checked_in: bool
    first_check_in_at: Optional[datetime]
