from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..records.model import EmployeeProfile
from .date_range import DateRange


@dataclass(frozen=True)
class MetricsRow:
    """One employee's figures over a date range (read-model for the stats table)."""

    user_id: str
    name: str
    branch: str
    position: str
    days_present: int
    total_hours: float
    leave_count: int
    pending_task_count: int
    anomaly_count: int = 0


@dataclass(frozen=True)
class RollUp:
    total_hours: float = 0.0
    days_present: int = 0
    leave_count: int = 0
    pending_task_count: int = 0


@dataclass(frozen=True)
class MetricsReport:
    date_range: DateRange
    rows: tuple[MetricsRow, ...]
    rollup: RollUp
    anomaly_count: int = 0
    malformed_count: int = 0


@dataclass(frozen=True)
class EmployeeHistoryStats:
    user_id: str
    date_range: DateRange
    days_present: int
    total_hours: float
    avg_hours: float
    leaves_taken: int


@dataclass(frozen=True)
class PresenceEntry:
    profile: EmployeeProfile
    first_check_in_at: datetime


@dataclass(frozen=True)
class DailyStatus:
    day: str
    present: tuple[PresenceEntry, ...]
    absent: tuple[EmployeeProfile, ...]


@dataclass(frozen=True)
class BranchPresence:
    branch: str
    present: int
    total: int


@dataclass(frozen=True)
class DashboardSummary:
    day: str
    total_employees: int
    present_today: int
    pending_leaves: int
