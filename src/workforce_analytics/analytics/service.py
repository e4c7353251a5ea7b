from __future__ import annotations

import logging
from collections import Counter, defaultdict
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from ..common.datetime_utils import today
from ..core.constants import ALL, DEFAULT_RECENT_LIMIT, MS_PER_HOUR
from ..core.enums import LeaveStatus, Role, TaskStatus
from ..projection.projector import Page, ProjectionQuery, Projector, stats_table_query
from ..records.model import AttendanceEvent, EmployeeProfile, RecordSnapshot
from ..records.normalizer import normalize_snapshot
from ..records.repository import RecordStore
from ..sessions.model import DayLog
from ..sessions.reconstructor import SessionReconstructor, recent_events
from .date_range import DateRange
from .model import (
    BranchPresence,
    DailyStatus,
    DashboardSummary,
    EmployeeHistoryStats,
    MetricsReport,
    MetricsRow,
    PresenceEntry,
    RollUp,
)

logger = logging.getLogger(__name__)

_ONE_DECIMAL = Decimal("0.1")


def _round_hours(hours: Decimal) -> float:
    return float(hours.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def hours_from_ms(duration_ms: int) -> float:
    """Milliseconds to hours, rounded half-up to one decimal."""
    return _round_hours(Decimal(int(duration_ms)) / Decimal(MS_PER_HOUR))


def compute_rollup(rows: Iterable[MetricsRow]) -> RollUp:
    """Sum per-row metrics; hours are added as exact decimals to avoid float drift."""
    hours = Decimal(0)
    days = leaves = pending = 0
    for r in rows:
        hours += Decimal(str(r.total_hours))
        days += r.days_present
        leaves += r.leave_count
        pending += r.pending_task_count
    return RollUp(
        total_hours=float(hours),
        days_present=days,
        leave_count=leaves,
        pending_task_count=pending,
    )


def unique_branches(users: Iterable[EmployeeProfile]) -> list[str]:
    return sorted({u.branch for u in users if u.branch})


class MetricsAggregator:
    """Folds sessions, leaves and tasks into per-employee statistics."""

    def __init__(self, reconstructor: Optional[SessionReconstructor] = None):
        self._sessions = reconstructor or SessionReconstructor()

    @staticmethod
    def _events_by_user(events: Iterable[AttendanceEvent]) -> dict[str, list[AttendanceEvent]]:
        grouped: dict[str, list[AttendanceEvent]] = defaultdict(list)
        for e in events:
            grouped[e.user_id].append(e)
        return grouped

    @staticmethod
    def _approved_leave_counts(snapshot: RecordSnapshot, date_range: DateRange) -> Counter:
        # A leave is attributed to its start date only, whatever its span.
        return Counter(
            lv.user_id
            for lv in snapshot.leaves
            if lv.status == LeaveStatus.APPROVED and date_range.contains(lv.start_date)
        )

    def build_report(
        self,
        snapshot: RecordSnapshot,
        date_range: DateRange,
        *,
        branch: Optional[str] = None,
        role: Optional[Role] = None,
    ) -> MetricsReport:
        users = [
            u for u in snapshot.users
            if (role is None or u.role == role) and (branch in (None, ALL) or u.branch == branch)
        ]

        events = self._events_by_user(snapshot.attendance)
        leave_counts = self._approved_leave_counts(snapshot, date_range)
        # Pending tasks are a present-tense count, not limited to the window.
        pending_counts = Counter(t.user_id for t in snapshot.tasks if t.status == TaskStatus.PENDING)

        rows: list[MetricsRow] = []
        anomalies = 0
        for u in users:
            summary = self._sessions.reconstruct(events.get(u.id, ()), date_range=date_range)
            anomalies += summary.anomaly_count
            rows.append(
                MetricsRow(
                    user_id=u.id,
                    name=u.name,
                    branch=u.branch,
                    position=u.position,
                    days_present=summary.days_present,
                    total_hours=hours_from_ms(summary.total_duration_ms),
                    leave_count=leave_counts.get(u.id, 0),
                    pending_task_count=pending_counts.get(u.id, 0),
                    anomaly_count=summary.anomaly_count,
                )
            )

        logger.info(
            "Built metrics report %s..%s: %d row(s), %d anomaly(ies)",
            date_range.start,
            date_range.end,
            len(rows),
            anomalies,
        )
        return MetricsReport(
            date_range=date_range,
            rows=tuple(rows),
            rollup=compute_rollup(rows),
            anomaly_count=anomalies,
            malformed_count=snapshot.malformed_count,
        )

    def employee_history(
        self,
        snapshot: RecordSnapshot,
        user_id: str,
        date_range: DateRange,
    ) -> EmployeeHistoryStats:
        summary = self._sessions.reconstruct(
            (e for e in snapshot.attendance if e.user_id == user_id),
            date_range=date_range,
        )
        hours = Decimal(summary.total_duration_ms) / Decimal(MS_PER_HOUR)
        avg = _round_hours(hours / summary.days_present) if summary.days_present else 0.0
        return EmployeeHistoryStats(
            user_id=user_id,
            date_range=date_range,
            days_present=summary.days_present,
            total_hours=_round_hours(hours),
            avg_hours=avg,
            leaves_taken=self._approved_leave_counts(snapshot, date_range).get(user_id, 0),
        )

    def daily_status(self, snapshot: RecordSnapshot, day: str) -> DailyStatus:
        first_in = self._sessions.first_check_ins(snapshot.attendance, day=day)
        present: list[PresenceEntry] = []
        absent: list[EmployeeProfile] = []
        for u in snapshot.employees():
            if u.id in first_in:
                present.append(PresenceEntry(profile=u, first_check_in_at=first_in[u.id]))
            else:
                absent.append(u)
        return DailyStatus(day=day, present=tuple(present), absent=tuple(absent))

    def branch_presence(self, snapshot: RecordSnapshot, day: str) -> list[BranchPresence]:
        first_in = self._sessions.first_check_ins(snapshot.attendance, day=day)
        totals: dict[str, int] = {}
        present: Counter = Counter()
        for u in snapshot.employees():
            totals[u.branch] = totals.get(u.branch, 0) + 1
            if u.id in first_in:
                present[u.branch] += 1
        return [BranchPresence(branch=b, present=present.get(b, 0), total=n) for b, n in totals.items()]

    def dashboard_summary(self, snapshot: RecordSnapshot, day: str) -> DashboardSummary:
        status = self.daily_status(snapshot, day)
        return DashboardSummary(
            day=day,
            total_employees=len(status.present) + len(status.absent),
            present_today=len(status.present),
            pending_leaves=sum(1 for lv in snapshot.leaves if lv.status == LeaveStatus.PENDING),
        )


class AnalyticsService:
    """Use cases of the manager and employee views, read from a record store.

    Each call takes a fresh snapshot from the store; nothing is cached.
    """

    def __init__(
        self,
        store: RecordStore,
        aggregator: MetricsAggregator,
        projector: Projector,
        reconstructor: SessionReconstructor,
    ):
        self._store = store
        self._aggregator = aggregator
        self._projector = projector
        self._sessions = reconstructor

    def snapshot(self) -> RecordSnapshot:
        return normalize_snapshot(
            users=self._store.list_users(),
            attendance=self._store.list_attendance(),
            leaves=self._store.list_leaves(),
            tasks=self._store.list_tasks(),
        )

    def manager_report(
        self,
        date_range: DateRange,
        *,
        branch: Optional[str] = None,
        query: Optional[ProjectionQuery] = None,
    ) -> tuple[MetricsReport, Page]:
        """Employee stats for the window, plus the sorted page shown in the table."""
        report = self._aggregator.build_report(self.snapshot(), date_range, branch=branch, role=Role.EMPLOYEE)
        page = self._projector.project(report.rows, query or stats_table_query())
        return report, page

    def employee_history(self, user_id: str, date_range: DateRange) -> EmployeeHistoryStats:
        return self._aggregator.employee_history(self.snapshot(), user_id, date_range)

    def _day(self, day: Optional[str]) -> str:
        # "today" uses the same calendar rule as event dates
        return day or today(utc_offset_minutes=self._sessions.utc_offset_minutes)

    def daily_status(self, day: Optional[str] = None) -> DailyStatus:
        return self._aggregator.daily_status(self.snapshot(), self._day(day))

    def branch_presence(self, day: Optional[str] = None) -> list[BranchPresence]:
        return self._aggregator.branch_presence(self.snapshot(), self._day(day))

    def dashboard_summary(self, day: Optional[str] = None) -> DashboardSummary:
        return self._aggregator.dashboard_summary(self.snapshot(), self._day(day))

    def day_log(self, user_id: str, day: Optional[str] = None) -> DayLog:
        return self._sessions.day_log(self.snapshot().attendance, user_id=user_id, day=self._day(day))

    def recent_activity(self, *, user_id: Optional[str] = None, limit: int = DEFAULT_RECENT_LIMIT) -> list[AttendanceEvent]:
        return recent_events(self.snapshot().attendance, user_id=user_id, limit=limit)

    def employee_directory(self, query: ProjectionQuery) -> Page:
        return self._projector.project(self.snapshot().users, query)

    def task_board(self, query: ProjectionQuery) -> Page:
        return self._projector.project(self.snapshot().tasks, query)

    def leave_history(self, query: ProjectionQuery) -> Page:
        return self._projector.project(self.snapshot().leaves, query)

    def branches(self) -> list[str]:
        return unique_branches(self.snapshot().users)
