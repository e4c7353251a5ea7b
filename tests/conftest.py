from __future__ import annotations

from datetime import datetime, timezone

import pytest

from workforce_analytics.core.enums import EventType, LeaveStatus, Role, TaskStatus
from workforce_analytics.records.model import (
    AttendanceEvent,
    EmployeeProfile,
    LeaveRequest,
    RecordSnapshot,
    Task,
)


def at(day: str, hhmm: str) -> datetime:
    """UTC instant for a calendar day and HH:MM."""
    return datetime.strptime(f"{day} {hhmm}", "%Y-%m-%d %H:%M").replace(tzinfo=timezone.utc)


def epoch(day: str, hhmm: str) -> int:
    return int(at(day, hhmm).timestamp())


class EventFactory:
    def __init__(self):
        self._seq = 0

    def __call__(self, user_id: str, kind: str, day: str, hhmm: str, *, event_id: str | None = None) -> AttendanceEvent:
        self._seq += 1
        return AttendanceEvent(
            id=event_id or f"e{self._seq:04d}",
            user_id=user_id,
            type=EventType(kind),
            timestamp=at(day, hhmm),
        )


def profile(user_id: str, name: str, *, branch: str = "North", role: Role = Role.EMPLOYEE, position: str = "Clerk") -> EmployeeProfile:
    return EmployeeProfile(
        id=user_id,
        name=name,
        employee_id=f"E-{user_id}",
        branch=branch,
        position=position,
        role=role,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return at("2026-02-10", "09:15")


@pytest.fixture
def make_event() -> EventFactory:
    return EventFactory()


@pytest.fixture
def team_snapshot(make_event) -> RecordSnapshot:
    users = (
        profile("u1", "Ana", branch="North"),
        profile("u2", "Ben", branch="South", position="Driver"),
        profile("u3", "Cleo", branch="North"),
        profile("m1", "Mia", branch="North", role=Role.MANAGER, position="Lead"),
    )
    attendance = (
        make_event("u1", "check-in", "2026-02-02", "08:00"),
        make_event("u1", "check-out", "2026-02-02", "12:00"),
        make_event("u1", "check-in", "2026-02-02", "13:00"),
        make_event("u1", "check-out", "2026-02-02", "17:30"),
        make_event("u1", "check-in", "2026-02-03", "09:00"),
        make_event("u1", "check-out", "2026-02-03", "17:00"),
        make_event("u2", "check-in", "2026-02-03", "08:00"),
        make_event("u2", "check-in", "2026-02-03", "09:00"),
        make_event("u2", "check-out", "2026-02-03", "17:00"),
        # outside the February window
        make_event("u2", "check-in", "2026-01-30", "08:00"),
        make_event("u2", "check-out", "2026-01-30", "16:00"),
        make_event("m1", "check-in", "2026-02-03", "07:30"),
    )
    leaves = (
        LeaveRequest(id="l1", user_id="u1", type="Vacation", start_date="2026-02-20", end_date="2026-03-05",
                     status=LeaveStatus.APPROVED),
        LeaveRequest(id="l2", user_id="u1", type="Sick Leave", start_date="2026-02-05", end_date="2026-02-05",
                     status=LeaveStatus.PENDING),
        LeaveRequest(id="l3", user_id="u2", type="Personal", start_date="2026-01-28", end_date="2026-02-02",
                     status=LeaveStatus.APPROVED),
        LeaveRequest(id="l4", user_id="u3", type="Personal", start_date="2026-02-11", end_date="2026-02-11",
                     status=LeaveStatus.REJECTED),
    )
    tasks = (
        Task(id="t1", user_id="u1", title="Audit", status=TaskStatus.PENDING),
        Task(id="t2", user_id="u1", title="Report", status=TaskStatus.COMPLETED),
        Task(id="t3", user_id="u3", title="Stock count", status=TaskStatus.PENDING, due_date="2025-12-01"),
        Task(id="t4", user_id="u3", title="Inventory", status=TaskStatus.PENDING),
    )
    return RecordSnapshot(users=users, attendance=attendance, leaves=leaves, tasks=tasks)


@pytest.fixture
def instant():
    return at


@pytest.fixture
def epoch_seconds():
    return epoch


@pytest.fixture
def make_profile():
    return profile
