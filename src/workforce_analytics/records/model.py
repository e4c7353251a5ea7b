from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import EventType, LeaveStatus, Role, TaskStatus


@dataclass(frozen=True)
class EmployeeProfile:
    """Identity key for all aggregations; other records reference `id` via `user_id`."""

    id: str
    name: str
    employee_id: str
    branch: str
    position: str
    role: Role


@dataclass(frozen=True)
class AttendanceEvent:
    id: str
    user_id: str
    type: EventType
    timestamp: datetime


@dataclass(frozen=True)
class LeaveRequest:
    """Leave request; start/end are calendar strings (YYYY-MM-DD), not instants."""

    id: str
    user_id: str
    type: str
    start_date: str
    end_date: Optional[str]
    status: LeaveStatus
    created_at: Optional[datetime] = None
    reason: Optional[str] = None


@dataclass(frozen=True)
class Task:
    id: str
    user_id: str
    title: str
    status: TaskStatus
    created_at: Optional[datetime] = None
    due_date: Optional[str] = None


@dataclass(frozen=True)
class RecordSnapshot:
    """Immutable view of the four collections handed over by the store."""

    users: tuple[EmployeeProfile, ...] = ()
    attendance: tuple[AttendanceEvent, ...] = ()
    leaves: tuple[LeaveRequest, ...] = ()
    tasks: tuple[Task, ...] = ()
    malformed_count: int = 0

    def employees(self) -> list[EmployeeProfile]:
        return [u for u in self.users if u.role == Role.EMPLOYEE]
