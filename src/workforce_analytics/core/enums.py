from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role of an employee profile."""

    EMPLOYEE = "employee"
    MANAGER = "manager"


class EventType(str, Enum):
    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"


class LeaveStatus(str, Enum):
    """Leave approval workflow; only APPROVED counts in analytics."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class TaskStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class AnomalyKind(str, Enum):
    """Attendance events that could not be paired into a session."""

    STRAY_CHECK_OUT = "stray-check-out"
    SUPERSEDED_CHECK_IN = "superseded-check-in"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"
