"""Conversion of stored documents into typed records.

Documents arrive as plain mappings with the camelCase keys the store writes
(`userId`, `employeeId`, `startDate`, `createdAt`, ...). A document that
cannot be converted is dropped and counted; it never aborts the batch.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Iterable, Mapping, Optional, TypeVar

from ..common.datetime_utils import is_iso_date
from ..core.constants import DATE_FORMAT
from ..core.enums import EventType, LeaveStatus, Role, TaskStatus
from .model import AttendanceEvent, EmployeeProfile, LeaveRequest, RecordSnapshot, Task

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

T = TypeVar("T")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _from_epoch(seconds: float, nanoseconds: float = 0) -> Optional[datetime]:
    try:
        return EPOCH + timedelta(seconds=seconds, microseconds=nanoseconds / 1000)
    except OverflowError:
        return None


def normalize_timestamp(raw: Any) -> Optional[datetime]:
    """Return an aware UTC datetime, or None when `raw` is not a usable timestamp.

    Zero and negative epoch seconds are valid instants.
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, datetime):
        if raw.tzinfo is None:
            return raw.replace(tzinfo=timezone.utc)
        try:
            return raw.astimezone(timezone.utc)
        except (OverflowError, ValueError):
            return None

    if _is_number(raw):
        return _from_epoch(raw)

    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        return normalize_timestamp(parsed)

    if isinstance(raw, Mapping):
        seconds = raw.get("seconds", raw.get("_seconds"))
        nanoseconds = raw.get("nanoseconds", raw.get("_nanoseconds", 0)) or 0
    else:
        seconds = getattr(raw, "seconds", None)
        nanoseconds = getattr(raw, "nanoseconds", getattr(raw, "nanos", 0)) or 0

    if not _is_number(seconds) or not _is_number(nanoseconds):
        return None
    return _from_epoch(seconds, nanoseconds)


def normalize_calendar_date(raw: Any) -> Optional[str]:
    if isinstance(raw, datetime):
        return None
    if isinstance(raw, date):
        return raw.strftime(DATE_FORMAT)
    if is_iso_date(raw):
        return raw
    return None


def _text(doc: Mapping[str, Any], key: str) -> Optional[str]:
    value = doc.get(key)
    if value is None:
        return None
    return str(value)


def _enum(enum_cls, value: Any):
    try:
        return enum_cls(value)
    except ValueError:
        return None


def parse_profile(doc: Mapping[str, Any]) -> Optional[EmployeeProfile]:
    user_id = _text(doc, "id")
    role = _enum(Role, doc.get("role"))
    if not user_id or role is None:
        return None
    return EmployeeProfile(
        id=user_id,
        name=_text(doc, "name") or "",
        employee_id=_text(doc, "employeeId") or "",
        branch=_text(doc, "branch") or "",
        position=_text(doc, "position") or "",
        role=role,
    )


def parse_event(doc: Mapping[str, Any]) -> Optional[AttendanceEvent]:
    event_id = _text(doc, "id")
    user_id = _text(doc, "userId")
    event_type = _enum(EventType, doc.get("type"))
    timestamp = normalize_timestamp(doc.get("timestamp"))
    if not event_id or not user_id or event_type is None or timestamp is None:
        return None
    return AttendanceEvent(id=event_id, user_id=user_id, type=event_type, timestamp=timestamp)


def parse_leave(doc: Mapping[str, Any]) -> Optional[LeaveRequest]:
    leave_id = _text(doc, "id")
    user_id = _text(doc, "userId")
    status = _enum(LeaveStatus, doc.get("status"))
    start_date = normalize_calendar_date(doc.get("startDate"))
    if not leave_id or not user_id or status is None or start_date is None:
        return None
    return LeaveRequest(
        id=leave_id,
        user_id=user_id,
        type=_text(doc, "type") or "",
        start_date=start_date,
        end_date=normalize_calendar_date(doc.get("endDate")),
        status=status,
        created_at=normalize_timestamp(doc.get("createdAt")),
        reason=_text(doc, "reason") or None,
    )


def parse_task(doc: Mapping[str, Any]) -> Optional[Task]:
    task_id = _text(doc, "id")
    user_id = _text(doc, "userId")
    status = _enum(TaskStatus, doc.get("status"))
    if not task_id or not user_id or status is None:
        return None
    return Task(
        id=task_id,
        user_id=user_id,
        title=_text(doc, "title") or "",
        status=status,
        created_at=normalize_timestamp(doc.get("createdAt")),
        due_date=normalize_calendar_date(doc.get("dueDate")),
    )


def _parse_all(
    documents: Iterable[Mapping[str, Any]],
    parser: Callable[[Mapping[str, Any]], Optional[T]],
    collection: str,
) -> tuple[tuple[T, ...], int]:
    parsed: list[T] = []
    dropped = 0
    for doc in documents or ():
        record = parser(doc) if isinstance(doc, Mapping) else None
        if record is None:
            dropped += 1
            logger.debug("Dropping malformed %s record: %r", collection, doc)
            continue
        parsed.append(record)
    return tuple(parsed), dropped


def normalize_snapshot(
    users: Iterable[Mapping[str, Any]] = (),
    attendance: Iterable[Mapping[str, Any]] = (),
    leaves: Iterable[Mapping[str, Any]] = (),
    tasks: Iterable[Mapping[str, Any]] = (),
) -> RecordSnapshot:
    profiles, bad_users = _parse_all(users, parse_profile, "users")
    events, bad_events = _parse_all(attendance, parse_event, "attendance")
    leave_requests, bad_leaves = _parse_all(leaves, parse_leave, "leave_requests")
    task_items, bad_tasks = _parse_all(tasks, parse_task, "tasks")

    malformed = bad_users + bad_events + bad_leaves + bad_tasks
    if malformed:
        logger.info("Excluded %d malformed record(s) from snapshot", malformed)

    return RecordSnapshot(
        users=profiles,
        attendance=events,
        leaves=leave_requests,
        tasks=task_items,
        malformed_count=malformed,
    )
