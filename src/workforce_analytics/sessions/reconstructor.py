from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Iterable, Optional

from ..analytics.date_range import DateRange
from ..common.datetime_utils import calendar_date
from ..core.constants import DEFAULT_RECENT_LIMIT
from ..core.enums import AnomalyKind, EventType
from ..records.model import AttendanceEvent
from .model import Anomaly, DayLog, SessionSummary, WorkSession

logger = logging.getLogger(__name__)

_ONE_MS = timedelta(milliseconds=1)


def _chronological(event: AttendanceEvent):
    # record id breaks timestamp ties so reruns pair events identically
    return (event.timestamp, event.id)


class SessionReconstructor:
    """Pairs check-in/check-out events into work sessions."""

    def __init__(self, *, utc_offset_minutes: int = 0):
        self._offset = int(utc_offset_minutes)

    @property
    def utc_offset_minutes(self) -> int:
        return self._offset

    def day_of(self, instant: datetime) -> Optional[str]:
        return calendar_date(instant, utc_offset_minutes=self._offset)

    def reconstruct(
        self,
        events: Iterable[AttendanceEvent],
        *,
        date_range: Optional[DateRange] = None,
    ) -> SessionSummary:
        """Rebuild sessions from one user's events.

        Events are filtered on their calendar date, sorted by instant, then
        walked once. A check-in while another is open supersedes it; a
        check-out with nothing open is a stray. Only closed sessions add to
        the duration total. Days present counts distinct dates with a
        check-in, including superseded and still-open ones.
        """
        in_range = [
            e for e in events
            if date_range is None or date_range.contains(self.day_of(e.timestamp))
        ]
        ordered = sorted(in_range, key=_chronological)

        sessions: list[WorkSession] = []
        anomalies: list[Anomaly] = []
        days: set[str] = set()
        total_ms = 0
        open_check_in: Optional[AttendanceEvent] = None

        for event in ordered:
            if event.type == EventType.CHECK_IN:
                day = self.day_of(event.timestamp)
                if day is not None:
                    days.add(day)
                if open_check_in is not None:
                    anomalies.append(Anomaly(AnomalyKind.SUPERSEDED_CHECK_IN, open_check_in))
                open_check_in = event
                continue

            if open_check_in is None:
                anomalies.append(Anomaly(AnomalyKind.STRAY_CHECK_OUT, event))
                continue

            duration_ms = (event.timestamp - open_check_in.timestamp) // _ONE_MS
            sessions.append(
                WorkSession(
                    user_id=open_check_in.user_id,
                    check_in_at=open_check_in.timestamp,
                    check_out_at=event.timestamp,
                    duration_ms=duration_ms,
                )
            )
            total_ms += duration_ms
            open_check_in = None

        if open_check_in is not None:
            sessions.append(
                WorkSession(
                    user_id=open_check_in.user_id,
                    check_in_at=open_check_in.timestamp,
                    check_out_at=None,
                    duration_ms=0,
                )
            )

        if anomalies:
            logger.debug(
                "%d unmatched attendance event(s) for user %s",
                len(anomalies),
                anomalies[0].event.user_id,
            )

        return SessionSummary(
            sessions=tuple(sessions),
            anomalies=tuple(anomalies),
            days_present=len(days),
            total_duration_ms=total_ms,
        )

    def reconstruct_by_user(
        self,
        events: Iterable[AttendanceEvent],
        *,
        date_range: Optional[DateRange] = None,
    ) -> dict[str, SessionSummary]:
        grouped: dict[str, list[AttendanceEvent]] = defaultdict(list)
        for e in events:
            grouped[e.user_id].append(e)
        return {
            user_id: self.reconstruct(user_events, date_range=date_range)
            for user_id, user_events in grouped.items()
        }

    def day_log(self, events: Iterable[AttendanceEvent], *, user_id: str, day: str) -> DayLog:
        todays = sorted(
            (e for e in events if e.user_id == user_id and self.day_of(e.timestamp) == day),
            key=_chronological,
        )
        first_in = next((e.timestamp for e in todays if e.type == EventType.CHECK_IN), None)
        return DayLog(
            day=day,
            events=tuple(todays),
            is_checked_in=bool(todays) and todays[-1].type == EventType.CHECK_IN,
            first_check_in_at=first_in,
        )

    def first_check_ins(self, events: Iterable[AttendanceEvent], *, day: str) -> dict[str, datetime]:
        """Earliest check-in instant on `day` for every user who checked in."""
        first: dict[str, datetime] = {}
        for e in events:
            if e.type != EventType.CHECK_IN or self.day_of(e.timestamp) != day:
                continue
            seen = first.get(e.user_id)
            if seen is None or e.timestamp < seen:
                first[e.user_id] = e.timestamp
        return first


def recent_events(
    events: Iterable[AttendanceEvent],
    *,
    user_id: Optional[str] = None,
    limit: int = DEFAULT_RECENT_LIMIT,
) -> list[AttendanceEvent]:
    """Newest events first, optionally for a single user."""
    items = [e for e in events if user_id is None or e.user_id == user_id]
    items.sort(key=_chronological, reverse=True)
    return items[: max(int(limit), 0)]
