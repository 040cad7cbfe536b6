from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Callable, Optional, Sequence

from ..common.clock import DayWindow
from ..core.exceptions import DuplicateSessionError
from ..locations.model import GeoPoint
from .model import AttendanceSession, NewSession
from .repository import SessionStore


class InMemorySessionStore(SessionStore):
    """Process-local session store.

    The lock plus ``_taken`` mirror the unique key on
    (employee_id, attendance_day) in the MySQL schema; closing never frees a day.
    """

    def __init__(self, *, now_fn: Optional[Callable[[], datetime]] = None):
        self._lock = threading.Lock()
        self._rows: dict[int, AttendanceSession] = {}
        self._taken: set[tuple[int, date]] = set()
        self._next_id = 0
        self._now_fn = now_fn or (lambda: datetime.now(timezone.utc))

    def find_open(self, employee_id: int, window: DayWindow) -> Optional[AttendanceSession]:
        for row in self.find_in_window(employee_id, window):
            if row.is_open:
                return row
        return None

    def find_in_window(self, employee_id: int, window: DayWindow) -> Sequence[AttendanceSession]:
        with self._lock:
            rows = [r for r in self._rows.values() if r.employee_id == employee_id and window.contains(r.check_in_time)]
        rows.sort(key=lambda r: (r.check_in_time, r.session_id))
        return rows

    def insert_open(self, session: NewSession) -> AttendanceSession:
        key = (session.employee_id, session.attendance_day)
        with self._lock:
            if key in self._taken:
                raise DuplicateSessionError(
                    f"Session already exists for employee {session.employee_id} on {session.attendance_day}"
                )
            self._next_id += 1
            now = self._now_fn()
            row = AttendanceSession(
                session_id=self._next_id,
                employee_id=session.employee_id,
                check_in_time=session.check_in_time,
                status=session.status,
                created_at=now,
                updated_at=now,
                check_in_latitude=session.check_in_location.latitude if session.check_in_location else None,
                check_in_longitude=session.check_in_location.longitude if session.check_in_location else None,
                face_match_score=session.face_match_score,
                office_location_id=session.office_location_id,
                status_detail=session.status_detail,
                late_minutes=session.late_minutes,
                needs_review=session.needs_review,
                note=session.note,
            )
            self._rows[row.session_id] = row
            self._taken.add(key)
            return row

    def close(
        self,
        *,
        session_id: int,
        check_out_time: datetime,
        location: Optional[GeoPoint] = None,
        needs_review: bool = False,
    ) -> Optional[AttendanceSession]:
        with self._lock:
            row = self._rows.get(session_id)
            if row is None or not row.is_open:
                return None
            closed = replace(
                row,
                check_out_time=check_out_time,
                check_out_latitude=location.latitude if location else None,
                check_out_longitude=location.longitude if location else None,
                needs_review=row.needs_review or needs_review,
                updated_at=self._now_fn(),
            )
            self._rows[session_id] = closed
            return closed

    def all(self) -> Sequence[AttendanceSession]:
        with self._lock:
            return sorted(self._rows.values(), key=lambda r: r.session_id)
