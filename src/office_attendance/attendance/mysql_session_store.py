from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

from ..common.clock import DayWindow
from ..core.enums import AttendanceStatus, StatusDetail
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from ..locations.model import GeoPoint
from .model import AttendanceSession, NewSession
from .repository import SessionStore

_COLUMNS = """
    id, employee_id, check_in_time, check_in_latitude, check_in_longitude,
    check_out_time, check_out_latitude, check_out_longitude, face_match_score,
    office_location_id, status, status_detail, late_minutes, needs_review, note,
    created_at, updated_at
"""


def _optional_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def _to_session(r: Dict[str, Any]) -> AttendanceSession:
    return AttendanceSession(
        session_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        check_in_time=from_db_datetime(r["check_in_time"]),
        status=AttendanceStatus(r["status"]),
        created_at=from_db_datetime(r["created_at"]),
        updated_at=from_db_datetime(r["updated_at"]),
        check_in_latitude=_optional_float(r.get("check_in_latitude")),
        check_in_longitude=_optional_float(r.get("check_in_longitude")),
        check_out_time=from_db_datetime(r.get("check_out_time")),
        check_out_latitude=_optional_float(r.get("check_out_latitude")),
        check_out_longitude=_optional_float(r.get("check_out_longitude")),
        face_match_score=_optional_float(r.get("face_match_score")),
        office_location_id=int(r["office_location_id"]) if r.get("office_location_id") is not None else None,
        status_detail=StatusDetail(r["status_detail"]) if r.get("status_detail") else None,
        late_minutes=int(r.get("late_minutes") or 0),
        needs_review=bool(r.get("needs_review")),
        note=r.get("note"),
    )


class MySQLSessionStore(SessionStore):
    """attendance_sessions table.

    One row per employee per attendance day, open or closed, via
    UNIQUE (employee_id, attendance_day).
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_open(self, employee_id: int, window: DayWindow) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE employee_id=%s AND check_in_time >= %s AND check_in_time < %s
                  AND check_out_time IS NULL
                ORDER BY check_in_time DESC
                LIMIT 1
                """,
                (int(employee_id), to_db_datetime(window.start), to_db_datetime(window.end)),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    def find_in_window(self, employee_id: int, window: DayWindow) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE employee_id=%s AND check_in_time >= %s AND check_in_time < %s
                ORDER BY check_in_time ASC, id ASC
                """,
                (int(employee_id), to_db_datetime(window.start), to_db_datetime(window.end)),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def insert_open(self, session: NewSession) -> AttendanceSession:
        now = to_db_datetime(datetime.now(timezone.utc))
        location = session.check_in_location
        with db_cursor(self._conn_factory) as (_, cur):
            # Duplicate key on uq_attendance_session_day surfaces as DuplicateSessionError.
            cur.execute(
                """
                INSERT INTO attendance_sessions(
                    employee_id, attendance_day, check_in_time,
                    check_in_latitude, check_in_longitude, face_match_score, office_location_id,
                    status, status_detail, late_minutes, needs_review, note, created_at, updated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(session.employee_id),
                    session.attendance_day,
                    to_db_datetime(session.check_in_time),
                    location.latitude if location else None,
                    location.longitude if location else None,
                    session.face_match_score,
                    session.office_location_id,
                    session.status.value,
                    session.status_detail.value if session.status_detail else None,
                    int(session.late_minutes),
                    int(session.needs_review),
                    session.note,
                    now,
                    now,
                ),
            )
            session_id = int(cur.lastrowid)
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_sessions WHERE id=%s", (session_id,))
            return _to_session(fetchone(cur))

    def close(
        self,
        *,
        session_id: int,
        check_out_time: datetime,
        location: Optional[GeoPoint] = None,
        needs_review: bool = False,
    ) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_sessions
                SET check_out_time=%s, check_out_latitude=%s, check_out_longitude=%s,
                    needs_review=(needs_review OR %s), updated_at=%s
                WHERE id=%s AND check_out_time IS NULL
                """,
                (
                    to_db_datetime(check_out_time),
                    location.latitude if location else None,
                    location.longitude if location else None,
                    int(needs_review),
                    to_db_datetime(datetime.now(timezone.utc)),
                    int(session_id),
                ),
            )
            if cur.rowcount == 0:
                return None
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_sessions WHERE id=%s", (int(session_id),))
            r = fetchone(cur)
            return _to_session(r) if r else None
