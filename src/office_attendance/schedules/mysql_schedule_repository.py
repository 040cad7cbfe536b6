from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import WorkSchedule
from .repository import WorkScheduleRepository


class MySQLWorkScheduleRepository(WorkScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_day(self, day_of_week: int) -> Optional[WorkSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT day_of_week, day_name, start_time, end_time, on_time_end_time,
                       tolerance_start_time, tolerance_end_time, late_tolerance_minutes, is_active
                FROM work_schedules
                WHERE day_of_week=%s
                """,
                (int(day_of_week),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return WorkSchedule(
                day_of_week=int(r["day_of_week"]),
                day_name=r.get("day_name") or "",
                start_time=normalize_mysql_time(r["start_time"]),
                end_time=normalize_mysql_time(r["end_time"]),
                on_time_end_time=normalize_mysql_time(r.get("on_time_end_time")),
                tolerance_start_time=normalize_mysql_time(r.get("tolerance_start_time")),
                tolerance_end_time=normalize_mysql_time(r.get("tolerance_end_time")),
                late_tolerance_minutes=int(r.get("late_tolerance_minutes") or 0),
                is_active=bool(r["is_active"]),
            )
