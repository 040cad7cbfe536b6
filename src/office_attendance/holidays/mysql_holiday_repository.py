from __future__ import annotations

from datetime import date
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Holiday
from .repository import HolidayRepository


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_date(self, day: date) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT holiday_id, holiday_date, name, is_active
                FROM holidays
                WHERE holiday_date=%s AND is_active=1
                ORDER BY holiday_id
                LIMIT 1
                """,
                (day,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Holiday(
                holiday_id=int(r["holiday_id"]),
                holiday_date=r["holiday_date"],
                name=r["name"],
                is_active=bool(r["is_active"]),
            )
