from __future__ import annotations

import json
from typing import Optional

from ..core.logging import get_logger
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Employee
from .repository import EmployeeRepository

logger = get_logger(__name__)


def _parse_descriptor(raw) -> Optional[tuple[float, ...]]:
    if not raw:
        return None
    try:
        values = json.loads(raw)
    except ValueError:
        logger.warning("Ignoring unreadable face descriptor")
        return None
    # Registration stores either the bare array or {"descriptor": [...]}.
    if isinstance(values, dict):
        values = values.get("descriptor")
    if not isinstance(values, list) or not values:
        return None
    return tuple(float(v) for v in values)


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, full_name, is_active, office_location_id, face_descriptor
                FROM employees
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Employee(
                employee_id=int(r["employee_id"]),
                full_name=r["full_name"],
                is_active=bool(r["is_active"]),
                office_location_id=int(r["office_location_id"]) if r.get("office_location_id") else None,
                face_descriptor=_parse_descriptor(r.get("face_descriptor")),
            )
