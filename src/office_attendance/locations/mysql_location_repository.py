from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import OfficeLocation
from .repository import LocationRepository


class MySQLLocationRepository(LocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, location_id: int) -> Optional[OfficeLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT location_id, name, latitude, longitude, radius_meters, is_active
                FROM office_locations
                WHERE location_id=%s
                """,
                (int(location_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return OfficeLocation(
                location_id=int(r["location_id"]),
                name=r["name"],
                latitude=float(r["latitude"]),
                longitude=float(r["longitude"]),
                radius_meters=int(r["radius_meters"]),
                is_active=bool(r["is_active"]),
            )
