from __future__ import annotations

from ..core.constants import SETTING_FACE_THRESHOLD, SETTING_GPS_RADIUS
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Thresholds
from .repository import SettingsRepository


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_thresholds(self) -> Thresholds:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT setting_key, setting_value
                FROM system_settings
                WHERE setting_key IN (%s, %s)
                """,
                (SETTING_FACE_THRESHOLD, SETTING_GPS_RADIUS),
            )
            rows = fetchall(cur)
            return Thresholds.from_mapping({r["setting_key"]: r["setting_value"] for r in rows})
