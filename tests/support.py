"""In-memory collaborators and helpers shared by the test modules."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional
from zoneinfo import ZoneInfo

from office_attendance.attendance.memory_session_store import InMemorySessionStore
from office_attendance.attendance.policy import AttendancePolicy
from office_attendance.attendance.service import AttendanceEngine
from office_attendance.common.clock import ClockSource
from office_attendance.core.constants import EARTH_RADIUS_METERS
from office_attendance.employees.model import Employee
from office_attendance.holidays.model import Holiday
from office_attendance.locations.model import GeoPoint, OfficeLocation
from office_attendance.schedules.model import WorkSchedule
from office_attendance.settings.model import Thresholds
from office_attendance.verification.gate import VerificationGate

JAKARTA = ZoneInfo("Asia/Jakarta")

OFFICE = OfficeLocation(location_id=1, name="Jakarta HQ", latitude=-6.2, longitude=106.816666, radius_meters=100)
STORED_FACE = tuple([0.0] * 128)


def face_at_distance(distance: float) -> tuple[float, ...]:
    """Descriptor whose Euclidean distance to STORED_FACE is ``distance``."""
    return (distance,) + STORED_FACE[1:]


def offset_north(point: GeoPoint, meters: float) -> GeoPoint:
    return GeoPoint(point.latitude + math.degrees(meters / EARTH_RADIUS_METERS), point.longitude)


def jakarta(hour: int, minute: int = 0, *, day: int = 2, second: int = 0) -> datetime:
    # 2026-03-02 is a Monday.
    return datetime(2026, 3, day, hour, minute, second, tzinfo=JAKARTA)


@dataclass
class InMemoryEmployees:
    employees: dict[int, Employee]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.employees.get(employee_id)


@dataclass
class InMemoryLocations:
    locations: dict[int, OfficeLocation]

    def get_by_id(self, location_id: int) -> Optional[OfficeLocation]:
        return self.locations.get(location_id)


@dataclass
class InMemorySettings:
    thresholds: Thresholds = field(default_factory=Thresholds)

    def get_thresholds(self) -> Thresholds:
        return self.thresholds


@dataclass
class InMemorySchedules:
    by_day: dict[int, WorkSchedule]

    def get_for_day(self, day_of_week: int) -> Optional[WorkSchedule]:
        return self.by_day.get(day_of_week)


@dataclass
class InMemoryHolidays:
    by_date: dict[date, Holiday] = field(default_factory=dict)

    def get_for_date(self, day: date) -> Optional[Holiday]:
        return self.by_date.get(day)


def office_week() -> dict[int, WorkSchedule]:
    names = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
    return {
        dow: WorkSchedule(
            day_of_week=dow,
            day_name=names[dow],
            start_time=time(8, 0),
            end_time=time(17, 0),
            late_tolerance_minutes=15,
            is_active=1 <= dow <= 5,
        )
        for dow in range(7)
    }


@dataclass
class World:
    """Collaborators for one test; tweak the fields, then call ``engine()``."""

    employees: InMemoryEmployees
    locations: InMemoryLocations
    settings: InMemorySettings
    schedules: InMemorySchedules
    holidays: InMemoryHolidays
    sessions: InMemorySessionStore
    clock: ClockSource

    @property
    def gate(self) -> VerificationGate:
        return VerificationGate(self.settings, self.locations)

    def engine(self, **policy) -> AttendanceEngine:
        return AttendanceEngine(
            self.sessions,
            self.employees,
            self.gate,
            self.schedules,
            clock=self.clock,
            holidays=self.holidays,
            policy=AttendancePolicy(**policy),
        )


# Stand-ins for mysql-connector connections, enough for db_cursor().
class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.lastrowid = None
        self.rowcount = 0

    def execute(self, sql, params=None):
        self._conn.executed.append((" ".join(sql.split()), params))
        if self._conn.error is not None:
            raise self._conn.error
        if sql.lstrip().upper().startswith("INSERT"):
            self.lastrowid = 7
            self.rowcount = 1
        elif sql.lstrip().upper().startswith("UPDATE"):
            self.rowcount = self._conn.update_rowcount

    def fetchone(self):
        return self._conn.rows[0] if self._conn.rows else None

    def fetchall(self):
        return list(self._conn.rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, *, rows=None, error=None, update_rowcount=1):
        self.rows = rows or []
        self.error = error
        self.update_rowcount = update_rowcount
        self.executed = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnectionFactory:
    def __init__(self, conn=None, connect_error=None):
        self.conn = conn or FakeConnection()
        self.connect_error = connect_error

    def connect(self):
        if self.connect_error is not None:
            raise self.connect_error
        return self.conn
