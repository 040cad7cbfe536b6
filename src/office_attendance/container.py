from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_session_store import MySQLSessionStore
from .attendance.policy import AttendancePolicy
from .attendance.repository import SessionStore
from .attendance.service import AttendanceEngine
from .common.clock import ClockSource
from .core.constants import DEFAULT_STORE_TIMEOUT_SECONDS, DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .locations.mysql_location_repository import MySQLLocationRepository
from .locations.repository import LocationRepository
from .schedules.evaluator import ScheduleEvaluator
from .schedules.mysql_schedule_repository import MySQLWorkScheduleRepository
from .schedules.repository import WorkScheduleRepository
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .verification.gate import VerificationGate


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    locations_repo: LocationRepository
    settings_repo: SettingsRepository
    schedules_repo: WorkScheduleRepository
    holidays_repo: HolidayRepository
    sessions: SessionStore

    clock: ClockSource
    gate: VerificationGate
    policy: AttendancePolicy
    attendance_engine: AttendanceEngine

    conn: Optional[DatabaseConnection] = None


def wire(
    *,
    employees_repo: EmployeeRepository,
    locations_repo: LocationRepository,
    settings_repo: SettingsRepository,
    schedules_repo: WorkScheduleRepository,
    holidays_repo: HolidayRepository,
    sessions: SessionStore,
    clock: ClockSource,
    policy: AttendancePolicy,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    gate = VerificationGate(settings_repo, locations_repo)
    attendance_engine = AttendanceEngine(
        sessions,
        employees_repo,
        gate,
        schedules_repo,
        clock=clock,
        evaluator=ScheduleEvaluator(),
        holidays=holidays_repo,
        policy=policy,
    )
    return Container(
        employees_repo=employees_repo,
        locations_repo=locations_repo,
        settings_repo=settings_repo,
        schedules_repo=schedules_repo,
        holidays_repo=holidays_repo,
        sessions=sessions,
        clock=clock,
        gate=gate,
        policy=policy,
        attendance_engine=attendance_engine,
        conn=conn,
    )


def build_container(*, db_config: dict, settings=None) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        timeout_seconds=float(getattr(settings, "STORE_TIMEOUT_SECONDS", DEFAULT_STORE_TIMEOUT_SECONDS)),
    )
    conn = DatabaseConnection.get_instance(config)

    return wire(
        employees_repo=MySQLEmployeeRepository(conn),
        locations_repo=MySQLLocationRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
        schedules_repo=MySQLWorkScheduleRepository(conn),
        holidays_repo=MySQLHolidayRepository(conn),
        sessions=MySQLSessionStore(conn),
        clock=ClockSource(getattr(settings, "ATTENDANCE_TIMEZONE", DEFAULT_TIMEZONE)),
        policy=AttendancePolicy.from_settings(settings),
        conn=conn,
    )
