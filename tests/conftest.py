from __future__ import annotations

import pytest

from office_attendance.attendance.memory_session_store import InMemorySessionStore
from office_attendance.common.clock import ClockSource

from support import (
    OFFICE,
    STORED_FACE,
    Employee,
    InMemoryEmployees,
    InMemoryHolidays,
    InMemoryLocations,
    InMemorySchedules,
    InMemorySettings,
    World,
    office_week,
)


@pytest.fixture
def world() -> World:
    return World(
        employees=InMemoryEmployees(
            {
                1: Employee(1, "Ayu Lestari", office_location_id=OFFICE.location_id, face_descriptor=STORED_FACE),
                2: Employee(2, "Budi Santoso", face_descriptor=STORED_FACE),
                3: Employee(3, "Citra Dewi", is_active=False, office_location_id=OFFICE.location_id),
                4: Employee(4, "Dimas Pratama", office_location_id=OFFICE.location_id),
            }
        ),
        locations=InMemoryLocations({OFFICE.location_id: OFFICE}),
        settings=InMemorySettings(),
        schedules=InMemorySchedules(office_week()),
        holidays=InMemoryHolidays(),
        sessions=InMemorySessionStore(),
        clock=ClockSource("Asia/Jakarta"),
    )
