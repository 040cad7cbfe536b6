"""Example: drive the attendance engine directly (no Flask).

Controllers stay thin; the check-in/check-out rules live in AttendanceEngine.
"""

import importlib
import sys

from office_attendance.config import get_settings_module
from office_attendance.container import build_container
from office_attendance.locations.model import GeoPoint


def main(employee_id: int = 1):
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)
    engine = container.attendance_engine

    result = engine.check_in(employee_id, location=GeoPoint(-6.2088, 106.8456), face_score=91.5)
    if result.ok:
        print("checked in:", result.session.to_dict())
    else:
        print("check-in rejected:", result.error.to_dict())

    print("open session:", engine.get_open_session(employee_id))


if __name__ == "__main__":
    main(int(sys.argv[1]) if len(sys.argv) > 1 else 1)
