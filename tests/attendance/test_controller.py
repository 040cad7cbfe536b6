from __future__ import annotations

from datetime import timezone

import pytest

from office_attendance.attendance.policy import AttendancePolicy
from office_attendance.common.clock import ClockSource
from office_attendance.container import wire
from office_attendance.core.exceptions import StoreTimeout
from office_attendance.main import create_app

from support import OFFICE, STORED_FACE, jakarta, offset_north


class Now:
    def __init__(self, value):
        self.value = value

    def __call__(self):
        return self.value.astimezone(timezone.utc)


@pytest.fixture
def now():
    return Now(jakarta(8, 5))


@pytest.fixture
def client(world, now, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    container = wire(
        employees_repo=world.employees,
        locations_repo=world.locations,
        settings_repo=world.settings,
        schedules_repo=world.schedules,
        holidays_repo=world.holidays,
        sessions=world.sessions,
        clock=ClockSource("Asia/Jakarta", now_fn=now),
        policy=AttendancePolicy(strict=True),
    )
    app = create_app(container)
    return app.test_client()


def _check_in_body(**overrides):
    body = {
        "employee_id": 1,
        "face_descriptor": list(STORED_FACE),
        "latitude": OFFICE.latitude,
        "longitude": OFFICE.longitude,
    }
    body.update(overrides)
    return body


def test_health(client):
    res = client.get("/health")

    assert res.status_code == 200
    assert res.get_json() == {"status": "ok", "timezone": "Asia/Jakarta"}


def test_check_in_then_check_out(client, now):
    res = client.post("/api/attendance/check-in", json=_check_in_body())

    assert res.status_code == 201
    data = res.get_json()["data"]
    assert data["status"] == "present"
    assert data["check_in_time"] == "2026-03-02T01:05:00+00:00"
    assert data["verification"]["face_score"] == 100.0

    now.value = jakarta(17, 0)
    res = client.post("/api/attendance/check-out", json={"employee_id": 1})

    assert res.status_code == 200
    assert res.get_json()["data"]["check_out_time"] == "2026-03-02T10:00:00+00:00"


def test_duplicate_check_in_is_conflict(client):
    client.post("/api/attendance/check-in", json=_check_in_body())
    res = client.post("/api/attendance/check-in", json=_check_in_body())

    assert res.status_code == 409
    assert res.get_json()["error"]["code"] == "DuplicateCheckIn"


def test_location_rejection_is_unprocessable(client):
    far = offset_north(OFFICE.center, 400)
    res = client.post("/api/attendance/check-in", json=_check_in_body(latitude=far.latitude, longitude=far.longitude))

    body = res.get_json()
    assert res.status_code == 422
    assert body["error"]["code"] == "LocationRejected"
    assert body["error"]["details"]["allowed_radius_meters"] == 100


def test_missing_employee_id_is_bad_request(client):
    res = client.post("/api/attendance/check-in", json=_check_in_body(employee_id=None))

    assert res.status_code == 400
    assert res.get_json()["error"]["kind"] == "validation"


def test_lone_latitude_is_bad_request(client):
    res = client.post("/api/attendance/check-in", json=_check_in_body(longitude=None))
    assert res.status_code == 400


def test_unknown_employee_is_not_found(client):
    res = client.post("/api/attendance/check-in", json=_check_in_body(employee_id=99))
    assert res.status_code == 404


def test_check_out_without_session_is_not_found(client):
    res = client.post("/api/attendance/check-out", json={"employee_id": 1})

    assert res.status_code == 404
    assert res.get_json()["error"]["code"] == "NoOpenSession"


def test_open_and_today_queries(client, now):
    assert client.get("/api/attendance/open?employee_id=1").get_json()["data"] is None

    client.post("/api/attendance/check-in", json=_check_in_body())

    open_session = client.get("/api/attendance/open?employee_id=1").get_json()["data"]
    today = client.get("/api/attendance/today?employee_id=1").get_json()["data"]
    assert open_session["employee_id"] == 1
    assert [s["id"] for s in today] == [open_session["id"]]


def test_query_without_employee_is_bad_request(client):
    assert client.get("/api/attendance/today").status_code == 400


def test_store_timeout_on_check_in_is_retryable(client, world, monkeypatch):
    def boom(session):
        raise StoreTimeout("deadline exceeded")

    monkeypatch.setattr(world.sessions, "insert_open", boom)

    res = client.post("/api/attendance/check-in", json=_check_in_body())

    error = res.get_json()["error"]
    assert res.status_code == 503
    assert error["retryable"] is True


def test_store_timeout_on_check_out_asks_to_reread(client, world, monkeypatch):
    client.post("/api/attendance/check-in", json=_check_in_body())

    def boom(**kwargs):
        raise StoreTimeout("deadline exceeded")

    monkeypatch.setattr(world.sessions, "close", boom)

    res = client.post("/api/attendance/check-out", json={"employee_id": 1, "latitude": OFFICE.latitude, "longitude": OFFICE.longitude})

    assert res.status_code == 503
    assert "re-read the open session" in res.get_json()["error"]["message"]
