from __future__ import annotations

from dataclasses import replace

import pytest

from office_attendance.settings.model import Thresholds
from office_attendance.verification.gate import VerificationGate

from support import OFFICE, STORED_FACE, face_at_distance, offset_north


def _employee(world, employee_id=1):
    return world.employees.get_by_id(employee_id)


def test_boundary_distance_equal_to_radius_is_accepted(world):
    result = world.gate.evaluate(_employee(world), STORED_FACE, offset_north(OFFICE.center, 100))

    assert result.distance_meters == 100.0
    assert result.allowed_radius_meters == 100
    assert result.location_ok is True


def test_one_meter_past_radius_is_rejected(world):
    result = world.gate.evaluate(_employee(world), STORED_FACE, offset_north(OFFICE.center, 101))

    assert result.location_ok is False
    assert result.passed is False


@pytest.mark.parametrize(
    "gps_radius, meters, expected",
    [
        (100, 85, True),
        (200, 150, True),
        (200, 250, False),
    ],
)
def test_gps_setting_widens_the_office_radius(world, gps_radius, meters, expected):
    world.settings.thresholds = Thresholds(face_threshold=80, gps_radius=gps_radius)

    result = world.gate.evaluate(_employee(world), STORED_FACE, offset_north(OFFICE.center, meters))

    assert result.location_ok is expected
    assert result.allowed_radius_meters == max(OFFICE.radius_meters, gps_radius)


def test_employee_without_office_skips_location(world):
    result = world.gate.evaluate(_employee(world, 2), STORED_FACE, None)

    assert result.location_ok is True
    assert result.location.skipped is True
    assert result.distance_meters is None


def test_inactive_office_skips_location(world):
    world.locations.locations[OFFICE.location_id] = replace(OFFICE, is_active=False)
    result = world.gate.evaluate(_employee(world), STORED_FACE, offset_north(OFFICE.center, 5000))

    assert result.location_ok is True
    assert result.location.skipped is True


def test_missing_location_fails_when_office_assigned(world):
    result = world.gate.evaluate(_employee(world), STORED_FACE, None)

    assert result.location_ok is False
    assert result.distance_meters is None
    assert result.office_location_id == OFFICE.location_id


def test_face_score_against_threshold(world):
    world.settings.thresholds = Thresholds(face_threshold=70, gps_radius=100)

    near = world.gate.evaluate(_employee(world), face_at_distance(0.25), OFFICE.center)
    far = world.gate.evaluate(_employee(world), face_at_distance(0.32), OFFICE.center)

    assert near.face_score == pytest.approx(75.0)
    assert near.face_ok is True
    assert far.face_score == pytest.approx(68.0)
    assert far.face_ok is False
    assert far.face_threshold == 70


def test_precomputed_score_is_used_without_descriptor(world):
    result = world.gate.evaluate(_employee(world), None, OFFICE.center, face_score=91.5)

    assert result.face_score == 91.5
    assert result.face_ok is True


def test_no_registered_descriptor_fails_face(world):
    result = world.gate.evaluate(_employee(world, 4), STORED_FACE, OFFICE.center)

    assert result.face_score is None
    assert result.face_ok is False


@pytest.mark.parametrize("require_face", [True, False])
def test_client_score_without_registered_descriptor_fails_face(world, require_face):
    result = world.gate.evaluate(_employee(world, 4), None, OFFICE.center, face_score=99, require_face=require_face)

    assert result.face_score is None
    assert result.face_ok is False
    assert result.passed is False


def test_no_face_evidence_passes_when_face_not_required(world):
    result = world.gate.evaluate(_employee(world), None, OFFICE.center, require_face=False)

    assert result.face_score is None
    assert result.face_ok is True


def test_evaluate_location_only(world):
    check = world.gate.evaluate_location(OFFICE.location_id, offset_north(OFFICE.center, 40))

    assert check.location_ok is True
    assert check.distance_meters == pytest.approx(40.0)


def test_custom_comparator_is_used(world):
    class FixedComparator:
        def compare(self, candidate, stored):
            return 42.0

    gate = VerificationGate(world.settings, world.locations, FixedComparator())
    result = gate.evaluate(_employee(world), STORED_FACE, OFFICE.center)

    assert result.face_score == 42.0
    assert result.face_ok is False
