from __future__ import annotations

import math

import pytest

from office_attendance.core.constants import EARTH_RADIUS_METERS
from office_attendance.core.exceptions import ValidationError
from office_attendance.locations.model import GeoPoint
from office_attendance.verification.face import EuclideanFaceComparator
from office_attendance.verification.geo import haversine_meters

from support import OFFICE, STORED_FACE, face_at_distance, offset_north


def test_haversine_zero_for_same_point():
    assert haversine_meters(OFFICE.center, OFFICE.center) == 0.0


def test_haversine_matches_meridian_offset():
    moved = offset_north(OFFICE.center, 250)
    assert haversine_meters(OFFICE.center, moved) == pytest.approx(250, abs=1e-6)


def test_haversine_jakarta_to_bandung():
    jakarta = GeoPoint(-6.2088, 106.8456)
    bandung = GeoPoint(-6.9175, 107.6191)
    # Roughly 116 km as the crow flies.
    assert 110_000 < haversine_meters(jakarta, bandung) < 125_000


@pytest.mark.parametrize(
    "a, b",
    [
        (GeoPoint(0.0, 0.0), GeoPoint(0.0, 180.0)),
        (GeoPoint(-6.2, 106.816666), GeoPoint(6.2, -73.183334)),
        (GeoPoint(45.0, 10.0), GeoPoint(-45.0, -170.0)),
    ],
)
def test_haversine_antipodal_points_are_half_the_circumference(a, b):
    assert haversine_meters(a, b) == pytest.approx(math.pi * EARTH_RADIUS_METERS, rel=1e-6)


def test_identical_descriptors_score_100():
    assert EuclideanFaceComparator().compare(STORED_FACE, STORED_FACE) == 100.0


def test_similarity_is_linear_in_distance():
    comparator = EuclideanFaceComparator()
    assert comparator.compare(face_at_distance(0.32), STORED_FACE) == pytest.approx(68.0)
    assert comparator.compare(face_at_distance(0.4), STORED_FACE) == pytest.approx(60.0)


def test_similarity_is_clamped_at_zero():
    assert EuclideanFaceComparator().compare(face_at_distance(1.7), STORED_FACE) == 0.0


def test_descriptor_length_mismatch_is_validation_error():
    with pytest.raises(ValidationError):
        EuclideanFaceComparator().compare((0.1, 0.2), STORED_FACE)


def test_descriptor_length_is_enforced():
    comparator = EuclideanFaceComparator(descriptor_length=128)
    with pytest.raises(ValidationError):
        comparator.compare((0.0,) * 64, (0.0,) * 64)
