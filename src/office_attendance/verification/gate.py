from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.logging import get_logger
from ..employees.model import Employee
from ..locations.model import GeoPoint
from ..locations.repository import LocationRepository
from ..settings.model import Thresholds
from ..settings.repository import SettingsRepository
from .face import EuclideanFaceComparator, FaceComparator
from .geo import haversine_meters

logger = get_logger(__name__)


@dataclass(frozen=True)
class LocationCheck:
    location_ok: bool
    distance_meters: Optional[float] = None
    allowed_radius_meters: Optional[int] = None
    office_location_id: Optional[int] = None
    skipped: bool = False


@dataclass(frozen=True)
class GateResult:
    """Outcome of identity + location verification. A miss is data, not an error."""

    face_score: Optional[float]
    face_ok: bool
    face_threshold: int
    location: LocationCheck

    @property
    def location_ok(self) -> bool:
        return self.location.location_ok

    @property
    def distance_meters(self) -> Optional[float]:
        return self.location.distance_meters

    @property
    def allowed_radius_meters(self) -> Optional[int]:
        return self.location.allowed_radius_meters

    @property
    def office_location_id(self) -> Optional[int]:
        return self.location.office_location_id

    @property
    def passed(self) -> bool:
        return self.face_ok and self.location_ok

    def to_dict(self) -> dict:
        return {
            "face_score": self.face_score,
            "face_ok": self.face_ok,
            "face_threshold": self.face_threshold,
            "distance_meters": self.distance_meters,
            "location_ok": self.location_ok,
            "allowed_radius_meters": self.allowed_radius_meters,
            "office_location_id": self.office_location_id,
            "location_skipped": self.location.skipped,
        }


class VerificationGate:
    """Evaluates face similarity and geofence against the configured thresholds.

    Defaults worth knowing:
    - An employee with no office assigned (or whose office is missing/inactive)
      passes the location check; the check is skipped and logged, not failed.
    - The geofence ceiling is ``max(office radius, gps_accuracy_radius)``, so a
      global setting can widen every office at once.
    - Distances are rounded to the centimeter before comparison.
    """

    def __init__(
        self,
        settings: SettingsRepository,
        locations: LocationRepository,
        comparator: Optional[FaceComparator] = None,
    ):
        self._settings = settings
        self._locations = locations
        self._comparator = comparator or EuclideanFaceComparator()

    def evaluate(
        self,
        employee: Employee,
        face_descriptor: Optional[Sequence[float]] = None,
        location: Optional[GeoPoint] = None,
        *,
        face_score: Optional[float] = None,
        require_face: bool = True,
    ) -> GateResult:
        thresholds = self._settings.get_thresholds()
        score = self._face_score(employee, face_descriptor, face_score)

        if score is None:
            # Face evidence with nothing on file to compare against never passes.
            face_ok = not require_face and face_descriptor is None and face_score is None
        else:
            face_ok = score >= thresholds.face_threshold

        location_check = self._check_location(employee.office_location_id, location, thresholds)
        logger.debug(
            "Gate employee=%s score=%s threshold=%s distance=%s allowed=%s",
            employee.employee_id,
            score,
            thresholds.face_threshold,
            location_check.distance_meters,
            location_check.allowed_radius_meters,
        )
        return GateResult(
            face_score=score,
            face_ok=face_ok,
            face_threshold=thresholds.face_threshold,
            location=location_check,
        )

    def evaluate_location(self, office_location_id: Optional[int], location: Optional[GeoPoint]) -> LocationCheck:
        """Location half only (used for the check-out point)."""
        return self._check_location(office_location_id, location, self._settings.get_thresholds())

    def _face_score(
        self,
        employee: Employee,
        face_descriptor: Optional[Sequence[float]],
        face_score: Optional[float],
    ) -> Optional[float]:
        if not employee.face_descriptor:
            if face_descriptor is not None or face_score is not None:
                logger.info("Employee %s has no registered face descriptor", employee.employee_id)
            return None

        if face_descriptor is not None:
            similarity = self._comparator.compare(face_descriptor, employee.face_descriptor)
            return max(0.0, min(100.0, float(similarity)))

        # Scores computed by the client-side recognizer are accepted as-is.
        if face_score is not None:
            return float(face_score)
        return None

    def _check_location(
        self,
        office_location_id: Optional[int],
        location: Optional[GeoPoint],
        thresholds: Thresholds,
    ) -> LocationCheck:
        if office_location_id is None:
            logger.info("No office assigned; geofence check skipped")
            return LocationCheck(location_ok=True, skipped=True)

        office = self._locations.get_by_id(office_location_id)
        if office is None or not office.is_active:
            logger.warning("Office %s missing or inactive; geofence check skipped", office_location_id)
            return LocationCheck(location_ok=True, office_location_id=office_location_id, skipped=True)

        allowed = max(int(office.radius_meters), thresholds.gps_radius)
        if location is None:
            return LocationCheck(location_ok=False, allowed_radius_meters=allowed, office_location_id=office.location_id)

        distance = round(haversine_meters(location, office.center), 2)
        return LocationCheck(
            location_ok=distance <= allowed,
            distance_meters=distance,
            allowed_radius_meters=allowed,
            office_location_id=office.location_id,
        )
