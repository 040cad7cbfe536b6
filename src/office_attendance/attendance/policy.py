from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_EARLY_CHECKIN_MINUTES
from ..core.enums import UnscheduledPolicy


@dataclass(frozen=True)
class AttendancePolicy:
    """Deployment-level verification and schedule policy.

    strict: a failed face or location check blocks the transition; otherwise
        the scores are stored and the session is flagged for review.
    require_face: when False, a check-in without any face evidence passes the face check.
    verify_checkout_location: re-run the geofence on the check-out point.
    """

    strict: bool = False
    require_face: bool = True
    verify_checkout_location: bool = False
    unscheduled_policy: UnscheduledPolicy = UnscheduledPolicy.PRESENT
    early_checkin_minutes: int = DEFAULT_EARLY_CHECKIN_MINUTES

    @classmethod
    def from_settings(cls, settings) -> "AttendancePolicy":
        return cls(
            strict=bool(getattr(settings, "STRICT_VERIFICATION", False)),
            require_face=bool(getattr(settings, "REQUIRE_FACE", True)),
            verify_checkout_location=bool(getattr(settings, "VERIFY_CHECKOUT_LOCATION", False)),
            unscheduled_policy=UnscheduledPolicy(getattr(settings, "UNSCHEDULED_POLICY", UnscheduledPolicy.PRESENT.value)),
            early_checkin_minutes=int(getattr(settings, "EARLY_CHECKIN_MINUTES", DEFAULT_EARLY_CHECKIN_MINUTES)),
        )
