from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, StatusDetail
from ..locations.model import GeoPoint


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: one check-in, and later its check-out, for one attendance day."""

    session_id: int
    employee_id: int
    check_in_time: datetime
    status: AttendanceStatus
    created_at: datetime
    updated_at: datetime
    check_in_latitude: Optional[float] = None
    check_in_longitude: Optional[float] = None
    check_out_time: Optional[datetime] = None
    check_out_latitude: Optional[float] = None
    check_out_longitude: Optional[float] = None
    face_match_score: Optional[float] = None
    office_location_id: Optional[int] = None
    status_detail: Optional[StatusDetail] = None
    late_minutes: int = 0
    needs_review: bool = False
    note: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.check_out_time is None

    def to_dict(self) -> dict:
        return {
            "id": self.session_id,
            "employee_id": self.employee_id,
            "check_in_time": _iso(self.check_in_time),
            "check_in_latitude": self.check_in_latitude,
            "check_in_longitude": self.check_in_longitude,
            "check_out_time": _iso(self.check_out_time),
            "check_out_latitude": self.check_out_latitude,
            "check_out_longitude": self.check_out_longitude,
            "face_match_score": self.face_match_score,
            "office_location_id": self.office_location_id,
            "status": self.status.value,
            "status_detail": self.status_detail.value if self.status_detail else None,
            "late_minutes": self.late_minutes,
            "needs_review": self.needs_review,
            "note": self.note,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


@dataclass(frozen=True)
class NewSession:
    """Insert payload for an open session. ``attendance_day`` is the civil date of check-in."""

    employee_id: int
    attendance_day: date
    check_in_time: datetime
    status: AttendanceStatus
    check_in_location: Optional[GeoPoint] = None
    face_match_score: Optional[float] = None
    office_location_id: Optional[int] = None
    status_detail: Optional[StatusDetail] = None
    late_minutes: int = 0
    needs_review: bool = False
    note: Optional[str] = None
