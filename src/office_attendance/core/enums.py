from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Session status stored in the database.

    ABSENT and ON_LEAVE are written by other collaborators, never by check-in.
    """

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    ON_LEAVE = "on_leave"


class StatusDetail(str, Enum):
    """Where inside the work schedule the check-in landed."""

    ON_TIME = "on_time"
    WITHIN_TOLERANCE = "within_tolerance"
    LATE_BEYOND = "late_beyond"
    UNSCHEDULED = "unscheduled"


class UnscheduledPolicy(str, Enum):
    """What check-in does on a day without an active work schedule."""

    PRESENT = "present"
    REJECT = "reject"


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    VERIFICATION = "verification"
    TEMPORAL = "temporal"
    CALENDAR = "calendar"


class ErrorCode(str, Enum):
    """Business outcomes returned (not raised) by check-in/check-out."""

    EMPLOYEE_NOT_FOUND = "EmployeeNotFound"
    NO_OPEN_SESSION = "NoOpenSession"
    DUPLICATE_CHECK_IN = "DuplicateCheckIn"
    ALREADY_CLOSED = "AlreadyClosed"
    FACE_REJECTED = "FaceRejected"
    LOCATION_REJECTED = "LocationRejected"
    INVALID_CHECK_OUT_TIME = "InvalidCheckOutTime"
    TOO_EARLY = "TooEarly"
    HOLIDAY_CHECK_IN = "HolidayCheckIn"
    NOT_WORKING_DAY = "NotWorkingDay"

    @property
    def kind(self) -> ErrorKind:
        return _ERROR_KINDS[self]


_ERROR_KINDS = {
    ErrorCode.EMPLOYEE_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.NO_OPEN_SESSION: ErrorKind.NOT_FOUND,
    ErrorCode.DUPLICATE_CHECK_IN: ErrorKind.CONFLICT,
    ErrorCode.ALREADY_CLOSED: ErrorKind.CONFLICT,
    ErrorCode.FACE_REJECTED: ErrorKind.VERIFICATION,
    ErrorCode.LOCATION_REJECTED: ErrorKind.VERIFICATION,
    ErrorCode.INVALID_CHECK_OUT_TIME: ErrorKind.TEMPORAL,
    ErrorCode.TOO_EARLY: ErrorKind.TEMPORAL,
    ErrorCode.HOLIDAY_CHECK_IN: ErrorKind.CALENDAR,
    ErrorCode.NOT_WORKING_DAY: ErrorKind.CALENDAR,
}
