from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from ..common.clock import UTC, ClockSource, ensure_aware, sunday_based_weekday
from ..common.validators import require_coordinates, require_descriptor, require_employee_id, require_score
from ..core.constants import FACE_DESCRIPTOR_LENGTH
from ..core.enums import ErrorCode, UnscheduledPolicy
from ..core.exceptions import DuplicateSessionError, ValidationError
from ..core.logging import get_logger
from ..employees.repository import EmployeeRepository
from ..holidays.repository import HolidayRepository
from ..locations.model import GeoPoint
from ..schedules.evaluator import ScheduleEvaluator, active_schedule
from ..schedules.repository import WorkScheduleRepository
from ..verification.gate import GateResult, LocationCheck, VerificationGate
from .model import AttendanceSession, NewSession
from .policy import AttendancePolicy
from .repository import SessionStore
from .result import AttendanceResult

logger = get_logger(__name__)


def _checked_location(location: Optional[GeoPoint]) -> Optional[GeoPoint]:
    if location is None:
        return None
    if not isinstance(location, GeoPoint):
        raise ValidationError("location must be a GeoPoint")
    return require_coordinates(location.latitude, location.longitude)


def _review_note(note: Optional[str], gate: GateResult) -> Optional[str]:
    missed = []
    if not gate.location_ok:
        missed.append("location")
    if not gate.face_ok:
        missed.append("face")
    if not missed:
        return note
    flag = "Verification not passed: " + ", ".join(missed)
    return f"{note}; {flag}" if note else flag


class AttendanceEngine:
    """Check-in / check-out state machine for one employee and attendance day.

    NoSession -> Open -> Closed. Closed is terminal for the day.

    Business rejections come back as ``AttendanceResult.failure``. Malformed
    input raises ValidationError and store trouble raises StoreError; both
    happen before (validation) or instead of (store) a committed transition.
    """

    def __init__(
        self,
        sessions: SessionStore,
        employees: EmployeeRepository,
        gate: VerificationGate,
        schedules: WorkScheduleRepository,
        *,
        clock: Optional[ClockSource] = None,
        evaluator: Optional[ScheduleEvaluator] = None,
        holidays: Optional[HolidayRepository] = None,
        policy: Optional[AttendancePolicy] = None,
    ):
        self._sessions = sessions
        self._employees = employees
        self._gate = gate
        self._schedules = schedules
        self._clock = clock or ClockSource()
        self._evaluator = evaluator or ScheduleEvaluator()
        self._holidays = holidays
        self._policy = policy or AttendancePolicy()

    @property
    def clock(self) -> ClockSource:
        return self._clock

    def _instant(self, now: Optional[datetime]) -> datetime:
        if now is None:
            return self._clock.now().astimezone(UTC)
        return ensure_aware(now, "now").astimezone(UTC)

    def check_in(
        self,
        employee_id: Any,
        face_descriptor: Optional[Sequence[float]] = None,
        location: Optional[GeoPoint] = None,
        *,
        now: Optional[datetime] = None,
        face_score: Optional[float] = None,
    ) -> AttendanceResult:
        employee_id = require_employee_id(employee_id)
        location = _checked_location(location)
        if face_descriptor is not None:
            face_descriptor = require_descriptor(face_descriptor, length=FACE_DESCRIPTOR_LENGTH)
        if face_score is not None:
            face_score = require_score(face_score)
        now = self._instant(now)

        employee = self._employees.get_by_id(employee_id)
        if employee is None or not employee.is_active:
            logger.warning("Check-in rejected: employee %s not found or inactive", employee_id)
            return AttendanceResult.failure(
                ErrorCode.EMPLOYEE_NOT_FOUND,
                "Employee not found or inactive",
                employee_id=employee_id,
            )

        window = self._clock.window(now)
        local_now = self._clock.local(now)

        if self._holidays is not None:
            holiday = self._holidays.get_for_date(window.local_date)
            if holiday is not None and holiday.is_active:
                logger.warning("Check-in rejected: employee %s on holiday %s", employee_id, holiday.name)
                return AttendanceResult.failure(
                    ErrorCode.HOLIDAY_CHECK_IN,
                    f"Today is a holiday ({holiday.name}); check-in is not available",
                    holiday=holiday.name,
                    date=window.local_date.isoformat(),
                )

        schedule = active_schedule(self._schedules.get_for_day(sunday_based_weekday(window.local_date)))
        if schedule is None and self._policy.unscheduled_policy == UnscheduledPolicy.REJECT:
            logger.warning("Check-in rejected: %s is not a working day", window.local_date)
            return AttendanceResult.failure(
                ErrorCode.NOT_WORKING_DAY,
                "Today is not a working day",
                date=window.local_date.isoformat(),
            )
        if self._evaluator.is_too_early(local_now, schedule, self._policy.early_checkin_minutes):
            logger.warning("Check-in rejected: employee %s too early at %s", employee_id, local_now.strftime("%H:%M"))
            return AttendanceResult.failure(
                ErrorCode.TOO_EARLY,
                f"Check-in opens {self._policy.early_checkin_minutes} minutes before {schedule.start_time.strftime('%H:%M')}",
                start_time=schedule.start_time.strftime("%H:%M"),
                early_checkin_minutes=self._policy.early_checkin_minutes,
            )

        # An open or a closed session both end the day for check-in.
        today = self._sessions.find_in_window(employee_id, window)
        if today:
            existing = today[-1]
            state = "open" if existing.is_open else "closed"
            logger.warning("Check-in rejected: employee %s already has a %s session today", employee_id, state)
            return AttendanceResult.failure(
                ErrorCode.DUPLICATE_CHECK_IN,
                "Already checked in today",
                session=existing,
                session_id=existing.session_id,
            )

        gate = self._gate.evaluate(
            employee,
            face_descriptor,
            location,
            face_score=face_score,
            require_face=self._policy.require_face,
        )
        if self._policy.strict:
            rejected = self._reject_on_gate(employee_id, gate)
            if rejected is not None:
                return rejected

        decision = self._evaluator.evaluate(local_now, schedule)
        needs_review = decision.needs_review or not gate.passed

        try:
            session = self._sessions.insert_open(
                NewSession(
                    employee_id=employee_id,
                    attendance_day=window.local_date,
                    check_in_time=now,
                    status=decision.status,
                    check_in_location=location,
                    face_match_score=gate.face_score,
                    office_location_id=gate.office_location_id,
                    status_detail=decision.detail,
                    late_minutes=decision.late_minutes,
                    needs_review=needs_review,
                    note=_review_note(decision.note, gate),
                )
            )
        except DuplicateSessionError:
            logger.warning("Check-in lost race: employee %s already has a session today", employee_id)
            return AttendanceResult.failure(
                ErrorCode.DUPLICATE_CHECK_IN,
                "Already checked in today",
                verification=gate,
            )

        logger.info(
            "Check-in employee=%s session=%s status=%s detail=%s review=%s",
            employee_id,
            session.session_id,
            session.status.value,
            decision.detail.value,
            needs_review,
        )
        return AttendanceResult.success(session, verification=gate, decision=decision)

    def _reject_on_gate(self, employee_id: int, gate: GateResult) -> Optional[AttendanceResult]:
        # Location first, then face.
        if not gate.location_ok:
            logger.warning(
                "Check-in rejected: employee %s at %s m, allowed %s m",
                employee_id,
                gate.distance_meters,
                gate.allowed_radius_meters,
            )
            return self._location_rejected(gate.location, verification=gate)
        if not gate.face_ok:
            logger.warning(
                "Check-in rejected: employee %s face score %s below %s",
                employee_id,
                gate.face_score,
                gate.face_threshold,
            )
            return AttendanceResult.failure(
                ErrorCode.FACE_REJECTED,
                "Face verification failed",
                verification=gate,
                face_score=gate.face_score,
                face_threshold=gate.face_threshold,
            )
        return None

    @staticmethod
    def _location_rejected(check: LocationCheck, **kwargs: Any) -> AttendanceResult:
        if check.distance_meters is None:
            message = "Location is required for this office"
        else:
            message = f"Outside office area ({check.distance_meters:.0f} m, allowed {check.allowed_radius_meters} m)"
        return AttendanceResult.failure(
            ErrorCode.LOCATION_REJECTED,
            message,
            distance_meters=check.distance_meters,
            allowed_radius_meters=check.allowed_radius_meters,
            office_location_id=check.office_location_id,
            **kwargs,
        )

    def check_out(
        self,
        employee_id: Any,
        location: Optional[GeoPoint] = None,
        *,
        now: Optional[datetime] = None,
    ) -> AttendanceResult:
        employee_id = require_employee_id(employee_id)
        location = _checked_location(location)
        now = self._instant(now)

        window = self._clock.window(now)
        session = self._sessions.find_open(employee_id, window)
        if session is None:
            if self._sessions.find_in_window(employee_id, window):
                logger.warning("Check-out rejected: employee %s already checked out today", employee_id)
                return AttendanceResult.failure(ErrorCode.ALREADY_CLOSED, "Already checked out today")
            logger.warning("Check-out rejected: employee %s has no open session", employee_id)
            return AttendanceResult.failure(ErrorCode.NO_OPEN_SESSION, "No check-in found for today")

        if now <= session.check_in_time:
            logger.warning(
                "Check-out rejected: employee %s at %s not after check-in %s",
                employee_id,
                now.isoformat(),
                session.check_in_time.isoformat(),
            )
            return AttendanceResult.failure(
                ErrorCode.INVALID_CHECK_OUT_TIME,
                "Check-out time must be after check-in time",
                session=session,
                check_in_time=session.check_in_time.isoformat(),
                check_out_time=now.isoformat(),
            )

        needs_review = False
        if self._policy.verify_checkout_location:
            check = self._gate.evaluate_location(session.office_location_id, location)
            if not check.location_ok:
                if self._policy.strict:
                    logger.warning(
                        "Check-out rejected: employee %s at %s m, allowed %s m",
                        employee_id,
                        check.distance_meters,
                        check.allowed_radius_meters,
                    )
                    return self._location_rejected(check, session=session)
                needs_review = True

        closed = self._sessions.close(
            session_id=session.session_id,
            check_out_time=now,
            location=location,
            needs_review=needs_review,
        )
        if closed is None:
            logger.warning("Check-out lost race: session %s already closed", session.session_id)
            return AttendanceResult.failure(
                ErrorCode.ALREADY_CLOSED,
                "Already checked out today",
                session_id=session.session_id,
            )

        logger.info("Check-out employee=%s session=%s", employee_id, closed.session_id)
        return AttendanceResult.success(closed)

    def get_open_session(self, employee_id: Any, instant: Optional[datetime] = None) -> Optional[AttendanceSession]:
        employee_id = require_employee_id(employee_id)
        return self._sessions.find_open(employee_id, self._clock.window(self._instant(instant)))

    def get_today_sessions(self, employee_id: Any, instant: Optional[datetime] = None) -> Sequence[AttendanceSession]:
        employee_id = require_employee_id(employee_id)
        return list(self._sessions.find_in_window(employee_id, self._clock.window(self._instant(instant))))
