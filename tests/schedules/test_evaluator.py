from __future__ import annotations

from datetime import datetime, time

import pytest

from office_attendance.core.enums import AttendanceStatus, StatusDetail
from office_attendance.schedules.evaluator import ScheduleEvaluator
from office_attendance.schedules.model import WorkSchedule
from office_attendance.schedules.strategies.base import ScheduleBoundaries
from office_attendance.schedules.strategies.late_strategy import LateStrategy
from office_attendance.schedules.strategies.on_time_strategy import OnTimeStrategy
from office_attendance.schedules.strategies.tolerance_strategy import ToleranceStrategy
from office_attendance.schedules.strategies.unscheduled_strategy import UnscheduledStrategy

from support import jakarta

MONDAY = WorkSchedule(day_of_week=1, start_time=time(8, 0), end_time=time(17, 0), late_tolerance_minutes=15)


@pytest.mark.parametrize(
    "hour, minute, detail, status",
    [
        (7, 30, StatusDetail.ON_TIME, AttendanceStatus.PRESENT),
        (8, 0, StatusDetail.ON_TIME, AttendanceStatus.PRESENT),
        (8, 15, StatusDetail.ON_TIME, AttendanceStatus.PRESENT),
        (8, 16, StatusDetail.WITHIN_TOLERANCE, AttendanceStatus.PRESENT),
        (8, 30, StatusDetail.WITHIN_TOLERANCE, AttendanceStatus.PRESENT),
        (8, 31, StatusDetail.LATE_BEYOND, AttendanceStatus.LATE),
        (17, 30, StatusDetail.LATE_BEYOND, AttendanceStatus.LATE),
    ],
)
def test_default_boundaries_from_late_tolerance(hour, minute, detail, status):
    decision = ScheduleEvaluator().evaluate(jakarta(hour, minute), MONDAY)

    assert decision.detail == detail
    assert decision.status == status


def test_seconds_inside_the_last_on_time_minute_still_count():
    decision = ScheduleEvaluator().evaluate(jakarta(8, 15, second=59), MONDAY)
    assert decision.detail == StatusDetail.ON_TIME


def test_late_minutes_counted_from_start():
    decision = ScheduleEvaluator().evaluate(jakarta(8, 47), MONDAY)

    assert decision.late_minutes == 47
    assert decision.note == "Late 47 min (tolerance ended 08:30)"


def test_configured_windows_override_defaults():
    schedule = WorkSchedule(
        day_of_week=1,
        start_time=time(9, 0),
        end_time=time(18, 0),
        on_time_end_time=time(9, 5),
        tolerance_start_time=time(9, 5),
        tolerance_end_time=time(9, 45),
        late_tolerance_minutes=15,
    )
    evaluator = ScheduleEvaluator()

    assert evaluator.evaluate(jakarta(9, 5), schedule).detail == StatusDetail.ON_TIME
    assert evaluator.evaluate(jakarta(9, 40), schedule).detail == StatusDetail.WITHIN_TOLERANCE
    assert evaluator.evaluate(jakarta(9, 46), schedule).detail == StatusDetail.LATE_BEYOND


def test_no_schedule_is_unscheduled_and_flagged():
    decision = ScheduleEvaluator().evaluate(jakarta(10, 0), None)

    assert decision.status == AttendanceStatus.PRESENT
    assert decision.detail == StatusDetail.UNSCHEDULED
    assert decision.needs_review is True


def test_inactive_schedule_counts_as_unscheduled():
    inactive = WorkSchedule(day_of_week=0, start_time=time(8, 0), end_time=time(17, 0), is_active=False)
    assert ScheduleEvaluator().evaluate(jakarta(10, 0), inactive).detail == StatusDetail.UNSCHEDULED


def test_factory_picks_strategy_per_window():
    evaluator = ScheduleEvaluator()
    bounds = ScheduleBoundaries.for_day(MONDAY, datetime(2026, 3, 2).date())

    assert isinstance(evaluator.for_checkin(at=datetime(2026, 3, 2, 8, 10), bounds=bounds), OnTimeStrategy)
    assert isinstance(evaluator.for_checkin(at=datetime(2026, 3, 2, 8, 20), bounds=bounds), ToleranceStrategy)
    assert isinstance(evaluator.for_checkin(at=datetime(2026, 3, 2, 9, 0), bounds=bounds), LateStrategy)
    assert isinstance(evaluator.for_checkin(at=datetime(2026, 3, 2, 9, 0), bounds=None), UnscheduledStrategy)


@pytest.mark.parametrize("hour, minute, expected", [(6, 59, True), (7, 0, False), (8, 30, False)])
def test_too_early_window(hour, minute, expected):
    assert ScheduleEvaluator().is_too_early(jakarta(hour, minute), MONDAY, 60) is expected


def test_too_early_never_applies_without_schedule():
    assert ScheduleEvaluator().is_too_early(jakarta(3, 0), None, 60) is False
