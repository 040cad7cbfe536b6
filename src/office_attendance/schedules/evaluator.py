from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from .model import WorkSchedule
from .strategies.base import CheckInStrategy, ScheduleBoundaries, StatusDecision
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy
from .strategies.tolerance_strategy import ToleranceStrategy
from .strategies.unscheduled_strategy import UnscheduledStrategy


def _wall_clock_minute(local_now: datetime) -> datetime:
    # Schedules are configured to the minute; 08:15:59 still counts as 08:15.
    return local_now.replace(tzinfo=None, second=0, microsecond=0)


def active_schedule(schedule: Optional[WorkSchedule]) -> Optional[WorkSchedule]:
    return schedule if schedule is not None and schedule.is_active else None


@dataclass
class ScheduleEvaluator:
    """Factory Pattern: choose the check-in strategy from the day's work schedule.

    ``local_now`` is the check-in instant read in the operating timezone.
    """

    def for_checkin(self, *, at: datetime, bounds: Optional[ScheduleBoundaries]) -> CheckInStrategy:
        if bounds is None:
            return UnscheduledStrategy()
        if at <= bounds.on_time_end:
            return OnTimeStrategy()
        if at <= bounds.tolerance_end:
            return ToleranceStrategy()
        return LateStrategy()

    def evaluate(self, local_now: datetime, schedule: Optional[WorkSchedule]) -> StatusDecision:
        at = _wall_clock_minute(local_now)
        schedule = active_schedule(schedule)
        bounds = ScheduleBoundaries.for_day(schedule, at.date()) if schedule else None
        strategy = self.for_checkin(at=at, bounds=bounds)
        return strategy.decide(at=at, bounds=bounds)

    def is_too_early(self, local_now: datetime, schedule: Optional[WorkSchedule], early_minutes: int) -> bool:
        """True when check-in comes more than ``early_minutes`` before the schedule start."""
        schedule = active_schedule(schedule)
        if schedule is None:
            return False
        at = _wall_clock_minute(local_now)
        bounds = ScheduleBoundaries.for_day(schedule, at.date())
        return at < bounds.start - timedelta(minutes=max(0, int(early_minutes)))
