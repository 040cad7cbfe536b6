from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ...core.enums import AttendanceStatus, StatusDetail
from ..model import WorkSchedule


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    detail: StatusDetail
    late_minutes: int = 0
    needs_review: bool = False
    note: Optional[str] = None


@dataclass(frozen=True)
class ScheduleBoundaries:
    """A work schedule pinned to one civil date (naive local wall-clock)."""

    start: datetime
    on_time_end: datetime
    tolerance_start: datetime
    tolerance_end: datetime
    end: datetime

    @classmethod
    def for_day(cls, schedule: WorkSchedule, day: date) -> "ScheduleBoundaries":
        tolerance = timedelta(minutes=max(0, int(schedule.late_tolerance_minutes or 0)))
        start = datetime.combine(day, schedule.start_time)

        if schedule.on_time_end_time:
            on_time_end = datetime.combine(day, schedule.on_time_end_time)
        else:
            on_time_end = start + tolerance

        if schedule.tolerance_start_time:
            tolerance_start = datetime.combine(day, schedule.tolerance_start_time)
        else:
            tolerance_start = on_time_end

        if schedule.tolerance_end_time:
            tolerance_end = datetime.combine(day, schedule.tolerance_end_time)
        else:
            tolerance_end = tolerance_start + tolerance

        return cls(
            start=start,
            on_time_end=on_time_end,
            tolerance_start=tolerance_start,
            tolerance_end=tolerance_end,
            end=datetime.combine(day, schedule.end_time),
        )

    def minutes_after_start(self, at: datetime) -> int:
        return max(0, int((at - self.start).total_seconds() // 60))


class CheckInStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide(self, *, at: datetime, bounds: Optional[ScheduleBoundaries]) -> StatusDecision:
        raise NotImplementedError
