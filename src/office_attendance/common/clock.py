"""Attendance-day arithmetic.

Every component asks this module where a civil day starts and ends; nothing
else computes day boundaries.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import ValidationError

UTC = timezone.utc


@dataclass(frozen=True)
class DayWindow:
    """Half-open interval [start, end) of one civil day, as UTC instants."""

    start: datetime
    end: datetime
    local_date: date

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end


def ensure_aware(instant: datetime, field_name: str = "instant") -> datetime:
    if not isinstance(instant, datetime):
        raise ValidationError(f"{field_name} must be a datetime")
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise ValidationError(f"{field_name} must be timezone-aware")
    return instant


def day_window(instant: datetime, tz: tzinfo) -> DayWindow:
    ensure_aware(instant)
    local_date = instant.astimezone(tz).date()
    # Each boundary is its own local midnight, so DST days are 23h/25h long
    # and consecutive windows always share an edge.
    start_local = datetime.combine(local_date, time.min, tzinfo=tz)
    end_local = datetime.combine(local_date + timedelta(days=1), time.min, tzinfo=tz)
    return DayWindow(start=start_local.astimezone(UTC), end=end_local.astimezone(UTC), local_date=local_date)


def sunday_based_weekday(day: date) -> int:
    """0=Sunday .. 6=Saturday, the numbering used by work_schedules.day_of_week."""
    return (day.weekday() + 1) % 7


class ClockSource:
    def __init__(self, timezone_name: str = DEFAULT_TIMEZONE, *, now_fn: Optional[Callable[[], datetime]] = None):
        self._tz = ZoneInfo(timezone_name)
        self._now_fn = now_fn or (lambda: datetime.now(UTC))

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def now(self) -> datetime:
        return ensure_aware(self._now_fn(), "now")

    def window(self, instant: Optional[datetime] = None) -> DayWindow:
        return day_window(instant if instant is not None else self.now(), self._tz)

    def local(self, instant: datetime) -> datetime:
        """Civil wall-clock reading of an instant in the operating timezone."""
        return ensure_aware(instant).astimezone(self._tz)
