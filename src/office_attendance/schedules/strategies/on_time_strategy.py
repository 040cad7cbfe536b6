from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus, StatusDetail
from .base import CheckInStrategy, ScheduleBoundaries, StatusDecision


class OnTimeStrategy(CheckInStrategy):
    """Check-in up to the end of the on-time window (early arrivals included)."""

    def decide(self, *, at: datetime, bounds: Optional[ScheduleBoundaries]) -> StatusDecision:
        minutes = bounds.minutes_after_start(at) if bounds else 0
        note = f"On time ({minutes} min after start)" if minutes else None
        return StatusDecision(status=AttendanceStatus.PRESENT, detail=StatusDetail.ON_TIME, note=note)
