from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus, StatusDetail
from .base import CheckInStrategy, ScheduleBoundaries, StatusDecision


class LateStrategy(CheckInStrategy):
    """Late check-in."""

    def decide(self, *, at: datetime, bounds: Optional[ScheduleBoundaries]) -> StatusDecision:
        minutes = bounds.minutes_after_start(at) if bounds else 0
        limit = f" (tolerance ended {bounds.tolerance_end:%H:%M})" if bounds else ""
        return StatusDecision(
            status=AttendanceStatus.LATE,
            detail=StatusDetail.LATE_BEYOND,
            late_minutes=minutes,
            note=f"Late {minutes} min{limit}",
        )
