from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus, StatusDetail
from .base import CheckInStrategy, ScheduleBoundaries, StatusDecision


class UnscheduledStrategy(CheckInStrategy):
    """No active work schedule for the day: recorded as present and flagged."""

    def decide(self, *, at: datetime, bounds: Optional[ScheduleBoundaries]) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.PRESENT,
            detail=StatusDetail.UNSCHEDULED,
            needs_review=True,
            note="No active work schedule for this day",
        )
