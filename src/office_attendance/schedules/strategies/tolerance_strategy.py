from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus, StatusDetail
from .base import CheckInStrategy, ScheduleBoundaries, StatusDecision


class ToleranceStrategy(CheckInStrategy):
    """Grace period: after the on-time window but inside the tolerance window."""

    def decide(self, *, at: datetime, bounds: Optional[ScheduleBoundaries]) -> StatusDecision:
        minutes = bounds.minutes_after_start(at) if bounds else 0
        return StatusDecision(
            status=AttendanceStatus.PRESENT,
            detail=StatusDetail.WITHIN_TOLERANCE,
            note=f"Present within tolerance (+{minutes} min)",
        )
