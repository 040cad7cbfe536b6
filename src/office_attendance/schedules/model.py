from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional


@dataclass(frozen=True)
class WorkSchedule:
    """Domain entity: the working hours for one day of the week (0=Sunday)."""

    day_of_week: int
    start_time: time
    end_time: time
    day_name: str = ""
    on_time_end_time: Optional[time] = None
    tolerance_start_time: Optional[time] = None
    tolerance_end_time: Optional[time] = None
    late_tolerance_minutes: int = 0
    is_active: bool = True
