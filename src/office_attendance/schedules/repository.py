from __future__ import annotations

from typing import Optional, Protocol

from .model import WorkSchedule


class WorkScheduleRepository(Protocol):
    def get_for_day(self, day_of_week: int) -> Optional[WorkSchedule]:
        """Return the row for a day of week (0=Sunday), active or not."""

        raise NotImplementedError
