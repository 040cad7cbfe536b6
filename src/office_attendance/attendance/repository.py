from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..common.clock import DayWindow
from ..locations.model import GeoPoint
from .model import AttendanceSession, NewSession


class SessionStore(Protocol):
    """Persistence boundary for attendance sessions.

    Implementations enforce "at most one open session per employee and
    attendance day" atomically, never by read-then-write in the caller.
    Store failures raise StoreTimeout / StoreUnavailable.
    """

    def find_open(self, employee_id: int, window: DayWindow) -> Optional[AttendanceSession]:
        """Open session whose check-in lies inside the window."""

        raise NotImplementedError

    def find_in_window(self, employee_id: int, window: DayWindow) -> Sequence[AttendanceSession]:
        """All sessions (open or closed) whose check-in lies inside the window, oldest first."""

        raise NotImplementedError

    def insert_open(self, session: NewSession) -> AttendanceSession:
        """Atomic conditional insert.

        Raises DuplicateSessionError when an open session already exists for
        (employee_id, attendance_day).
        """

        raise NotImplementedError

    def close(
        self,
        *,
        session_id: int,
        check_out_time: datetime,
        location: Optional[GeoPoint] = None,
        needs_review: bool = False,
    ) -> Optional[AttendanceSession]:
        """Close a session only if it is still open.

        Returns the closed session, or None when it was already closed (or gone).
        ``needs_review`` only ever sets the flag, it never clears it.
        """

        raise NotImplementedError
