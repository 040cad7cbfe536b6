from __future__ import annotations

from typing import Optional, Protocol

from .model import Employee


class EmployeeRepository(Protocol):
    """Directory lookup consumed by the attendance engine.

    Note: employee CRUD lives in the directory service, not here.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError
