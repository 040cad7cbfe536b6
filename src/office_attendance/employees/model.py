from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity owned by the employee directory; read-only here."""

    employee_id: int
    full_name: str
    is_active: bool = True
    office_location_id: Optional[int] = None
    face_descriptor: Optional[tuple[float, ...]] = None
