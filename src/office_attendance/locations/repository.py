from __future__ import annotations

from typing import Optional, Protocol

from .model import OfficeLocation


class LocationRepository(Protocol):
    def get_by_id(self, location_id: int) -> Optional[OfficeLocation]:
        raise NotImplementedError
