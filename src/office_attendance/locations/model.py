from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class OfficeLocation:
    """Domain entity: a registered office and its geofence."""

    location_id: int
    name: str
    latitude: float
    longitude: float
    radius_meters: int
    is_active: bool = True

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)
