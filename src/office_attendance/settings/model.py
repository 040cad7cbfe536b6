from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..common.validators import require_int_in_range
from ..core.constants import (
    DEFAULT_FACE_THRESHOLD,
    DEFAULT_GPS_RADIUS,
    FACE_THRESHOLD_RANGE,
    GPS_RADIUS_RANGE,
    SETTING_FACE_THRESHOLD,
    SETTING_GPS_RADIUS,
)


@dataclass(frozen=True)
class Thresholds:
    face_threshold: int = DEFAULT_FACE_THRESHOLD
    gps_radius: int = DEFAULT_GPS_RADIUS

    def __post_init__(self):
        require_int_in_range(self.face_threshold, SETTING_FACE_THRESHOLD, FACE_THRESHOLD_RANGE)
        require_int_in_range(self.gps_radius, SETTING_GPS_RADIUS, GPS_RADIUS_RANGE)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "Thresholds":
        """Build from system_settings key/value rows; missing keys fall back to defaults."""
        return cls(
            face_threshold=require_int_in_range(
                values.get(SETTING_FACE_THRESHOLD, DEFAULT_FACE_THRESHOLD), SETTING_FACE_THRESHOLD, FACE_THRESHOLD_RANGE
            ),
            gps_radius=require_int_in_range(
                values.get(SETTING_GPS_RADIUS, DEFAULT_GPS_RADIUS), SETTING_GPS_RADIUS, GPS_RADIUS_RANGE
            ),
        )
