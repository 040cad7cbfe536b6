from __future__ import annotations

import math
from typing import Any, Optional, Sequence

from ..core.exceptions import ValidationError
from ..locations.model import GeoPoint


def require_employee_id(value: Any) -> int:
    if value is None or isinstance(value, bool) or str(value).strip() == "":
        raise ValidationError("employee_id is required")
    try:
        employee_id = int(value)
    except (TypeError, ValueError):
        raise ValidationError("employee_id must be an integer") from None
    if employee_id <= 0:
        raise ValidationError("employee_id must be positive")
    return employee_id


def _finite(value: Any, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be finite")
    return number


def require_coordinates(latitude: Any, longitude: Any) -> GeoPoint:
    lat = _finite(latitude, "latitude")
    lng = _finite(longitude, "longitude")
    if not -90.0 <= lat <= 90.0:
        raise ValidationError("latitude must be between -90 and 90")
    if not -180.0 <= lng <= 180.0:
        raise ValidationError("longitude must be between -180 and 180")
    return GeoPoint(lat, lng)


def optional_location(latitude: Any, longitude: Any) -> Optional[GeoPoint]:
    """Both coordinates or neither; a lone coordinate is malformed input."""
    if latitude is None and longitude is None:
        return None
    if latitude is None or longitude is None:
        raise ValidationError("latitude and longitude must be provided together")
    return require_coordinates(latitude, longitude)


def require_descriptor(values: Any, *, length: Optional[int] = None) -> tuple[float, ...]:
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        raise ValidationError("face_descriptor must be an array of numbers")
    descriptor = tuple(_finite(v, "face_descriptor") for v in values)
    if not descriptor:
        raise ValidationError("face_descriptor must not be empty")
    if length is not None and len(descriptor) != length:
        raise ValidationError(f"face_descriptor must be an array of {length} numbers")
    return descriptor


def require_score(value: Any, field_name: str = "face_match_score") -> float:
    score = _finite(value, field_name)
    if not 0.0 <= score <= 100.0:
        raise ValidationError(f"{field_name} must be between 0 and 100")
    return score


def require_int_in_range(value: Any, field_name: str, bounds: tuple[int, int]) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer") from None
    low, high = bounds
    if not low <= number <= high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return number
