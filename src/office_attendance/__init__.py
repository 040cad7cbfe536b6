"""Attendance session core: check-in/check-out gated by face and geofence verification."""

__version__ = "0.1.0"
