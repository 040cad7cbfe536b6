"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "Asia/Jakarta"

DEFAULT_FACE_THRESHOLD = 80
FACE_THRESHOLD_RANGE = (50, 100)

DEFAULT_GPS_RADIUS = 100
GPS_RADIUS_RANGE = (10, 10000)

FACE_DESCRIPTOR_LENGTH = 128
FACE_MAX_DISTANCE = 1.0

EARTH_RADIUS_METERS = 6_371_000.0

DEFAULT_EARLY_CHECKIN_MINUTES = 60
DEFAULT_STORE_TIMEOUT_SECONDS = 5.0

SETTING_FACE_THRESHOLD = "face_recognition_threshold"
SETTING_GPS_RADIUS = "gps_accuracy_radius"
