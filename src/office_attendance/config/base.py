"""Attendance knobs shared by every environment.

Each value can be overridden through the environment (or a .env file).
"""

import os

from ..core.constants import (
    DEFAULT_EARLY_CHECKIN_MINUTES,
    DEFAULT_STORE_TIMEOUT_SECONDS,
    DEFAULT_TIMEZONE,
)

# One civil timezone per deployment; every day boundary is computed in it.
ATTENDANCE_TIMEZONE = os.getenv("ATTENDANCE_TIMEZONE", DEFAULT_TIMEZONE)

# Strict: a failed face/location check blocks the transition.
# Advisory (0): the scores are stored and the session is flagged for review.
STRICT_VERIFICATION = bool(int(os.getenv("STRICT_VERIFICATION", "0")))
REQUIRE_FACE = bool(int(os.getenv("REQUIRE_FACE", "1")))
VERIFY_CHECKOUT_LOCATION = bool(int(os.getenv("VERIFY_CHECKOUT_LOCATION", "0")))

# "present" (flag for review) or "reject" when no active work schedule exists for the day.
UNSCHEDULED_POLICY = os.getenv("UNSCHEDULED_POLICY", "present")
EARLY_CHECKIN_MINUTES = int(os.getenv("EARLY_CHECKIN_MINUTES", str(DEFAULT_EARLY_CHECKIN_MINUTES)))

STORE_TIMEOUT_SECONDS = float(os.getenv("STORE_TIMEOUT_SECONDS", str(DEFAULT_STORE_TIMEOUT_SECONDS)))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
