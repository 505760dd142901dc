# ABOUTME: Engine configuration for scoring, current-conditions selection, and alerting
# ABOUTME: Values come from the environment (optionally a .env file) with sensible defaults

import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Engine configuration"""

    # Default location: Long Beach, NY (light times for spots without a profile)
    DEFAULT_LATITUDE = float(os.getenv("DEFAULT_LATITUDE", "40.588"))
    DEFAULT_LONGITUDE = float(os.getenv("DEFAULT_LONGITUDE", "-73.658"))
    DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "America/New_York")

    # Current conditions: timeline points older than this are not "now"
    CURRENT_CONDITIONS_MAX_AGE_MINUTES = int(os.getenv("CURRENT_CONDITIONS_MAX_AGE_MINUTES", "60"))

    # Ephemeris caches (entries, oldest evicted first)
    EPHEMERIS_CACHE_SIZE = int(os.getenv("EPHEMERIS_CACHE_SIZE", "100"))
    TIDE_CACHE_SIZE = int(os.getenv("TIDE_CACHE_SIZE", "500"))

    # Swell window detection
    ALERT_MAX_GAP_HOURS = float(os.getenv("ALERT_MAX_GAP_HOURS", "1"))
    ALERT_MIN_WINDOW_HOURS = int(os.getenv("ALERT_MIN_WINDOW_HOURS", "1"))
    ALERT_DEFAULT_LOOKAHEAD_HOURS = int(os.getenv("ALERT_DEFAULT_LOOKAHEAD_HOURS", "168"))  # 7 days
    ALERT_DAYLIGHT_ONLY = os.getenv("ALERT_DAYLIGHT_ONLY", "false").lower() == "true"

    # Debug mode
    DEBUG = os.getenv("DEBUG", "false").lower() == "true"
