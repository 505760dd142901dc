# ABOUTME: Sunrise, sunset, and civil twilight times from the day-number/hour-angle method
# ABOUTME: Provides daylight checks and time-of-day labels for alert windows

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional

from surfscore.cache.manager import CacheManager
from surfscore.config import Config

log = logging.getLogger(__name__)

ZENITH_SUNRISE_SUNSET = 90.833  # Includes atmospheric refraction
ZENITH_CIVIL = 96.0             # Sun 6 degrees below the horizon


@dataclass(frozen=True)
class LightTimes:
    """All light events for one local day, as UTC datetimes"""
    first_light: datetime
    sunrise: datetime
    sunset: datetime
    last_light: datetime


_light_times_cache = CacheManager(max_entries=Config.EPHEMERIS_CACHE_SIZE)


def _normalize(value: float, period: float) -> float:
    return ((value % period) + period) % period


def _hour_angle_cos(lat: float, zenith: float, true_longitude: float) -> float:
    sin_dec = 0.39782 * math.sin(math.radians(true_longitude))
    cos_dec = math.cos(math.asin(sin_dec))
    return (
        (math.cos(math.radians(zenith)) - sin_dec * math.sin(math.radians(lat)))
        / (cos_dec * math.cos(math.radians(lat)))
    )


def sun_event(
    lat: float,
    lng: float,
    day: date,
    morning: bool,
    zenith: float = ZENITH_SUNRISE_SUNSET,
    tz: Optional[tzinfo] = None,
) -> datetime:
    """
    Compute a rising (morning=True) or setting solar event for a local day.

    When the sun never crosses the requested zenith (polar day or night) a
    sentinel is returned instead: 00:00 of `day` for morning events and 23:59
    for evening events, in `tz` (UTC when not given).

    Returns:
        Timezone-aware UTC datetime (or the sentinel in `tz`)
    """
    day_of_year = day.timetuple().tm_yday
    lng_hour = lng / 15

    t = day_of_year + ((6 - lng_hour) / 24 if morning else (18 - lng_hour) / 24)

    # Sun's mean anomaly and true longitude
    mean_anomaly = (0.9856 * t) - 3.289
    true_longitude = _normalize(
        mean_anomaly
        + 1.916 * math.sin(math.radians(mean_anomaly))
        + 0.020 * math.sin(math.radians(2 * mean_anomaly))
        + 282.634,
        360,
    )

    # Right ascension, moved into the same quadrant as the true longitude
    right_ascension = _normalize(
        math.degrees(math.atan(0.91764 * math.tan(math.radians(true_longitude)))), 360
    )
    right_ascension += (math.floor(true_longitude / 90) * 90) - (math.floor(right_ascension / 90) * 90)
    right_ascension /= 15

    cos_h = _hour_angle_cos(lat, zenith, true_longitude)
    if cos_h > 1 or cos_h < -1:
        log.debug(f"Sun never crosses zenith {zenith} at lat={lat} on {day} (cosH={cos_h:.3f})")
        sentinel_tz = tz or timezone.utc
        return datetime.combine(day, time(0, 0) if morning else time(23, 59), tzinfo=sentinel_tz)

    hour_angle = math.degrees(math.acos(cos_h))
    if morning:
        hour_angle = 360 - hour_angle
    hour_angle /= 15

    local_mean_time = hour_angle + right_ascension - (0.06571 * t) - 6.622
    ut = _normalize(local_mean_time - lng_hour, 24)

    hours = int(ut)
    minutes = round((ut - hours) * 60)
    result = datetime.combine(day, time(0, 0), tzinfo=timezone.utc) + timedelta(hours=hours, minutes=minutes)

    # UT wraps at midnight; keep the event within 12h of the spot's solar noon
    solar_noon = datetime.combine(day, time(0, 0), tzinfo=timezone.utc) + timedelta(hours=12 - lng_hour)
    if result - solar_noon > timedelta(hours=12):
        result -= timedelta(days=1)
    elif solar_noon - result > timedelta(hours=12):
        result += timedelta(days=1)

    return result


def sunrise(lat: float, lng: float, day: date, tz: Optional[tzinfo] = None) -> datetime:
    return sun_event(lat, lng, day, morning=True, zenith=ZENITH_SUNRISE_SUNSET, tz=tz)


def sunset(lat: float, lng: float, day: date, tz: Optional[tzinfo] = None) -> datetime:
    return sun_event(lat, lng, day, morning=False, zenith=ZENITH_SUNRISE_SUNSET, tz=tz)


def first_light(lat: float, lng: float, day: date, tz: Optional[tzinfo] = None) -> datetime:
    """Civil dawn - enough light to surf."""
    return sun_event(lat, lng, day, morning=True, zenith=ZENITH_CIVIL, tz=tz)


def last_light(lat: float, lng: float, day: date, tz: Optional[tzinfo] = None) -> datetime:
    """Civil dusk - too dark to surf after this."""
    return sun_event(lat, lng, day, morning=False, zenith=ZENITH_CIVIL, tz=tz)


def light_times(lat: float, lng: float, day: date, tz: Optional[tzinfo] = None) -> LightTimes:
    """
    All four light events for a day, cached per (date, lat, lng) to 2dp.

    `tz` only affects the polar sentinels, which fall on local midnight.
    """
    key = (day.isoformat(), round(lat, 2), round(lng, 2), str(tz) if tz else None)
    return _light_times_cache.get_or_compute(
        key,
        lambda: LightTimes(
            first_light=first_light(lat, lng, day, tz),
            sunrise=sunrise(lat, lng, day, tz),
            sunset=sunset(lat, lng, day, tz),
            last_light=last_light(lat, lng, day, tz),
        ),
    )


def local_solar_date(ts: datetime, lng: float) -> date:
    """Calendar date at the given longitude, ignoring political timezones."""
    return (ts.astimezone(timezone.utc) + timedelta(hours=lng / 15)).date()


def is_daylight(ts: datetime, lat: float, lng: float, tz: Optional[tzinfo] = None) -> bool:
    """True if ts falls between first light and last light."""
    times = light_times(lat, lng, local_solar_date(ts, lng), tz)
    return times.first_light <= ts <= times.last_light


def time_of_day_label(ts: datetime, lat: float, lng: float, tz: tzinfo) -> str:
    """
    Friendly label for when in the day ts falls, in the spot's local time.

    Within an hour of last light (or later) is "Evening"; otherwise
    Early Morning (<9), Morning (<12), Midday (<15), Afternoon.
    """
    local = ts.astimezone(tz)
    hour = local.hour
    dusk = light_times(lat, lng, local_solar_date(ts, lng), tz).last_light.astimezone(tz)

    if hour >= dusk.hour - 1:
        return "Evening"
    if hour < 9:
        return "Early Morning"
    if hour < 12:
        return "Morning"
    if hour < 15:
        return "Midday"
    return "Afternoon"


def format_daylight_window(start: datetime, end: datetime, lat: float, lng: float, tz: tzinfo) -> str:
    """
    Format a window like "Sat Morning-Afternoon", capping the end at last light.
    """
    start_day = start.astimezone(tz).strftime("%a")
    dusk = light_times(lat, lng, local_solar_date(start, lng), tz).last_light
    effective_end = min(end, dusk)

    start_label = time_of_day_label(start, lat, lng, tz)
    end_label = time_of_day_label(effective_end, lat, lng, tz)

    if start_label == end_label:
        return f"{start_day} {start_label}"
    return f"{start_day} {start_label}-{end_label}"
