# ABOUTME: Tests for sunrise/sunset/twilight calculations
# ABOUTME: Validates known times for Long Beach NY, polar sentinels, and daylight labels

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from surfscore.ephemeris import sun

LAT = 40.588
LNG = -73.658
NY = ZoneInfo("America/New_York")
SOLSTICE = date(2025, 6, 21)


def _utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


class TestSunEvents:
    """Tests for the hour-angle solar event calculation"""

    def test_summer_solstice_sunrise(self):
        """Long Beach NY sunrise on the solstice is ~5:25 EDT (09:25 UTC)"""
        result = sun.sunrise(LAT, LNG, SOLSTICE)

        assert _utc(2025, 6, 21, 9, 15) <= result <= _utc(2025, 6, 21, 9, 35)

    def test_summer_solstice_sunset_lands_on_next_utc_day(self):
        """Sunset ~8:31 PM EDT is 00:31 UTC the following day"""
        result = sun.sunset(LAT, LNG, SOLSTICE)

        assert _utc(2025, 6, 22, 0, 20) <= result <= _utc(2025, 6, 22, 0, 45)

    def test_twilight_brackets_sunrise_and_sunset(self):
        """First light precedes sunrise and last light follows sunset"""
        first = sun.first_light(LAT, LNG, SOLSTICE)
        rise = sun.sunrise(LAT, LNG, SOLSTICE)
        setting = sun.sunset(LAT, LNG, SOLSTICE)
        last = sun.last_light(LAT, LNG, SOLSTICE)

        assert first < rise < setting < last
        assert timedelta(minutes=20) <= rise - first <= timedelta(minutes=45)
        assert timedelta(minutes=20) <= last - setting <= timedelta(minutes=45)

    def test_results_are_utc_aware(self):
        """Event times carry UTC tzinfo"""
        assert sun.sunrise(LAT, LNG, SOLSTICE).tzinfo == timezone.utc


class TestPolarSentinel:
    """Tests for days when the sun never crosses the zenith"""

    def test_midnight_sun_returns_sentinels(self):
        """Polar day returns local midnight for morning and 23:59 for evening"""
        rise = sun.sunrise(80.0, 15.0, SOLSTICE)
        setting = sun.sunset(80.0, 15.0, SOLSTICE)

        assert rise == _utc(2025, 6, 21, 0, 0)
        assert setting == _utc(2025, 6, 21, 23, 59)

    def test_polar_night_returns_sentinels(self):
        """Polar night also returns sentinels instead of failing"""
        winter = date(2025, 12, 21)

        assert sun.first_light(85.0, 15.0, winter) == _utc(2025, 12, 21, 0, 0)
        assert sun.last_light(85.0, 15.0, winter) == _utc(2025, 12, 21, 23, 59)

    def test_sentinel_uses_given_timezone(self):
        """Sentinel is expressed in the caller's timezone"""
        oslo = ZoneInfo("Europe/Oslo")
        result = sun.sun_event(80.0, 15.0, SOLSTICE, morning=True, tz=oslo)

        assert result == datetime(2025, 6, 21, 0, 0, tzinfo=oslo)

    def test_light_times_sentinels_use_local_midnight(self):
        """Light times passed a timezone put polar sentinels on local midnight"""
        oslo = ZoneInfo("Europe/Oslo")
        times = sun.light_times(80.0, 15.0, SOLSTICE, oslo)

        assert times.first_light == datetime(2025, 6, 21, 0, 0, tzinfo=oslo)
        assert times.last_light == datetime(2025, 6, 21, 23, 59, tzinfo=oslo)
        assert sun.sunrise(80.0, 15.0, SOLSTICE, oslo) == datetime(2025, 6, 21, 0, 0, tzinfo=oslo)

    def test_midnight_sun_is_daylight_all_local_day(self):
        """Under the midnight sun every hour of the local day is daylight"""
        oslo = ZoneInfo("Europe/Oslo")

        assert sun.is_daylight(_utc(2025, 6, 21, 12, 0), 80.0, 15.0, oslo) is True
        assert sun.is_daylight(_utc(2025, 6, 21, 21, 30), 80.0, 15.0, oslo) is True


class TestLightTimesCache:
    """Tests for cached light times"""

    def test_light_times_cached_per_rounded_coordinates(self):
        """Nearby coordinates on the same day share a cache entry"""
        first = sun.light_times(LAT, LNG, SOLSTICE)
        second = sun.light_times(LAT + 0.001, LNG - 0.001, SOLSTICE)

        assert first is second

    def test_cache_stays_bounded(self):
        """The light-time cache never grows past its capacity"""
        for offset in range(sun._light_times_cache.max_entries + 20):
            sun.light_times(LAT, LNG, SOLSTICE + timedelta(days=offset))

        assert len(sun._light_times_cache) == sun._light_times_cache.max_entries


class TestDaylight:
    """Tests for daylight checks and labels"""

    def test_noon_is_daylight(self):
        assert sun.is_daylight(_utc(2025, 6, 21, 16, 0), LAT, LNG) is True

    def test_two_am_is_night(self):
        assert sun.is_daylight(_utc(2025, 6, 21, 6, 0), LAT, LNG) is False

    def test_civil_twilight_after_sunset_still_counts(self):
        """8:45 PM EDT is after sunset but before last light"""
        assert sun.is_daylight(_utc(2025, 6, 22, 0, 45), LAT, LNG) is True

    def test_time_of_day_labels(self):
        """Labels follow the local clock and last light"""
        assert sun.time_of_day_label(_utc(2025, 6, 21, 11, 0), LAT, LNG, NY) == "Early Morning"
        assert sun.time_of_day_label(_utc(2025, 6, 21, 14, 0), LAT, LNG, NY) == "Morning"
        assert sun.time_of_day_label(_utc(2025, 6, 21, 17, 0), LAT, LNG, NY) == "Midday"
        assert sun.time_of_day_label(_utc(2025, 6, 21, 20, 0), LAT, LNG, NY) == "Afternoon"
        assert sun.time_of_day_label(_utc(2025, 6, 22, 0, 0), LAT, LNG, NY) == "Evening"

    def test_format_daylight_window(self):
        """Window label uses the start weekday and both time-of-day labels"""
        label = sun.format_daylight_window(_utc(2025, 6, 21, 13, 0), _utc(2025, 6, 21, 20, 0), LAT, LNG, NY)

        assert label == "Sat Morning-Afternoon"

    def test_format_daylight_window_single_label(self):
        """A window inside one part of the day shows a single label"""
        label = sun.format_daylight_window(_utc(2025, 6, 21, 14, 0), _utc(2025, 6, 21, 15, 0), LAT, LNG, NY)

        assert label == "Sat Morning"
