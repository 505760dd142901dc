# ABOUTME: Finds contiguous forecast windows that satisfy an alert's thresholds
# ABOUTME: Supports single-spot alerts and "best spot" alerts across all active spots

import logging
from datetime import datetime, timedelta, tzinfo
from typing import Mapping, Optional, Sequence
from zoneinfo import ZoneInfo

from surfscore.alerts.models import AlertSubscription, DetectedSwellWindow
from surfscore.config import Config
from surfscore.debug import debug_log
from surfscore.ephemeris.sun import is_daylight, light_times, local_solar_date
from surfscore.forecast.models import ScoredHourlyReading
from surfscore.spots.profiles import SpotProfile

log = logging.getLogger(__name__)


def _location(profile: Optional[SpotProfile]) -> tuple[float, float, tzinfo]:
    """Coordinates and timezone for light calculations, defaulting to Long Beach."""
    if profile is None:
        return Config.DEFAULT_LATITUDE, Config.DEFAULT_LONGITUDE, ZoneInfo(Config.DEFAULT_TIMEZONE)
    return profile.latitude, profile.longitude, ZoneInfo(profile.timezone)


class SwellWindowDetector:
    """Scans scored timelines for runs of hours matching an alert"""

    def __init__(
        self,
        max_gap_hours: Optional[float] = None,
        min_window_hours: Optional[int] = None,
        daylight_only: Optional[bool] = None,
        default_lookahead_hours: Optional[int] = None,
    ):
        self.max_gap = timedelta(hours=max_gap_hours if max_gap_hours is not None else Config.ALERT_MAX_GAP_HOURS)
        self.min_window_hours = min_window_hours if min_window_hours is not None else Config.ALERT_MIN_WINDOW_HOURS
        self.daylight_only = daylight_only if daylight_only is not None else Config.ALERT_DAYLIGHT_ONLY
        self.default_lookahead_hours = (
            default_lookahead_hours if default_lookahead_hours is not None
            else Config.ALERT_DEFAULT_LOOKAHEAD_HOURS
        )

    def point_matches(
        self,
        point: ScoredHourlyReading,
        subscription: AlertSubscription,
        profile: Optional[SpotProfile] = None,
    ) -> bool:
        """True if every configured threshold holds for this hour."""
        if self.daylight_only:
            lat, lng, tz = _location(profile)
            if not is_daylight(point.timestamp, lat, lng, tz):
                return False

        if subscription.min_wave_height_ft is not None:
            if point.breaking_wave_height_ft < subscription.min_wave_height_ft:
                return False

        if subscription.min_quality_score is not None:
            if point.quality_score < subscription.min_quality_score:
                return False

        if subscription.min_period_s is not None:
            if (point.period_s or 0) < subscription.min_period_s:
                return False

        if subscription.ideal_wind_only and point.wind_type != "offshore":
            return False

        return True

    def find_windows(
        self,
        timeline: Sequence[ScoredHourlyReading],
        subscription: AlertSubscription,
        profile: Optional[SpotProfile] = None,
        now: Optional[datetime] = None,
    ) -> list[DetectedSwellWindow]:
        """
        Group one spot's timeline into maximal runs of matching hours.

        A gap longer than max_gap between consecutive matching hours ends
        the run. Runs shorter than min_window_hours are dropped, and with
        `now` given only windows overlapping the lookahead horizon are kept.
        """
        points = sorted(timeline, key=lambda p: p.timestamp)

        windows = []
        run: list[ScoredHourlyReading] = []

        for point in points:
            if not self.point_matches(point, subscription, profile):
                self._close_run(run, subscription, profile, windows)
                run = []
                continue

            if run and point.timestamp - run[-1].timestamp > self.max_gap:
                self._close_run(run, subscription, profile, windows)
                run = []

            run.append(point)

        self._close_run(run, subscription, profile, windows)
        return [window for window in windows if self._overlaps_lookahead(window, subscription, now)]

    def detect(
        self,
        subscription: AlertSubscription,
        timelines: Mapping[str, Sequence[ScoredHourlyReading]],
        profiles: Mapping[str, SpotProfile],
        now: Optional[datetime] = None,
    ) -> list[DetectedSwellWindow]:
        """
        Detect windows for a subscription.

        With an explicit spot only that spot is scanned. In best-spot mode
        every active spot is scanned, and if more than one spot produced
        windows only the single highest-peak window is kept.
        """
        if subscription.spot_id is not None:
            timeline = timelines.get(subscription.spot_id, [])
            profile = profiles.get(subscription.spot_id)
            return self.find_windows(timeline, subscription, profile, now)

        by_spot: dict[str, list[DetectedSwellWindow]] = {}
        for spot_id, timeline in timelines.items():
            profile = profiles.get(spot_id)
            if profile is not None and not profile.active:
                continue
            windows = self.find_windows(timeline, subscription, profile, now)
            if windows:
                by_spot[spot_id] = windows

        all_windows = [window for windows in by_spot.values() for window in windows]
        if len(by_spot) <= 1:
            return all_windows

        best = all_windows[0]
        for window in all_windows[1:]:
            if window.peak_quality_score > best.peak_quality_score:
                best = window

        debug_log(
            f"Alert {subscription.id}: best spot {best.spot_id} (peak {best.peak_quality_score}) "
            f"of {len(by_spot)} spots",
            "DETECTOR",
        )
        return [best]

    def _overlaps_lookahead(
        self,
        window: DetectedSwellWindow,
        subscription: AlertSubscription,
        now: Optional[datetime],
    ) -> bool:
        """
        True if the window touches [now, now + lookahead].

        Windows are built from the full timeline first, so a swell already
        under way keeps its original start from one cycle to the next.
        """
        if now is None:
            return True

        hours = subscription.hours_advance_notice or self.default_lookahead_hours
        latest = now + timedelta(hours=hours)
        return window.end >= now and window.start <= latest

    def _close_run(
        self,
        run: list[ScoredHourlyReading],
        subscription: AlertSubscription,
        profile: Optional[SpotProfile],
        windows: list[DetectedSwellWindow],
    ) -> None:
        if run and len(run) >= self.min_window_hours:
            windows.append(self._build_window(run, subscription, profile))

    def _build_window(
        self,
        run: list[ScoredHourlyReading],
        subscription: AlertSubscription,
        profile: Optional[SpotProfile],
    ) -> DetectedSwellWindow:
        start = run[0].timestamp
        end = run[-1].timestamp

        if self.daylight_only:
            lat, lng, tz = _location(profile)
            dusk = light_times(lat, lng, local_solar_date(end, lng), tz).last_light
            end = min(end, dusk)

        periods = [p.period_s for p in run if p.period_s]
        avg_period = round(sum(periods) / len(periods), 1) if periods else 0.0

        return DetectedSwellWindow(
            subscription_id=subscription.id,
            spot_id=run[0].spot_id,
            start=start,
            end=end,
            peak_wave_height_ft=max(p.breaking_wave_height_ft for p in run),
            peak_quality_score=max(p.quality_score for p in run),
            avg_quality_score=round(sum(p.quality_score for p in run) / len(run)),
            avg_period_s=avg_period,
            hours=list(run),
        )
