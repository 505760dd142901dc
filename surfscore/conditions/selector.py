# ABOUTME: Picks the single "current conditions" point from a noisy scored timeline
# ABOUTME: Resolves display fields through ordered fallback chains to a lower-fidelity snapshot

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Optional, Sequence

from surfscore.config import Config
from surfscore.forecast.models import ScoredHourlyReading


@dataclass
class FallbackSnapshot:
    """Lower-fidelity spot forecast used when the timeline has no current point"""
    quality_score: Optional[int] = None
    probability_score: Optional[int] = None
    wave_height_ft: Optional[float] = None
    swell_period_s: Optional[float] = None
    swell_direction_deg: Optional[float] = None
    wind_speed_kt: Optional[float] = None
    wind_direction_deg: Optional[float] = None
    wind_type: Optional[str] = None
    tide_height_ft: Optional[float] = None
    tide_phase: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class CurrentConditions:
    """Resolved "now" values for display"""
    score: int
    wave_height_ft: Optional[float]
    swell_period_s: Optional[float]
    swell_direction_deg: Optional[float]
    swell_source: str  # primary/secondary/wind/fallback from the timeline, or "forecast"
    wind_speed_kt: Optional[float]
    wind_gust_kt: Optional[float]
    wind_direction_deg: Optional[float]
    wind_type: Optional[str]
    tide_height_ft: Optional[float]
    tide_phase: Optional[str]
    timestamp: Optional[datetime]
    from_timeline: bool


def first_available(sources: Sequence[Callable[[], Any]]) -> Any:
    """Evaluate sources in priority order and return the first non-None value."""
    for source in sources:
        value = source()
        if value is not None:
            return value
    return None


def select_current_point(
    timeline: Optional[Sequence[ScoredHourlyReading]],
    now: datetime,
    max_age: Optional[timedelta] = None,
) -> Optional[ScoredHourlyReading]:
    """
    The most recent point at-or-before now and no older than max_age.

    Future forecast points are never "current", even when closer in absolute
    time than the latest past point.
    """
    if not timeline:
        return None

    if max_age is None:
        max_age = timedelta(minutes=Config.CURRENT_CONDITIONS_MAX_AGE_MINUTES)
    cutoff = now - max_age

    nearest = None
    nearest_age = None
    for point in timeline:
        if not cutoff <= point.timestamp <= now:
            continue
        age = now - point.timestamp
        if nearest_age is None or age < nearest_age:
            nearest = point
            nearest_age = age

    return nearest


def resolve_current_conditions(
    point: Optional[ScoredHourlyReading],
    fallback: Optional[FallbackSnapshot] = None,
    buoy_height_ft: Optional[float] = None,
) -> CurrentConditions:
    """
    Combine the selected timeline point with fallbacks, field by field.

    Each field is a priority list; the first source with a value wins.
    """
    reading = point.reading if point else None
    swell = point.dominant_swell if point else None

    score_chain = [
        lambda: point.quality_score if point else None,
        lambda: fallback.quality_score if fallback else None,
        lambda: fallback.probability_score if fallback else None,
        lambda: 0,
    ]
    wave_height_chain = [
        lambda: point.breaking_wave_height_ft if point and point.has_breaking_height else None,
        lambda: buoy_height_ft,
        lambda: swell.height_ft if swell else None,
        lambda: reading.primary_height_ft if reading else None,
        lambda: fallback.wave_height_ft if fallback else None,
    ]
    swell_period_chain = [
        lambda: point.period_s if point else None,
        lambda: fallback.swell_period_s if fallback else None,
    ]
    swell_direction_chain = [
        lambda: swell.direction_deg if swell else None,
        lambda: reading.primary_direction_deg if reading else None,
        lambda: fallback.swell_direction_deg if fallback else None,
    ]
    wind_speed_chain = [
        lambda: reading.wind_speed_kt if reading else None,
        lambda: fallback.wind_speed_kt if fallback else None,
    ]
    wind_direction_chain = [
        lambda: reading.wind_direction_deg if reading else None,
        lambda: fallback.wind_direction_deg if fallback else None,
    ]
    wind_type_chain = [
        lambda: point.wind_type if point else None,
        lambda: fallback.wind_type if fallback else None,
    ]
    tide_height_chain = [
        lambda: reading.tide_height_ft if reading else None,
        lambda: fallback.tide_height_ft if fallback else None,
    ]
    tide_phase_chain = [
        lambda: reading.tide_phase if reading else None,
        lambda: fallback.tide_phase if fallback else None,
    ]
    timestamp_chain = [
        lambda: point.timestamp if point else None,
        lambda: fallback.created_at if fallback else None,
    ]

    return CurrentConditions(
        score=int(first_available(score_chain)),
        wave_height_ft=first_available(wave_height_chain),
        swell_period_s=first_available(swell_period_chain),
        swell_direction_deg=first_available(swell_direction_chain),
        swell_source=swell.kind if swell else "forecast",
        wind_speed_kt=first_available(wind_speed_chain),
        wind_gust_kt=reading.wind_gust_kt if reading else None,
        wind_direction_deg=first_available(wind_direction_chain),
        wind_type=first_available(wind_type_chain),
        tide_height_ft=first_available(tide_height_chain),
        tide_phase=first_available(tide_phase_chain),
        timestamp=first_available(timestamp_chain),
        from_timeline=point is not None,
    )


def current_conditions(
    timeline: Optional[Sequence[ScoredHourlyReading]],
    now: datetime,
    fallback: Optional[FallbackSnapshot] = None,
    buoy_height_ft: Optional[float] = None,
) -> CurrentConditions:
    """Select the current point and resolve display fields in one call."""
    return resolve_current_conditions(select_current_point(timeline, now), fallback, buoy_height_ft)
