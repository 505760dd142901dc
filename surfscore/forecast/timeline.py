# ABOUTME: Turns a spot's raw hourly readings into an ordered, scored timeline
# ABOUTME: Deduplicates multi-source points per hour, preferring the freshest model run

import logging
from typing import Iterable, Optional

from surfscore.debug import debug_log
from surfscore.forecast.models import RawHourlyReading, ScoredHourlyReading
from surfscore.scoring.calculator import ScoreCalculator
from surfscore.scoring.wave_height import (
    calculate_breaking_wave_height,
    format_wave_height,
    get_dominant_swell,
)
from surfscore.spots.profiles import SpotProfile

log = logging.getLogger(__name__)

_calculator = ScoreCalculator()


def score_reading(
    reading: RawHourlyReading,
    profile: SpotProfile,
    calculator: Optional[ScoreCalculator] = None,
) -> ScoredHourlyReading:
    """Compute breaking height and quality score for one reading."""
    calculator = calculator or _calculator
    swell = get_dominant_swell(reading)

    if swell is not None and swell.period_s is not None:
        breaking = calculate_breaking_wave_height(
            swell.height_ft, swell.period_s, profile, swell.direction_deg
        )
    else:
        breaking = 0.0

    quality = calculator.calculate(reading, profile)

    return ScoredHourlyReading(
        reading=reading,
        breaking_wave_height_ft=breaking,
        wave_height_label=format_wave_height(breaking),
        quality_score=quality.score,
        quality_label=quality.label,
        dominant_swell=swell,
        wind_type=calculator.classify_wind(reading.wind_direction_deg, profile),
        breakdown=quality.breakdown.as_dict(),
    )


def _freshness(reading: RawHourlyReading) -> float:
    return reading.hours_out if reading.hours_out is not None else float("inf")


def dedupe_readings(readings: Iterable[RawHourlyReading]) -> list[RawHourlyReading]:
    """
    One reading per timestamp, ordered by time.

    When several sources cover the same hour, the one with the smallest
    hours_out wins; ties keep the first seen.
    """
    by_time: dict = {}
    for reading in readings:
        current = by_time.get(reading.timestamp)
        if current is None or _freshness(reading) < _freshness(current):
            by_time[reading.timestamp] = reading
    return [by_time[ts] for ts in sorted(by_time)]


def score_timeline(
    readings: Iterable[RawHourlyReading],
    profile: SpotProfile,
    calculator: Optional[ScoreCalculator] = None,
) -> list[ScoredHourlyReading]:
    """Score a spot's readings into a timestamp-ordered, non-overlapping timeline."""
    readings = list(readings)
    ordered = dedupe_readings(readings)

    if len(ordered) != len(readings):
        debug_log(f"{profile.key}: collapsed {len(readings)} readings to {len(ordered)} hours", "TIMELINE")

    return [score_reading(reading, profile, calculator) for reading in ordered]
