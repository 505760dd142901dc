# ABOUTME: Core quality score calculation for an hourly surf reading
# ABOUTME: Sums swell energy, direction fit, tide fit, and wind into a clamped 0-100 score

import logging
from typing import Optional

from surfscore.forecast.models import RawHourlyReading, SwellComponent, WindType, swell_energy
from surfscore.scoring.models import QualityBreakdown, QualityResult
from surfscore.scoring.wave_height import get_dominant_swell
from surfscore.spots.profiles import SpotProfile

log = logging.getLogger(__name__)

# Energy buckets: (upper bound exclusive, points)
SWELL_ENERGY_BUCKETS = [(10, 5), (20, 15), (35, 25), (60, 32)]
SWELL_ENERGY_MAX_POINTS = 40

# Direction fit: (multiple of tolerance, points)
DIRECTION_TOLERANCE_STEPS = [(1.0, 20), (1.5, 14), (2.0, 8), (2.5, 4)]
DIRECTION_BEYOND_POINTS = 2
DIRECTION_NEUTRAL_POINTS = 10
EAST_BAND_MIN_DEG = 90
EAST_BAND_MAX_DEG = 110  # exclusive
EAST_BAND_PENALTY = 4

TIDE_OPTIMAL_POINTS = 20
TIDE_NEAR_POINTS = 12
TIDE_NEAR_MARGIN_FT = 0.5
TIDE_POOR_POINTS = 4
TIDE_NEUTRAL_POINTS = 10

# Wind speed bands per wind type: (upper bound inclusive, points); last entry catches the rest
WIND_BANDS: dict[str, list[tuple[float, int]]] = {
    "offshore": [(12, 20), (18, 15), (float("inf"), 10)],
    "cross-shore": [(10, -5), (18, -12), (float("inf"), -20)],
    "onshore": [(8, -10), (15, -25), (float("inf"), -40)],
}

CHOP_PERIOD_S = 5        # Below this the whole score is capped
CHOP_SCORE_CAP = 20
SMALL_HEIGHT_FT = 2
SMALL_PERIOD_S = 6
SMALL_SCORE_CAP = 15

# Canonical 6-bin label scale: (upper bound inclusive, label)
QUALITY_LABELS = [
    (20, "Flat"),
    (40, "Don't Bother"),
    (60, "Worth a Look"),
    (75, "Actually Fun"),
    (90, "Clear the Calendar"),
    (100, "All-Time"),
]


def angular_distance(deg1: float, deg2: float) -> float:
    """Shortest distance between two compass directions (0-180)."""
    diff = abs(deg1 - deg2) % 360
    return 360 - diff if diff > 180 else diff


def score_to_label(score: int) -> str:
    """Map a 0-100 score to its label."""
    for upper, label in QUALITY_LABELS:
        if score <= upper:
            return label
    return QUALITY_LABELS[-1][1]


class ScoreCalculator:
    """Calculates 0-100 quality scores for hourly surf readings"""

    def score_swell_energy(self, height_ft: float, period_s: float) -> int:
        """Swell energy points (0-40) from height * period^1.5."""
        energy = swell_energy(height_ft, period_s)
        for upper, points in SWELL_ENERGY_BUCKETS:
            if energy < upper:
                return points
        return SWELL_ENERGY_MAX_POINTS

    def score_direction(self, direction_deg: Optional[float], profile: SpotProfile) -> int:
        """
        Direction fit points against the spot's ideal swell direction.

        No direction is neutral. East swells (90-110) lose a flat 4 points on
        top of the tolerance lookup; they have historically underperformed.
        """
        if direction_deg is None:
            return DIRECTION_NEUTRAL_POINTS

        deviation = angular_distance(direction_deg, profile.swell_target_deg)

        points = DIRECTION_BEYOND_POINTS
        for multiple, step_points in DIRECTION_TOLERANCE_STEPS:
            if deviation <= profile.swell_tolerance_deg * multiple:
                points = step_points
                break

        if EAST_BAND_MIN_DEG <= direction_deg < EAST_BAND_MAX_DEG:
            points -= EAST_BAND_PENALTY

        return points

    def score_tide(self, tide_ft: Optional[float], profile: SpotProfile) -> int:
        """Tide fit points against the spot's optimal range."""
        if tide_ft is None:
            return TIDE_NEUTRAL_POINTS

        low = profile.tide_optimal_min_ft
        high = profile.tide_optimal_max_ft

        if low <= tide_ft <= high:
            return TIDE_OPTIMAL_POINTS
        if low - TIDE_NEAR_MARGIN_FT <= tide_ft <= high + TIDE_NEAR_MARGIN_FT:
            return TIDE_NEAR_POINTS
        return TIDE_POOR_POINTS

    def classify_wind(self, direction_deg: Optional[float], profile: SpotProfile) -> Optional[WindType]:
        """
        Classify a wind-from direction relative to the beach.

        Directions are rotated so the shore-facing normal sits at 180, then:
        offshore 315-45, onshore 120-240 (exclusive), cross-shore otherwise.
        """
        if direction_deg is None:
            return None

        relative = (direction_deg - (profile.shore_facing_deg - 180)) % 360

        if relative >= 315 or relative <= 45:
            return "offshore"
        if 120 < relative < 240:
            return "onshore"
        return "cross-shore"

    def score_wind(
        self,
        speed_kt: Optional[float],
        direction_deg: Optional[float],
        profile: SpotProfile,
    ) -> int:
        """Wind points (-40 to +20). Missing speed or direction is neutral."""
        if speed_kt is None or direction_deg is None:
            return 0

        wind_type = self.classify_wind(direction_deg, profile)
        for upper, points in WIND_BANDS[wind_type]:
            if speed_kt <= upper:
                return points
        return WIND_BANDS[wind_type][-1][1]

    def calculate(self, reading: RawHourlyReading, profile: SpotProfile) -> QualityResult:
        """
        Calculate the quality score for one reading.

        Components are computed on the dominant swell. After summing, short
        period chop caps the total at 20; small short-period swell caps it at
        15. The result is always clamped to 0-100.
        """
        swell = get_dominant_swell(reading)
        height = swell.height_ft if swell else 0.0
        period = swell.period_s if swell and swell.period_s is not None else 0.0
        direction = swell.direction_deg if swell else None

        breakdown = QualityBreakdown(
            swell=self.score_swell_energy(height, period),
            direction=self.score_direction(direction, profile),
            tide=self.score_tide(reading.tide_height_ft, profile),
            wind=self.score_wind(reading.wind_speed_kt, reading.wind_direction_deg, profile),
        )

        total = breakdown.total
        if period < CHOP_PERIOD_S:
            total = min(total, CHOP_SCORE_CAP)
        elif height < SMALL_HEIGHT_FT and period < SMALL_PERIOD_S:
            total = min(total, SMALL_SCORE_CAP)

        score = max(0, min(100, int(round(total))))

        log.debug(f"{profile.key} {reading.timestamp}: {breakdown.as_dict()} -> {score}")

        return QualityResult(
            score=score,
            label=score_to_label(score),
            breakdown=breakdown,
            reason=self._build_reason(swell, period, height, breakdown, profile),
        )

    def _build_reason(
        self,
        swell: Optional[SwellComponent],
        period: float,
        height: float,
        breakdown: QualityBreakdown,
        profile: SpotProfile,
    ) -> str:
        """Short explanation of what drove the score."""
        if swell is None:
            return "No swell data."
        if period < CHOP_PERIOD_S:
            return "Short-period wind chop only."
        if height < SMALL_HEIGHT_FT and period < SMALL_PERIOD_S:
            return "Small, weak swell."

        parts = []
        if breakdown.swell >= 32:
            parts.append("Strong swell energy")
        elif breakdown.swell <= 15:
            parts.append("Weak swell energy")

        if breakdown.direction >= 20:
            parts.append("ideal direction")
        elif breakdown.direction <= 4:
            parts.append(f"swell direction well off {profile.name}'s window")

        if breakdown.tide == TIDE_POOR_POINTS:
            parts.append("tide outside the sweet spot")

        if breakdown.wind >= 15:
            parts.append("clean offshore wind")
        elif breakdown.wind <= -25:
            parts.append("blown out by onshore wind")
        elif breakdown.wind < 0:
            parts.append("wind adding texture")

        if not parts:
            return "Average conditions."
        sentence = ", ".join(parts)
        return sentence[0].upper() + sentence[1:] + "."
