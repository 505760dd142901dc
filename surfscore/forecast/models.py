# ABOUTME: Data models for hourly forecast readings before and after scoring
# ABOUTME: Raw readings come from ingestion; scored readings add wave height and quality

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, Optional

SwellKind = Literal["primary", "secondary", "wind", "fallback"]
WindType = Literal["offshore", "cross-shore", "onshore"]


def swell_energy(height_ft: float, period_s: float) -> float:
    """Energy proxy for a swell component: height * period^1.5"""
    return height_ft * period_s ** 1.5


@dataclass(frozen=True)
class SwellComponent:
    """One swell train within an hourly reading"""
    height_ft: float
    period_s: Optional[float]
    direction_deg: Optional[float]
    kind: SwellKind

    @property
    def energy(self) -> float:
        if self.period_s is None:
            return 0.0
        return swell_energy(self.height_ft, self.period_s)

    def __str__(self) -> str:
        period = f"{self.period_s:g}s" if self.period_s is not None else "?s"
        direction = f"{self.direction_deg:g}deg" if self.direction_deg is not None else "?deg"
        return f"{self.kind} {self.height_ft:.1f}ft @ {period} {direction}"


@dataclass(frozen=True)
class RawHourlyReading:
    """One hour, one spot, as produced by external ingestion"""
    spot_id: str
    timestamp: datetime
    primary_height_ft: Optional[float] = None
    primary_period_s: Optional[float] = None
    primary_direction_deg: Optional[float] = None
    secondary_height_ft: Optional[float] = None
    secondary_period_s: Optional[float] = None
    secondary_direction_deg: Optional[float] = None
    wind_wave_height_ft: Optional[float] = None
    wind_wave_period_s: Optional[float] = None
    wind_wave_direction_deg: Optional[float] = None
    wind_speed_kt: Optional[float] = None
    wind_gust_kt: Optional[float] = None
    wind_direction_deg: Optional[float] = None
    tide_height_ft: Optional[float] = None
    tide_phase: Optional[str] = None
    hours_out: Optional[int] = None  # Hours since the model run that produced this point
    source: Optional[str] = None

    def swell_components(self) -> list[SwellComponent]:
        """Components that have both a height and a period."""
        candidates = [
            (self.primary_height_ft, self.primary_period_s, self.primary_direction_deg, "primary"),
            (self.secondary_height_ft, self.secondary_period_s, self.secondary_direction_deg, "secondary"),
            (self.wind_wave_height_ft, self.wind_wave_period_s, self.wind_wave_direction_deg, "wind"),
        ]
        return [
            SwellComponent(height_ft=height, period_s=period, direction_deg=direction, kind=kind)
            for height, period, direction, kind in candidates
            if height is not None and period is not None
        ]


@dataclass
class ScoredHourlyReading:
    """A raw reading with its computed breaking wave height and quality score"""
    reading: RawHourlyReading
    breaking_wave_height_ft: float
    wave_height_label: str
    quality_score: int
    quality_label: str
    dominant_swell: Optional[SwellComponent] = None
    wind_type: Optional[WindType] = None
    breakdown: dict[str, int] = field(default_factory=dict)

    def __post_init__(self):
        if not 0 <= self.quality_score <= 100:
            raise ValueError(f"Quality score must be 0-100, got {self.quality_score}")
        if self.breaking_wave_height_ft < 0:
            raise ValueError(f"Breaking wave height must be >= 0, got {self.breaking_wave_height_ft}")

    @property
    def spot_id(self) -> str:
        return self.reading.spot_id

    @property
    def timestamp(self) -> datetime:
        return self.reading.timestamp

    @property
    def dominant_swell_kind(self) -> Optional[str]:
        return self.dominant_swell.kind if self.dominant_swell else None

    @property
    def has_breaking_height(self) -> bool:
        """False when no swell component had a period to compute breaking height from."""
        return self.dominant_swell is not None and self.dominant_swell.period_s is not None

    @property
    def period_s(self) -> Optional[float]:
        """Dominant swell period, falling back to the primary period."""
        if self.dominant_swell is not None and self.dominant_swell.period_s is not None:
            return self.dominant_swell.period_s
        return self.reading.primary_period_s

    def __str__(self) -> str:
        return (
            f"{self.spot_id} {self.timestamp.isoformat()}: "
            f"{self.wave_height_label} ({self.breaking_wave_height_ft:.1f}ft), "
            f"{self.quality_score} {self.quality_label}"
        )
