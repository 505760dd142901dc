# ABOUTME: Data models for quality score results
# ABOUTME: Provides the score, its label, and the per-component breakdown

from dataclasses import dataclass


@dataclass
class QualityBreakdown:
    """Points contributed by each scoring component before caps and clamping"""
    swell: int      # 0 to 40
    direction: int  # -2 to 20
    tide: int       # 4 to 20
    wind: int       # -40 to 20

    @property
    def total(self) -> int:
        return self.swell + self.direction + self.tide + self.wind

    def as_dict(self) -> dict[str, int]:
        return {
            "swell": self.swell,
            "direction": self.direction,
            "tide": self.tide,
            "wind": self.wind,
        }


@dataclass
class QualityResult:
    """Quality score for one hourly reading"""
    score: int  # 0-100
    label: str
    breakdown: QualityBreakdown
    reason: str

    def __post_init__(self):
        if not 0 <= self.score <= 100:
            raise ValueError(f"Score must be 0-100, got {self.score}")
