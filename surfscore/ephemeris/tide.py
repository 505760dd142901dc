# ABOUTME: Tide height interpolation between known tide points
# ABOUTME: Linear interpolation by elapsed time, with phase (rising/falling) detection

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from surfscore.cache.manager import CacheManager
from surfscore.config import Config


@dataclass(frozen=True)
class TidePoint:
    """A known tide height at an instant (prediction or observation)"""
    time: datetime
    height_ft: float


def _bracket(points: Sequence[TidePoint], at: datetime) -> tuple[Optional[TidePoint], Optional[TidePoint]]:
    """Latest point at-or-before `at` and earliest point after it."""
    previous = None
    following = None
    for point in sorted(points, key=lambda p: p.time):
        if point.time <= at:
            previous = point
        elif following is None:
            following = point
            break
    return previous, following


def interpolate_tide(points: Sequence[TidePoint], at: datetime) -> Optional[float]:
    """
    Tide height at an arbitrary instant.

    Linear interpolation between the two bracketing points by elapsed-time
    fraction. If only one side exists, that point's height is returned
    unmodified. No points at all returns None.
    """
    previous, following = _bracket(points, at)

    if previous is not None and following is not None:
        total = (following.time - previous.time).total_seconds()
        elapsed = (at - previous.time).total_seconds()
        progress = elapsed / total
        return previous.height_ft + (following.height_ft - previous.height_ft) * progress

    if previous is not None:
        return previous.height_ft
    if following is not None:
        return following.height_ft
    return None


def tide_phase(points: Sequence[TidePoint], at: datetime) -> Optional[str]:
    """
    "rising" or "falling" depending on whether the next known point is higher.

    Returns None when `at` is not bracketed or the tide is slack between points.
    """
    previous, following = _bracket(points, at)
    if previous is None or following is None:
        return None
    if following.height_ft > previous.height_ft:
        return "rising"
    if following.height_ft < previous.height_ft:
        return "falling"
    return None


class TideSeries:
    """Known tide points for one station, with memoised height lookups."""

    def __init__(self, points: Sequence[TidePoint], cache_size: Optional[int] = None):
        self.points = sorted(points, key=lambda p: p.time)
        self._cache = CacheManager(max_entries=cache_size or Config.TIDE_CACHE_SIZE)

    def height_at(self, at: datetime) -> Optional[float]:
        return self._cache.get_or_compute(("height", at), lambda: interpolate_tide(self.points, at))

    def phase_at(self, at: datetime) -> Optional[str]:
        return self._cache.get_or_compute(("phase", at), lambda: tide_phase(self.points, at))
