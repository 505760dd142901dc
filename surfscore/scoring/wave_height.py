# ABOUTME: Predicted breaking wave face height from offshore swell and spot profile
# ABOUTME: Applies period and direction factors, then buckets into a display label

import logging
from typing import Optional

from surfscore.forecast.models import RawHourlyReading, SwellComponent
from surfscore.spots.profiles import SpotProfile

log = logging.getLogger(__name__)

# (upper bound exclusive, label), checked in order
WAVE_HEIGHT_BUCKETS = [
    (0.5, "Flat"),
    (1.0, "1ft"),
    (2.0, "1-2ft"),
    (3.0, "2-3ft"),
    (4.0, "3-4ft"),
    (5.0, "4-5ft"),
    (6.0, "4-6ft"),
    (7.0, "4-6ft+"),
    (8.0, "5-7ft"),
    (10.0, "6-8ft"),
    (12.0, "6-10ft"),
    (15.0, "8-12ft"),
]
WAVE_HEIGHT_MAX_LABEL = "10-15ft"


def get_period_multiplier(period_s: float) -> float:
    """
    Energy/organization factor for a swell period.

    Under 5s is wind chop and contributes nothing.
    """
    if period_s < 5:
        return 0.0
    if period_s < 7:
        return 0.3
    if period_s < 10:
        return 1.0
    if period_s < 13:
        return 1.1
    return 1.15


def get_direction_factor(direction_deg: Optional[float]) -> float:
    """
    Reduction applied to the amplification factor for east swells.

    East swell wraps around the island and loses size to shadowing and
    refraction: due east (90-100) halves it, ESE (100-110) takes 35% off.
    """
    if direction_deg is None:
        return 1.0
    if 90 <= direction_deg < 100:
        return 0.5
    if 100 <= direction_deg < 110:
        return 0.65
    return 1.0


def calculate_breaking_wave_height(
    swell_height_ft: float,
    period_s: float,
    profile: SpotProfile,
    direction_deg: Optional[float] = None,
) -> float:
    """
    Predicted breaking wave face height in feet.

    breaking = swell height * amplification * direction factor * period multiplier
    """
    amplification = profile.amplification_factor * get_direction_factor(direction_deg)
    breaking = swell_height_ft * amplification * get_period_multiplier(period_s)

    log.debug(
        f"{profile.key}: {swell_height_ft}ft @ {period_s}s dir={direction_deg} "
        f"-> {breaking:.2f}ft (amp {amplification:.3f})"
    )
    return max(0.0, breaking)


def format_wave_height(height_ft: float) -> str:
    """Bucket a breaking height into its display label, e.g. 3.4 -> "3-4ft"."""
    for upper, label in WAVE_HEIGHT_BUCKETS:
        if height_ft < upper:
            return label
    return WAVE_HEIGHT_MAX_LABEL


def get_dominant_swell(reading: RawHourlyReading) -> Optional[SwellComponent]:
    """
    The most energetic swell component in a reading.

    Only components with both height and period compete. When none is
    complete but a primary height exists, a "fallback" component is built
    from the primary fields so callers still have a height to work with.
    """
    components = reading.swell_components()
    if components:
        # max() keeps the first of equal-energy components (primary before secondary)
        return max(components, key=lambda c: c.energy)

    if reading.primary_height_ft is not None:
        return SwellComponent(
            height_ft=reading.primary_height_ft,
            period_s=reading.primary_period_s,
            direction_deg=reading.primary_direction_deg,
            kind="fallback",
        )

    return None
