# ABOUTME: Static per-spot tuning constants used by wave height and quality scoring
# ABOUTME: Registry of Western Long Island spots with lookup by key or display name

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SpotProfile:
    """Immutable reference data describing how a spot responds to swell"""
    key: str
    name: str
    latitude: float
    longitude: float
    swell_target_deg: float      # Ideal swell direction
    swell_tolerance_deg: float   # Deviation from target with no penalty
    tide_optimal_min_ft: float
    tide_optimal_max_ft: float
    min_period_s: float          # Minimum surfable period
    amplification_factor: float  # Bathymetry proxy, offshore swell -> breaking face
    shore_facing_deg: float = 180.0  # Direction the beach faces (south-facing = 180)
    timezone: str = "America/New_York"
    active: bool = True          # Inactive ("coming soon") spots are skipped for best-spot alerts

    def __post_init__(self):
        if self.tide_optimal_min_ft > self.tide_optimal_max_ft:
            raise ValueError(
                f"Tide range inverted for {self.key}: "
                f"{self.tide_optimal_min_ft} > {self.tide_optimal_max_ft}"
            )
        if self.amplification_factor < 0:
            raise ValueError(f"Amplification factor must be >= 0, got {self.amplification_factor}")
        if self.swell_tolerance_deg <= 0:
            raise ValueError(f"Swell tolerance must be > 0, got {self.swell_tolerance_deg}")


# All three beaches face roughly due south into the NY Bight.
# Target/tolerance pairs cover ESE through S without penalty.
SPOT_PROFILES: dict[str, SpotProfile] = {
    "lido": SpotProfile(
        key="lido",
        name="Lido Beach",
        latitude=40.5887,
        longitude=-73.6246,
        swell_target_deg=145,   # Center of 110-180
        swell_tolerance_deg=35,
        tide_optimal_min_ft=0.5,
        tide_optimal_max_ft=2.5,
        min_period_s=6,
        amplification_factor=1.5,  # Hudson Canyon refraction + inlet shoaling
    ),
    "long-beach": SpotProfile(
        key="long-beach",
        name="Long Beach",
        latitude=40.5884,
        longitude=-73.6579,
        swell_target_deg=135,   # SE
        swell_tolerance_deg=45,
        tide_optimal_min_ft=0.5,
        tide_optimal_max_ft=3.0,
        min_period_s=5,
        amplification_factor=1.3,  # Jetty-driven sandbars
    ),
    "rockaway": SpotProfile(
        key="rockaway",
        name="Rockaway Beach",
        latitude=40.5834,
        longitude=-73.8162,
        swell_target_deg=145,
        swell_tolerance_deg=35,
        tide_optimal_min_ft=1.0,
        tide_optimal_max_ft=3.5,
        min_period_s=5,
        amplification_factor=1.1,  # Deep in the NY Bight shadow
    ),
}

_NAME_TO_KEY = {profile.name: key for key, profile in SPOT_PROFILES.items()}


def get_spot_profile(identifier: str) -> Optional[SpotProfile]:
    """
    Look up a profile by registry key ("lido") or display name ("Lido Beach").

    Returns:
        SpotProfile, or None if the spot is unknown
    """
    if identifier in SPOT_PROFILES:
        return SPOT_PROFILES[identifier]

    key = _NAME_TO_KEY.get(identifier)
    if key is not None:
        return SPOT_PROFILES[key]

    return None


def active_profiles() -> list[SpotProfile]:
    """Profiles eligible for best-spot alert scanning."""
    return [profile for profile in SPOT_PROFILES.values() if profile.active]
