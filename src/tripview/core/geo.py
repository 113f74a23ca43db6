from __future__ import annotations
from dataclasses import dataclass
from math import atan2, cos, floor, isfinite, radians, sin, sqrt

"""
Geospatial helpers.

A tiny geometry layer used by the distance badges: great-circle distance between
the device fix and a venue, plus coarse display strings for distance and walking
time. Everything here is pure; missing inputs are `None`, not errors.
"""

EARTH_RADIUS_M = 6_371_000
DEFAULT_WALKING_M_PER_MIN = 83


@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees (optionally with fix accuracy in meters)."""

    latitude: float
    longitude: float
    accuracy: float | None = None

    def __post_init__(self) -> None:
        if not (isfinite(self.latitude) and isfinite(self.longitude)):
            raise ValueError(f"Coordinate must be finite, got ({self.latitude}, {self.longitude})")
        if not -90 <= self.latitude <= 90:
            raise ValueError(f"latitude out of range: {self.latitude}")
        if not -180 <= self.longitude <= 180:
            raise ValueError(f"longitude out of range: {self.longitude}")
        if self.accuracy is not None and not (isfinite(self.accuracy) and self.accuracy >= 0):
            raise ValueError(f"accuracy must be a non-negative finite number, got {self.accuracy}")


@dataclass(frozen=True)
class DistanceResult:
    """Distance from the device to a target, with display strings for the badge."""

    meters: float
    display: str
    walking_time_display: str


def round_half_up(value: float) -> int:
    """Round like JavaScript `Math.round` (0.5 always goes up)."""
    return int(floor(value + 0.5))


def distance_m(a: Coordinate | None, b: Coordinate | None) -> float | None:
    """Compute great-circle distance in meters between two points (haversine)."""
    if a is None or b is None:
        return None

    lat1 = radians(a.latitude)
    lat2 = radians(b.latitude)
    dlat = lat2 - lat1
    dlon = radians(b.longitude) - radians(a.longitude)

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Floating error can push h just outside [0, 1] for identical or antipodal points.
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_M * atan2(sqrt(h), sqrt(1 - h))


def format_distance(meters: float | None) -> str | None:
    """Format meters as `350m` below 1 km, else `1.2km`."""
    if meters is None:
        return None
    if meters < 1000:
        return f"{round_half_up(meters)}m"
    return f"{meters / 1000:.1f}km"


def estimate_walking_time(
    meters: float | None, *, meters_per_minute: float = DEFAULT_WALKING_M_PER_MIN
) -> str | None:
    """Coarse walking time at a constant pace (no routing, no elevation)."""
    if meters is None:
        return None
    minutes = round_half_up(meters / meters_per_minute)
    if minutes < 1:
        return "< 1 min"
    if minutes < 60:
        return f"{minutes} min"
    return f"{minutes // 60}h {minutes % 60}m"


def measure(
    origin: Coordinate | None,
    target: Coordinate | None,
    *,
    meters_per_minute: float = DEFAULT_WALKING_M_PER_MIN,
) -> DistanceResult | None:
    """Combine distance, distance label and walking time; `None` if either side is unknown."""
    meters = distance_m(origin, target)
    if meters is None:
        return None
    return DistanceResult(
        meters=meters,
        display=format_distance(meters) or "",
        walking_time_display=estimate_walking_time(meters, meters_per_minute=meters_per_minute) or "",
    )
