"""Great-circle direction engine — bearing, distance and alignment toward a target point."""

import dataclasses
import math

from qiblafinder.angles import signed_angle, unwind_angle
from qiblafinder.models import GeoCoordinate, QiblaDirection

MECCA = GeoCoordinate(latitude=21.4225, longitude=39.8262)
EARTH_RADIUS_M = 6_371_000.0
DEFAULT_ALIGNMENT_THRESHOLD = 5.0
_POLE_EPSILON = 1e-9

_CARDINALS_8 = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")
_CARDINALS_16 = (
    "N",
    "NNE",
    "NE",
    "ENE",
    "E",
    "ESE",
    "SE",
    "SSE",
    "S",
    "SSW",
    "SW",
    "WSW",
    "W",
    "WNW",
    "NW",
    "NNW",
)


def _finite(*points: GeoCoordinate) -> bool:
    return all(
        math.isfinite(p.latitude) and math.isfinite(p.longitude) for p in points
    )


def initial_bearing(origin: GeoCoordinate, target: GeoCoordinate) -> float:
    """Initial great-circle bearing from origin to target, in [0, 360).

    Coincident and antipodal points have no defined bearing; atan2 still
    returns a stable value (0.0 for coincident points) and that is passed
    through unchanged. At a pole every meridian leads south (north pole) or
    north (south pole), so the bearing is 180.0 or 0.0 whatever the longitude.
    """
    if not _finite(origin, target):
        return 0.0
    if abs(abs(origin.latitude) - 90.0) < _POLE_EPSILON:
        return 180.0 if origin.latitude > 0 else 0.0
    phi1 = math.radians(origin.latitude)
    phi2 = math.radians(target.latitude)
    # Signed raw difference; sin/cos take care of the ±180° crossing.
    delta_lambda = math.radians(target.longitude - origin.longitude)

    y = math.sin(delta_lambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(
        delta_lambda
    )
    return unwind_angle(math.degrees(math.atan2(y, x)))


def haversine_distance(origin: GeoCoordinate, target: GeoCoordinate) -> float:
    """Great-circle distance in metres on a sphere of Earth's mean radius."""
    if not _finite(origin, target):
        return math.nan
    phi1 = math.radians(origin.latitude)
    phi2 = math.radians(target.latitude)
    d_phi = phi2 - phi1
    d_lambda = math.radians(target.longitude - origin.longitude)
    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    a = min(1.0, max(0.0, a))
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(a))


def cardinal_direction(bearing: float, points: int = 8) -> str:
    """Compass label for bearing on an 8- or 16-point rose.

    Sectors are centred on each label; exact half-way bearings round up
    (11.25° on a 16-point rose is "NNE").
    """
    if points == 8:
        labels = _CARDINALS_8
    elif points == 16:
        labels = _CARDINALS_16
    else:
        raise ValueError(f"points must be 8 or 16, got {points}")
    width = 360.0 / len(labels)
    index = math.floor(unwind_angle(bearing) / width + 0.5) % len(labels)
    return labels[index]


def relative_bearing(bearing: float, heading: float) -> float:
    """Bearing minus device heading, in (-180, 180]. Positive means turn right."""
    return signed_angle(bearing - heading)


def is_aligned(
    bearing: float, heading: float, threshold: float = DEFAULT_ALIGNMENT_THRESHOLD
) -> bool:
    return abs(relative_bearing(bearing, heading)) <= threshold


def compute_direction(
    origin: GeoCoordinate,
    target: GeoCoordinate = MECCA,
    alignment_threshold: float = DEFAULT_ALIGNMENT_THRESHOLD,
    heading: float | None = None,
    points: int = 8,
) -> QiblaDirection:
    """Compute the QiblaDirection from origin to target.

    Args:
        origin: Observer position. Out-of-range values are not rejected.
        target: Destination (defaults to the Kaaba).
        alignment_threshold: Max |bearing - heading| in degrees to count as aligned.
        heading: Current device heading in degrees. Without one the result
            is never aligned and relative_bearing is None.
        points: 8- or 16-point cardinal labels.

    Returns:
        QiblaDirection. Never raises for numeric input.
    """
    bearing = initial_bearing(origin, target)
    distance = haversine_distance(origin, target)
    direction = QiblaDirection(
        bearing=bearing,
        distance=distance,
        cardinal_direction=cardinal_direction(bearing, points),
        is_aligned=False,
    )
    if heading is None:
        return direction
    return align(direction, heading, alignment_threshold)


def align(
    direction: QiblaDirection,
    heading: float,
    threshold: float = DEFAULT_ALIGNMENT_THRESHOLD,
) -> QiblaDirection:
    """Return a copy of direction re-evaluated against a new heading sample.

    Only the heading-dependent fields change; bearing and distance are reused.
    """
    relative = relative_bearing(direction.bearing, heading)
    return dataclasses.replace(
        direction,
        relative_bearing=relative,
        is_aligned=abs(relative) <= threshold,
    )
