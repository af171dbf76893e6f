"""Geometry primitives over latitude/longitude pairs.

Distances use a planar approximation: one degree of latitude is taken
as 111 320 m and a degree of longitude is scaled by the cosine of the
mean latitude. It is an approximation valid only while curvature error
is negligible, roughly below a few hundred kilometres, and it does not
handle the antimeridian. It is the only distance model used for edge
weights, nearest-node lookup and the geometric median.

Bearing, destination and midpoint use spherical formulas and are meant
for building fetch regions, not for weighting edges.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from geopy.distance import great_circle

from ..domain.errors import InvalidInputError
from ..domain.models import Coordinate

logger = logging.getLogger(__name__)

METERS_PER_DEGREE = 111_320.0

MIN_MEDIAN_POINTS = 2
MAX_MEDIAN_POINTS = 5


def distance(a: Coordinate, b: Coordinate) -> float:
    """Approximate ground distance in meters between two coordinates."""
    mean_lat = math.radians((a.latitude + b.latitude) / 2)
    dy = (b.latitude - a.latitude) * METERS_PER_DEGREE
    dx = (b.longitude - a.longitude) * METERS_PER_DEGREE * math.cos(mean_lat)
    return math.hypot(dx, dy)


def bearing(a: Coordinate, b: Coordinate) -> float:
    """Initial great-circle bearing from ``a`` to ``b``, in radians.

    Measured clockwise from true north, in ``(-pi, pi]``.
    """
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    y = math.sin(d_lambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(
        d_lambda
    )
    return math.atan2(y, x)


def destination(point: Coordinate, bearing_rad: float, distance_m: float) -> Coordinate:
    """Point reached from ``point`` after ``distance_m`` along ``bearing_rad``."""
    if distance_m == 0:
        return point
    reached = great_circle(meters=distance_m).destination(
        point.as_tuple(), bearing=math.degrees(bearing_rad)
    )
    return Coordinate(
        latitude=_clamp_latitude(reached.latitude),
        longitude=_wrap_longitude(reached.longitude),
    )


def midpoint(a: Coordinate, b: Coordinate) -> Coordinate:
    """Spherical midpoint of the great-circle segment between ``a`` and ``b``."""
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    lambda1 = math.radians(a.longitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    bx = math.cos(phi2) * math.cos(d_lambda)
    by = math.cos(phi2) * math.sin(d_lambda)
    mid_lat = math.atan2(
        math.sin(phi1) + math.sin(phi2),
        math.sqrt((math.cos(phi1) + bx) ** 2 + by**2),
    )
    mid_lon = lambda1 + math.atan2(by, math.cos(phi1) + bx)
    return Coordinate(
        latitude=_clamp_latitude(math.degrees(mid_lat)),
        longitude=_wrap_longitude(math.degrees(mid_lon)),
    )


def geometric_median(
    points: Sequence[Coordinate],
    tolerance: float = 1e-6,
    max_iterations: int = 1000,
) -> Coordinate:
    """Point minimizing the summed distance to ``points`` (Weiszfeld).

    Starts from the centroid and re-weights every input point by the
    inverse of its distance to the current estimate. A point that
    coincides with the estimate is left out of that iteration.

    Args:
        points: Between 2 and 5 coordinates.
        tolerance: Stop once successive estimates move less than this
            many degrees on both axes.
        max_iterations: Upper bound on Weiszfeld steps.

    Returns:
        The median estimate.

    Raises:
        InvalidInputError: If fewer than 2 or more than 5 points are given.
    """
    if not MIN_MEDIAN_POINTS <= len(points) <= MAX_MEDIAN_POINTS:
        raise InvalidInputError(
            f"Geometric median needs {MIN_MEDIAN_POINTS} to {MAX_MEDIAN_POINTS} "
            f"points, got {len(points)}",
            field_name="points",
        )

    lat = sum(p.latitude for p in points) / len(points)
    lon = sum(p.longitude for p in points) / len(points)

    for iteration in range(max_iterations):
        current = Coordinate(lat, lon)
        weight_sum = 0.0
        lat_acc = 0.0
        lon_acc = 0.0
        for p in points:
            d = distance(current, p)
            if d == 0:
                continue
            w = 1.0 / d
            weight_sum += w
            lat_acc += p.latitude * w
            lon_acc += p.longitude * w

        if weight_sum == 0:
            # every point sits on the estimate
            break

        next_lat = lat_acc / weight_sum
        next_lon = lon_acc / weight_sum
        moved = max(abs(next_lat - lat), abs(next_lon - lon))
        lat, lon = next_lat, next_lon
        if moved < tolerance:
            logger.debug(
                "Geometric median converged",
                extra={"iterations": iteration + 1, "points": len(points)},
            )
            break
    else:
        logger.warning(
            "Geometric median did not converge",
            extra={"max_iterations": max_iterations, "points": len(points)},
        )

    return Coordinate(lat, lon)


def _clamp_latitude(value: float) -> float:
    return max(-90.0, min(90.0, value))


def _wrap_longitude(value: float) -> float:
    wrapped = (value + 180.0) % 360.0 - 180.0
    # keep +180 as is instead of flipping it to -180
    if wrapped == -180.0 and value > 0:
        return 180.0
    return wrapped
