"""Fetch region covering a set of waypoints."""

from __future__ import annotations

import logging
from typing import Sequence

from ..domain.errors import InvalidInputError
from ..domain.models import Coordinate, FetchCircle
from ..geo.formulas import distance, geometric_median

logger = logging.getLogger(__name__)

MIN_WAYPOINTS = 2
MAX_WAYPOINTS = 5


def check_waypoint_count(waypoints: Sequence[Coordinate]) -> None:
    """Reject waypoint lists outside the supported 2..5 range.

    The upper bound keeps exhaustive ordering search exact and cheap; it
    is a hard limit.
    """
    if not MIN_WAYPOINTS <= len(waypoints) <= MAX_WAYPOINTS:
        raise InvalidInputError(
            f"Multi-stop routing needs {MIN_WAYPOINTS} to {MAX_WAYPOINTS} "
            f"waypoints, got {len(waypoints)}",
            field_name="waypoints",
        )


def plan_fetch_region(
    waypoints: Sequence[Coordinate],
    margin_m: float,
    max_span_m: float,
    tolerance: float = 1e-6,
    max_iterations: int = 1000,
) -> FetchCircle:
    """Circle centered on the waypoints' geometric median.

    The radius is the largest waypoint distance from the median plus
    ``margin_m``.

    Raises:
        InvalidInputError: If the waypoint count is outside 2..5 or a
            waypoint lies further than ``max_span_m`` from the median.
    """
    check_waypoint_count(waypoints)
    center = geometric_median(waypoints, tolerance=tolerance, max_iterations=max_iterations)
    span = max(distance(center, w) for w in waypoints)

    if span > max_span_m:
        raise InvalidInputError(
            f"Waypoints span {span:.0f} m from their median, above the "
            f"{max_span_m:.0f} m limit",
            field_name="waypoints",
        )

    logger.debug(
        "Fetch region planned",
        extra={
            "center": center.as_tuple(),
            "span_m": span,
            "radius_m": span + margin_m,
        },
    )
    return FetchCircle(center=center, radius_m=span + margin_m)
