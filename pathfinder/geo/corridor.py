"""Rectangular fetch corridor between two far-apart points.

Fetching a full circle around two distant endpoints pulls in far more
road data than the route can use, so long routes are bounded by a
rectangle aligned to the start-to-end bearing instead.
"""

from __future__ import annotations

import logging
import math

from ..domain.errors import InvalidInputError
from ..domain.models import Coordinate, Corridor
from .formulas import bearing, destination

logger = logging.getLogger(__name__)


def generate_corridor(
    start: Coordinate,
    end: Coordinate,
    width_m: float,
    padding_m: float,
) -> Corridor:
    """Build a rectangle around the segment from ``start`` to ``end``.

    The segment is extended by ``padding_m`` at both ends along its
    bearing, then widened by ``width_m / 2`` on each side.

    Args:
        start: First endpoint.
        end: Second endpoint.
        width_m: Full width of the rectangle in meters.
        padding_m: Extension beyond each endpoint in meters.

    Returns:
        Corridor with corners start-left, start-right, end-right,
        end-left and start-left again.

    Raises:
        InvalidInputError: If width or padding is negative.
    """
    if width_m < 0:
        raise InvalidInputError(
            f"Corridor width must be non-negative, got {width_m}",
            field_name="width_m",
        )
    if padding_m < 0:
        raise InvalidInputError(
            f"Corridor padding must be non-negative, got {padding_m}",
            field_name="padding_m",
        )

    heading = bearing(start, end)
    left = heading - math.pi / 2
    right = heading + math.pi / 2
    half_width = width_m / 2

    padded_start = destination(start, heading + math.pi, padding_m)
    padded_end = destination(end, heading, padding_m)

    start_left = destination(padded_start, left, half_width)
    start_right = destination(padded_start, right, half_width)
    end_right = destination(padded_end, right, half_width)
    end_left = destination(padded_end, left, half_width)

    logger.debug(
        "Corridor generated",
        extra={
            "bearing_deg": math.degrees(heading),
            "width_m": width_m,
            "padding_m": padding_m,
        },
    )

    return Corridor(corners=(start_left, start_right, end_right, end_left, start_left))
