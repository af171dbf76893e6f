"""Geometry over latitude/longitude pairs.

Distance, bearing, destination, midpoint and geometric median
primitives, plus the corridor polygon built from them.
"""

from .corridor import generate_corridor
from .formulas import bearing, destination, distance, geometric_median, midpoint

__all__ = [
    "distance",
    "bearing",
    "destination",
    "midpoint",
    "geometric_median",
    "generate_corridor",
]
