"""Road-network pathfinding over OpenStreetMap way data.

Builds a routable graph from way geometry and answers shortest-path
and multi-stop ordering queries. The geodata service and map rendering
sit behind ports in ``pathfinder.ports`` with default adapters in
``pathfinder.adapters``.
"""

from .domain import (
    Coordinate,
    Corridor,
    InvalidInputError,
    MultiStopResult,
    NodeNotFoundError,
    NoFeasibleRouteError,
    PathResult,
    PathfinderError,
)
from .services import RoutePlannerService

__all__ = [
    "Coordinate",
    "Corridor",
    "PathResult",
    "MultiStopResult",
    "PathfinderError",
    "InvalidInputError",
    "NoFeasibleRouteError",
    "NodeNotFoundError",
    "RoutePlannerService",
]
