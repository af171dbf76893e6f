"""Best visiting order for a small set of waypoints.

The first and last waypoints are fixed and every ordering of the ones
in between is tried. This is exact and cheap only because at most five
waypoints are accepted, leaving at most 3! = 6 interior orderings.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from itertools import permutations
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..domain.errors import NoFeasibleRouteError
from ..domain.models import Coordinate, MultiStopResult, ParsedNetwork, PathResult
from ..graph.builder import build_graph
from ..graph.dijkstra import shortest_path
from ..graph.locator import nearest_node
from .region import check_waypoint_count

Leg = Tuple[int, int]


@dataclass
class MultiStopPlanner:
    """Multi-stop ordering solver over a single shared graph.

    Leg paths are computed lazily and cached per ordered waypoint pair,
    so each leg is searched at most once per ``plan`` call. Legs are
    keyed by ordered pair because one-way edges can make A->B and B->A
    differ.
    """

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def plan(
        self, network: ParsedNetwork, waypoints: Sequence[Coordinate]
    ) -> MultiStopResult:
        """Find the shortest ordering of ``waypoints``.

        Args:
            network: Parsed records of a region covering every waypoint.
            waypoints: 2 to 5 coordinates; the first and last are kept
                as route endpoints.

        Returns:
            MultiStopResult with the chosen order, the combined path and
            its total distance. On exact ties the ordering enumerated
            first wins.

        Raises:
            InvalidInputError: If the waypoint count is outside 2..5.
            NodeNotFoundError: If the network has no nodes.
            NoFeasibleRouteError: If every ordering needs a leg with no
                path inside the region.
        """
        check_waypoint_count(waypoints)

        graph = build_graph(network.nodes, network.edges, network.one_way_flags)
        snapped = [nearest_node(w, network.nodes)[0].id for w in waypoints]
        legs: Dict[Leg, PathResult] = {}

        def leg(i: int, j: int) -> PathResult:
            if (i, j) not in legs:
                legs[(i, j)] = shortest_path(
                    graph, snapped[i], snapped[j], network.coordinates
                )
            return legs[(i, j)]

        last = len(waypoints) - 1
        interior = range(1, last)
        best_order: Optional[Tuple[int, ...]] = None
        best_distance = math.inf
        candidates = 0

        for middle in permutations(interior):
            order = (0, *middle, last)
            candidates += 1
            total = self._order_distance(order, leg)
            if total < best_distance:
                best_order, best_distance = order, total

        if best_order is None:
            unreachable = tuple(
                sorted(pair for pair, path in legs.items() if not path.is_reachable)
            )
            self._logger.warning(
                "No feasible waypoint ordering",
                extra={"waypoints": len(waypoints), "unreachable_legs": unreachable},
            )
            raise NoFeasibleRouteError(
                "No waypoint ordering can be routed inside the fetched region",
                field_name="waypoints",
                unreachable_legs=unreachable,
            )

        chosen = tuple(leg(a, b) for a, b in zip(best_order, best_order[1:]))
        self._logger.info(
            "Waypoint order selected",
            extra={
                "order": best_order,
                "distance_m": best_distance,
                "candidates": candidates,
                "legs_computed": len(legs),
            },
        )
        return MultiStopResult(
            order=best_order,
            coordinates=_join_legs(chosen),
            distance_m=best_distance,
            legs=chosen,
        )

    def _order_distance(
        self, order: Tuple[int, ...], leg: Callable[[int, int], PathResult]
    ) -> float:
        """Summed leg distance of an ordering, ``inf`` if a leg is missing."""
        total = 0.0
        for a, b in zip(order, order[1:]):
            path = leg(a, b)
            if not path.is_reachable:
                return math.inf
            total += path.distance_m
        return total


def _join_legs(legs: Sequence[PathResult]) -> Tuple[Coordinate, ...]:
    """Concatenate leg paths without repeating each junction point."""
    joined: List[Coordinate] = []
    for path in legs:
        points = list(path.coordinates)
        if joined and points and joined[-1] == points[0]:
            points = points[1:]
        joined.extend(points)
    return tuple(joined)
