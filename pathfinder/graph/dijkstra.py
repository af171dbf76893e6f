"""Shortest-path computation using Dijkstra's algorithm.

The next node to finalize is picked by a linear scan over the
unfinalized set, so a search costs O(V^2). Graphs are rebuilt per
bounded query region, which keeps V small; a search over a persisted
city- or country-scale network would need an indexed priority queue
instead.

When several unfinalized nodes share the minimum tentative distance,
the one first in graph iteration order is taken. Which of several
equally short paths is returned therefore depends on insertion order.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Mapping, Optional, Set

from ..domain.errors import NodeNotFoundError
from ..domain.models import Coordinate, PathResult
from .builder import Graph

logger = logging.getLogger(__name__)


def shortest_path(
    graph: Graph,
    source: int,
    target: int,
    coordinates: Mapping[int, Coordinate],
) -> PathResult:
    """Compute the shortest path between two graph nodes.

    Parameters
    ----------
    graph:
        Graph as produced by ``build_graph``.
    source:
        Node id to start from.
    target:
        Node id to reach.
    coordinates:
        Node id to position index used to turn the node path into
        coordinates.

    Returns
    -------
    PathResult
        Node ids and coordinates from ``source`` to ``target``
        (inclusive) and the total distance. If ``target`` cannot be
        reached, ``PathResult.unreachable()``.

    Raises
    ------
    NodeNotFoundError
        If ``source`` or ``target`` is not a node of ``graph``.
    """
    for node_id in (source, target):
        if node_id not in graph:
            raise NodeNotFoundError(
                f"Node {node_id} is not in the graph", node_id=node_id
            )

    distances: Dict[int, float] = {node_id: math.inf for node_id in graph}
    previous: Dict[int, Optional[int]] = {node_id: None for node_id in graph}
    distances[source] = 0.0
    unfinalized: Set[int] = set(graph)
    order = list(graph)

    while unfinalized:
        current = None
        current_distance = math.inf
        for node_id in order:
            if node_id in unfinalized and distances[node_id] < current_distance:
                current, current_distance = node_id, distances[node_id]

        if current is None:
            # every remaining node is at infinite distance
            break

        unfinalized.discard(current)
        if current == target:
            break

        for neighbor, weight in graph.neighbors(current):
            if neighbor not in unfinalized:
                continue
            candidate = current_distance + weight
            if candidate < distances[neighbor]:
                distances[neighbor] = candidate
                previous[neighbor] = current

    if math.isinf(distances[target]):
        logger.debug(
            "Target unreachable", extra={"source": source, "target": target}
        )
        return PathResult.unreachable()

    path: List[int] = []
    node: Optional[int] = target
    while node is not None:
        path.append(node)
        node = previous[node]
    path.reverse()

    logger.debug(
        "Shortest path found",
        extra={"source": source, "target": target, "nodes": len(path)},
    )
    return PathResult(
        node_ids=tuple(path),
        coordinates=tuple(coordinates[n] for n in path),
        distance_m=distances[target],
    )
