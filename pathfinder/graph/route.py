"""Single-path query over a parsed road network."""

from __future__ import annotations

import logging

from ..domain.errors import NoRouteFoundError
from ..domain.models import Coordinate, ParsedNetwork, PathResult
from .builder import build_graph
from .dijkstra import shortest_path
from .locator import nearest_node

logger = logging.getLogger(__name__)


def route_between(
    network: ParsedNetwork,
    start: Coordinate,
    end: Coordinate,
    require_route: bool = False,
) -> PathResult:
    """Shortest path between the nodes nearest to ``start`` and ``end``.

    Builds a graph for this query only, snaps both coordinates to their
    nearest node and runs Dijkstra between them.

    Raises:
        NodeNotFoundError: If the network has no nodes.
        InvalidInputError: If the network records are inconsistent.
        NoRouteFoundError: If ``require_route`` and the snapped nodes
            are not connected.
    """
    graph = build_graph(network.nodes, network.edges, network.one_way_flags)
    start_node, start_offset = nearest_node(start, network.nodes)
    end_node, end_offset = nearest_node(end, network.nodes)

    logger.info(
        "Routing between snapped nodes",
        extra={
            "source": start_node.id,
            "target": end_node.id,
            "source_offset_m": start_offset,
            "target_offset_m": end_offset,
        },
    )
    result = shortest_path(graph, start_node.id, end_node.id, network.coordinates)
    if require_route and not result.is_reachable:
        raise NoRouteFoundError(
            f"No path from node {start_node.id} to node {end_node.id}",
            source=start_node.id,
            target=end_node.id,
        )
    return result
