"""Graph-related utilities for representing the road network.

This subpackage turns way records into an in-memory graph, snaps
coordinates to graph nodes and runs shortest-path searches on top of
that graph.
"""

from .builder import Graph, build_graph
from .dijkstra import shortest_path
from .locator import nearest_node
from .parser import parse_ways, ways_from_elements
from .route import route_between

__all__ = [
    "Graph",
    "build_graph",
    "parse_ways",
    "ways_from_elements",
    "nearest_node",
    "shortest_path",
    "route_between",
]
