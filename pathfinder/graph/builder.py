"""Weighted, direction-aware road graph.

A Graph is built fresh for every query from the records produced by
the parser and discarded afterwards; nothing is shared between
queries.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Sequence, Tuple

from ..domain.errors import InvalidInputError
from ..domain.models import Edge, Node

logger = logging.getLogger(__name__)

Adjacency = Dict[int, List[Tuple[int, float]]]


class Graph:
    """Adjacency lists keyed by node id, append-only."""

    def __init__(self) -> None:
        self._adjacency: Adjacency = {}

    def add_node(self, node_id: int) -> None:
        """Register a node; registering it again is a no-op."""
        self._adjacency.setdefault(node_id, [])

    def add_edge(self, source: int, target: int, weight: float) -> None:
        """Append a directed edge between two registered nodes.

        Raises:
            InvalidInputError: If either endpoint was never registered.
        """
        for node_id in (source, target):
            if node_id not in self._adjacency:
                raise InvalidInputError(
                    f"Edge {source}->{target} references unregistered node {node_id}",
                    field_name="edges",
                )
        self._adjacency[source].append((target, weight))

    def neighbors(self, node_id: int) -> List[Tuple[int, float]]:
        """Outgoing ``(neighbor_id, weight)`` entries of a node."""
        return list(self._adjacency.get(node_id, ()))

    def has_edge(self, source: int, target: int) -> bool:
        return any(v == target for v, _ in self._adjacency.get(source, ()))

    @property
    def edge_count(self) -> int:
        return sum(len(entries) for entries in self._adjacency.values())

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._adjacency

    def __iter__(self) -> Iterator[int]:
        return iter(self._adjacency)

    def __len__(self) -> int:
        return len(self._adjacency)


def build_graph(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    one_way_flags: Sequence[bool],
) -> Graph:
    """Build a graph from parsed nodes and edges.

    Every node becomes a key, even with no edges. Each edge is inserted
    forward; its reverse is inserted too unless the matching one-way
    flag is set.

    Args:
        nodes: Nodes to register.
        edges: Directed edges between those nodes.
        one_way_flags: One flag per edge.

    Returns:
        The populated graph.

    Raises:
        InvalidInputError: If the flag count differs from the edge count
            or an edge references an unknown node. Nothing is built in
            that case.
    """
    if len(one_way_flags) != len(edges):
        raise InvalidInputError(
            f"Got {len(one_way_flags)} one-way flags for {len(edges)} edges",
            field_name="one_way_flags",
        )

    known = {node.id for node in nodes}
    for edge in edges:
        missing = [n for n in (edge.source, edge.target) if n not in known]
        if missing:
            raise InvalidInputError(
                f"Edge {edge.source}->{edge.target} references unknown node {missing[0]}",
                field_name="edges",
            )

    graph = Graph()
    for node in nodes:
        graph.add_node(node.id)

    for edge, one_way in zip(edges, one_way_flags):
        graph.add_edge(edge.source, edge.target, edge.weight)
        if not one_way:
            graph.add_edge(edge.target, edge.source, edge.weight)

    logger.debug(
        "Graph built",
        extra={"nodes": len(graph), "edges": graph.edge_count},
    )
    return graph
