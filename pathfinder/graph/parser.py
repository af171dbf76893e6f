"""Conversion of geodata way records into graph nodes and edges.

``ways_from_elements`` turns an Overpass-style JSON payload into
``Way`` records; ``parse_ways`` turns those into the node, edge and
coordinate records the graph builder consumes.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping

from ..domain.errors import InvalidInputError
from ..domain.models import Coordinate, Edge, Node, ParsedNetwork, Way
from ..geo.formulas import distance

logger = logging.getLogger(__name__)


def ways_from_elements(payload: Mapping[str, Any]) -> List[Way]:
    """Extract way records from a geodata response.

    Elements whose ``type`` is not ``way`` are ignored.

    Args:
        payload: Decoded JSON with an ``elements`` list. Each way
            element carries ``id``, ``nodes``, ``geometry`` (a list of
            ``{"lat", "lon"}`` objects) and optionally ``tags``.

    Returns:
        The ways in response order.

    Raises:
        InvalidInputError: If the payload or a way element is malformed.
    """
    elements = payload.get("elements")
    if not isinstance(elements, list):
        raise InvalidInputError(
            "Geodata payload has no 'elements' list", field_name="elements"
        )

    ways: List[Way] = []
    for element in elements:
        if not isinstance(element, Mapping) or element.get("type") != "way":
            continue
        try:
            ways.append(
                Way(
                    id=int(element["id"]),
                    node_ids=tuple(int(n) for n in element["nodes"]),
                    geometry=tuple(
                        Coordinate(float(p["lat"]), float(p["lon"]))
                        for p in element["geometry"]
                    ),
                    tags=dict(element.get("tags") or {}),
                )
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidInputError(
                f"Malformed way element {element.get('id')!r}",
                field_name="elements",
                cause=e,
            )

    logger.debug(
        "Way elements extracted",
        extra={"elements": len(elements), "ways": len(ways)},
    )
    return ways


def parse_ways(ways: Iterable[Way]) -> ParsedNetwork:
    """Turn ways into unique nodes and weighted directed edges.

    A node id is registered the first time it is seen; later
    occurrences, in the same or another way, reuse that first position.
    Each consecutive pair inside a way yields one edge in stored order,
    weighted by the planar distance between the pair and flagged with
    the way's one-way tag. A single-node way contributes no edge.
    """
    nodes: List[Node] = []
    coordinates: Dict[int, Coordinate] = {}
    edges: List[Edge] = []
    one_way_flags: List[bool] = []
    way_count = 0

    for way in ways:
        way_count += 1
        one_way = way.one_way
        for i, (node_id, point) in enumerate(zip(way.node_ids, way.geometry)):
            if node_id not in coordinates:
                coordinates[node_id] = point
                nodes.append(Node(id=node_id, coordinate=point))

            if i > 0:
                prev_id = way.node_ids[i - 1]
                weight = distance(coordinates[prev_id], coordinates[node_id])
                edges.append(Edge(source=prev_id, target=node_id, weight=weight))
                one_way_flags.append(one_way)

    logger.info(
        "Ways parsed",
        extra={"ways": way_count, "nodes": len(nodes), "edges": len(edges)},
    )

    return ParsedNetwork(
        nodes=tuple(nodes),
        edges=tuple(edges),
        coordinates=coordinates,
        one_way_flags=tuple(one_way_flags),
    )
