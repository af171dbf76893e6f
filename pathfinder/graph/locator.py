"""Nearest graph node to an arbitrary coordinate."""

from __future__ import annotations

import logging
from typing import Sequence, Tuple

from ..domain.errors import NodeNotFoundError
from ..domain.models import Coordinate, Node
from ..geo.formulas import distance

logger = logging.getLogger(__name__)


def nearest_node(target: Coordinate, nodes: Sequence[Node]) -> Tuple[Node, float]:
    """Find the node closest to ``target`` by linear scan.

    Ties go to the node seen first.

    Returns:
        The nearest node and its distance in meters.

    Raises:
        NodeNotFoundError: If ``nodes`` is empty, i.e. the fetched region
            holds no routable data.
    """
    if not nodes:
        raise NodeNotFoundError(
            f"No routable data in region around "
            f"({target.latitude}, {target.longitude})"
        )

    best = nodes[0]
    best_distance = distance(target, best.coordinate)
    for node in nodes[1:]:
        d = distance(target, node.coordinate)
        if d < best_distance:
            best, best_distance = node, d

    logger.debug(
        "Nearest node located",
        extra={"node_id": best.id, "distance_m": best_distance},
    )
    return best, best_distance
