"""Immutable domain models for pathfinder.

All models are frozen dataclasses with slots. They carry no behaviour
beyond validation and a few convenience properties; the algorithms
that produce and consume them live in ``geo``, ``graph`` and
``planning``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .errors import InvalidInputError


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A WGS84 position in degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not -90 <= self.latitude <= 90:
            raise InvalidInputError(
                f"Latitude must be between -90 and 90, got {self.latitude}",
                field_name="latitude",
            )
        if not -180 <= self.longitude <= 180:
            raise InvalidInputError(
                f"Longitude must be between -180 and 180, got {self.longitude}",
                field_name="longitude",
            )

    def as_tuple(self) -> tuple[float, float]:
        """Return ``(latitude, longitude)``."""
        return (self.latitude, self.longitude)


@dataclass(frozen=True, slots=True)
class Node:
    """A road-network vertex.

    Attributes:
        id: Identifier shared with the source geodata
        coordinate: Position of the vertex
    """

    id: int
    coordinate: Coordinate


@dataclass(frozen=True, slots=True)
class Edge:
    """A directed edge weighted by ground distance in meters."""

    source: int
    target: int
    weight: float

    def __post_init__(self) -> None:
        if self.weight < 0 or math.isnan(self.weight):
            raise InvalidInputError(
                f"Edge weight must be non-negative, got {self.weight}",
                field_name="weight",
            )


@dataclass(frozen=True, slots=True)
class Way:
    """A source record: a chain of road vertices with their geometry.

    Attributes:
        id: Way identifier from the geodata service
        node_ids: Ordered vertex identifiers
        geometry: Position of each vertex, same length as ``node_ids``
        tags: Raw tag map (only ``oneway`` is interpreted)
    """

    id: int
    node_ids: tuple[int, ...]
    geometry: tuple[Coordinate, ...]
    tags: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if len(self.node_ids) != len(self.geometry):
            raise InvalidInputError(
                f"Way {self.id} has {len(self.node_ids)} node ids but "
                f"{len(self.geometry)} geometry points",
                field_name="geometry",
            )

    @property
    def one_way(self) -> bool:
        """True only for an exact ``oneway=yes`` tag."""
        return self.tags.get("oneway") == "yes"


@dataclass(frozen=True, slots=True)
class ParsedNetwork:
    """Node and edge records extracted from a set of ways.

    Attributes:
        nodes: Unique nodes in first-seen order
        edges: One directed edge per consecutive vertex pair
        coordinates: Node id to position, for path reconstruction
        one_way_flags: ``one_way_flags[i]`` applies to ``edges[i]``
    """

    nodes: tuple[Node, ...]
    edges: tuple[Edge, ...]
    coordinates: Mapping[int, Coordinate]
    one_way_flags: tuple[bool, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.coordinates, MappingProxyType):
            object.__setattr__(
                self, "coordinates", MappingProxyType(dict(self.coordinates))
            )

    @property
    def is_empty(self) -> bool:
        """Check if the region produced no nodes at all."""
        return len(self.nodes) == 0


@dataclass(frozen=True, slots=True)
class PathResult:
    """Result of a shortest-path search.

    An unreachable target is a normal result with an empty path and an
    infinite distance, never an exception.

    Attributes:
        node_ids: Graph nodes from source to target, inclusive
        coordinates: Position of each node in ``node_ids``
        distance_m: Total edge weight along the path
    """

    node_ids: tuple[int, ...]
    coordinates: tuple[Coordinate, ...]
    distance_m: float

    @classmethod
    def unreachable(cls) -> PathResult:
        """Build the "no path" result."""
        return cls(node_ids=(), coordinates=(), distance_m=math.inf)

    @property
    def is_reachable(self) -> bool:
        """Check if a path was found."""
        return len(self.node_ids) > 0 and math.isfinite(self.distance_m)


@dataclass(frozen=True, slots=True)
class Corridor:
    """A closed rectangle of five corners, first and last equal."""

    corners: tuple[Coordinate, ...]

    def __post_init__(self) -> None:
        if len(self.corners) != 5:
            raise InvalidInputError(
                f"Corridor needs exactly 5 corners, got {len(self.corners)}",
                field_name="corners",
            )
        if self.corners[0] != self.corners[-1]:
            raise InvalidInputError(
                "Corridor polygon is not closed", field_name="corners"
            )

    @property
    def vertices(self) -> tuple[Coordinate, ...]:
        """The four distinct corners, without the closing repeat."""
        return self.corners[:4]


@dataclass(frozen=True, slots=True)
class FetchCircle:
    """A circular data-fetch region."""

    center: Coordinate
    radius_m: float

    def __post_init__(self) -> None:
        if self.radius_m < 0:
            raise InvalidInputError(
                f"Radius must be non-negative, got {self.radius_m}",
                field_name="radius_m",
            )


@dataclass(frozen=True, slots=True)
class MultiStopResult:
    """Best visiting order for a set of waypoints.

    Attributes:
        order: Waypoint indices in visiting order
        coordinates: Combined path through every leg
        distance_m: Sum of the leg distances
        legs: One path per consecutive pair in ``order``
    """

    order: tuple[int, ...]
    coordinates: tuple[Coordinate, ...]
    distance_m: float
    legs: tuple[PathResult, ...] = field(default_factory=tuple)

    @property
    def num_stops(self) -> int:
        """Return the number of waypoints visited."""
        return len(self.order)
