"""Typed domain errors for the pathfinder package.

Every failure of a routing query is raised as one of these types so
callers can tell malformed input, empty regions and unreachable
destinations apart instead of receiving an empty success value.

All errors inherit from PathfinderError and can optionally wrap a
root cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class PathfinderError(Exception):
    """Base error for the pathfinder domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class InvalidInputError(PathfinderError):
    """Malformed records or arguments outside the supported range.

    Raised before any partial structure is built: mismatched way
    geometry, edges against unregistered nodes, waypoint counts outside
    2..5, multi-stop spans above the configured ceiling.

    Attributes:
        field_name: Name of the offending argument or record field
    """

    field_name: str = ""


@dataclass
class NoFeasibleRouteError(InvalidInputError):
    """No waypoint ordering could be routed inside the fetched region.

    Attributes:
        unreachable_legs: Ordered waypoint index pairs with no path
    """

    unreachable_legs: tuple[tuple[int, int], ...] = ()


@dataclass
class NodeNotFoundError(PathfinderError):
    """No graph node is available for a coordinate or node id.

    Surfaced as "no routable data in region", distinct from a routing
    failure between two known nodes.

    Attributes:
        node_id: The node id that was looked up, if any
    """

    node_id: Optional[int] = None


@dataclass
class NoRouteFoundError(PathfinderError):
    """No path exists between two snapped graph nodes.

    Attributes:
        source: Source node id
        target: Target node id
    """

    source: Optional[int] = None
    target: Optional[int] = None


@dataclass
class DataFetchError(PathfinderError):
    """The geodata service could not deliver way data.

    Attributes:
        query: The query sent to the service
        status_code: HTTP status code, when a response was received
    """

    query: str = ""
    status_code: Optional[int] = None


@dataclass
class ConfigurationError(PathfinderError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
    """

    setting_name: str = ""


@dataclass
class RenderingError(PathfinderError):
    """Map rendering failed.

    Attributes:
        output_path: Path where rendering was attempted
        renderer_type: Type of renderer that failed
    """

    output_path: Optional[str] = None
    renderer_type: str = ""
