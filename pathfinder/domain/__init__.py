"""Domain layer - Core routing models and errors.

This module contains immutable domain models and typed errors
used throughout the package. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    DataFetchError,
    InvalidInputError,
    NodeNotFoundError,
    NoFeasibleRouteError,
    NoRouteFoundError,
    PathfinderError,
    RenderingError,
)
from .models import (
    Coordinate,
    Corridor,
    Edge,
    FetchCircle,
    MultiStopResult,
    Node,
    ParsedNetwork,
    PathResult,
    Way,
)

__all__ = [
    # Models
    "Coordinate",
    "Node",
    "Edge",
    "Way",
    "ParsedNetwork",
    "PathResult",
    "Corridor",
    "FetchCircle",
    "MultiStopResult",
    # Errors
    "PathfinderError",
    "InvalidInputError",
    "NoFeasibleRouteError",
    "NodeNotFoundError",
    "NoRouteFoundError",
    "DataFetchError",
    "ConfigurationError",
    "RenderingError",
]
