"""Route planner service - Main orchestrator.

Wires the geodata source to the routing core:
1. Fetch-region selection (circle or corridor)
2. Way fetching through GeodataSourcePort
3. Parsing, graph construction and search
4. Optional map rendering
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..config import RoutingConfig, get_config
from ..domain.errors import NoRouteFoundError
from ..domain.models import (
    Coordinate,
    Corridor,
    FetchCircle,
    MultiStopResult,
    PathResult,
    Way,
)
from ..geo.corridor import generate_corridor
from ..geo.formulas import distance, midpoint
from ..graph.parser import parse_ways
from ..graph.route import route_between
from ..planning.multi_stop import MultiStopPlanner
from ..planning.region import plan_fetch_region
from ..ports.geodata import GeodataSourcePort
from ..ports.rendering import MapRendererPort

FetchRegion = Union[FetchCircle, Corridor]


@dataclass
class RoutePlannerService:
    """Main service for single-path and multi-stop queries.

    Every query fetches its own region, builds its own graph and keeps
    nothing afterwards, so one service instance can serve concurrent
    queries.

    Attributes:
        geodata_source: Supplies road ways for a region
        config: Routing thresholds
        planner: Multi-stop ordering solver
        map_renderer: Optional map rendering
    """

    geodata_source: GeodataSourcePort
    config: RoutingConfig = field(default_factory=lambda: get_config().routing)
    planner: MultiStopPlanner = field(default_factory=MultiStopPlanner)
    map_renderer: Optional[MapRendererPort] = None

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def corridor(
        self,
        start: Coordinate,
        end: Coordinate,
        width_m: Optional[float] = None,
        padding_m: Optional[float] = None,
    ) -> Corridor:
        """Corridor polygon between two points, defaults from config."""
        return generate_corridor(
            start,
            end,
            self.config.corridor_width_m if width_m is None else width_m,
            self.config.corridor_padding_m if padding_m is None else padding_m,
        )

    def fetch_region(self, start: Coordinate, end: Coordinate) -> FetchRegion:
        """Region to fetch for a single path.

        Close endpoints get a circle around their midpoint; endpoints at
        least ``corridor_threshold_m`` apart get a corridor.
        """
        span = distance(start, end)
        if span < self.config.corridor_threshold_m:
            radius = max(
                span * self.config.circle_radius_factor,
                self.config.min_circle_radius_m,
            )
            return FetchCircle(center=midpoint(start, end), radius_m=radius)
        return self.corridor(start, end)

    def find_path(
        self,
        start: Coordinate,
        end: Coordinate,
        require_route: bool = False,
    ) -> PathResult:
        """Shortest path between two coordinates.

        Args:
            start: Departure coordinate.
            end: Arrival coordinate.
            require_route: Raise instead of returning an unreachable
                result when no path exists.

        Returns:
            PathResult; ``PathResult.unreachable()`` when the snapped
            nodes are not connected and ``require_route`` is False.

        Raises:
            DataFetchError: If the region cannot be fetched.
            NodeNotFoundError: If the region holds no road nodes.
            NoRouteFoundError: If ``require_route`` and no path exists.
        """
        region = self.fetch_region(start, end)
        self._logger.info(
            "Starting single-path query",
            extra={"region": type(region).__name__, "span_m": distance(start, end)},
        )

        network = parse_ways(self._fetch(region))
        try:
            result = route_between(network, start, end, require_route=require_route)
        except NoRouteFoundError as e:
            self._logger.warning(
                "No route found between endpoints",
                extra={"source": e.source, "target": e.target},
            )
            raise

        if not result.is_reachable:
            self._logger.warning("No route found between endpoints")
        else:
            self._logger.info(
                "Route found",
                extra={"points": len(result.coordinates), "distance_m": result.distance_m},
            )
        return result

    def plan_route(self, waypoints: Sequence[Coordinate]) -> MultiStopResult:
        """Best visiting order and combined path for 2 to 5 waypoints.

        Raises:
            InvalidInputError: If the waypoint count is outside 2..5 or
                the waypoints spread beyond the configured ceiling.
            DataFetchError: If the region cannot be fetched.
            NodeNotFoundError: If the region holds no road nodes.
            NoFeasibleRouteError: If no ordering can be routed.
        """
        region = plan_fetch_region(
            waypoints,
            margin_m=self.config.multi_stop_margin_m,
            max_span_m=self.config.multi_stop_max_span_m,
            tolerance=self.config.median_tolerance,
            max_iterations=self.config.median_max_iterations,
        )
        self._logger.info(
            "Starting multi-stop query",
            extra={"waypoints": len(waypoints), "radius_m": region.radius_m},
        )

        network = parse_ways(self._fetch(region))
        return self.planner.plan(network, waypoints)

    def render(
        self,
        result: Union[PathResult, MultiStopResult],
        output_path: Path,
        waypoints: Sequence[Coordinate] = (),
        corridor: Optional[Corridor] = None,
    ) -> Optional[Path]:
        """Render a result with the configured renderer, if any."""
        if self.map_renderer is None:
            self._logger.debug("No map renderer configured, skipping render")
            return None
        return self.map_renderer.render(
            result.coordinates, output_path, waypoints=waypoints, corridor=corridor
        )

    def _fetch(self, region: FetchRegion) -> List[Way]:
        if isinstance(region, Corridor):
            return self.geodata_source.fetch_corridor(region)
        return self.geodata_source.fetch_circle(region)
