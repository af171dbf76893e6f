"""Folium map renderer adapter.

Draws a computed route, its waypoints and, when given, the fetch
corridor on an interactive HTML map.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

import folium

from ...config import RenderingConfig, get_config
from ...domain.errors import RenderingError
from ...domain.models import Coordinate, Corridor


@dataclass
class FoliumMapRenderer:
    """Folium-based interactive map renderer.

    This adapter implements MapRendererPort.
    """

    config: RenderingConfig = field(default_factory=lambda: get_config().rendering)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def render(
        self,
        path: Sequence[Coordinate],
        output_path: Path,
        waypoints: Sequence[Coordinate] = (),
        corridor: Optional[Corridor] = None,
    ) -> Path:
        """Render a route on a map and save to file.

        Raises:
            RenderingError: If the path is empty or rendering fails.
        """
        if not path:
            raise RenderingError(
                "Cannot render empty route",
                output_path=str(output_path),
                renderer_type="folium",
            )

        self._logger.info(
            "Rendering route map",
            extra={
                "points": len(path),
                "waypoints": len(waypoints),
                "output_path": str(output_path),
            },
        )

        try:
            center_lat = sum(c.latitude for c in path) / len(path)
            center_lon = sum(c.longitude for c in path) / len(path)
            m = folium.Map(
                location=[center_lat, center_lon],
                zoom_start=self.config.zoom_start,
                tiles=self.config.tiles,
            )

            if corridor is not None:
                folium.Polygon(
                    [list(c.as_tuple()) for c in corridor.corners],
                    color=self.config.corridor_color,
                    weight=2,
                    fill=True,
                    fill_opacity=0.1,
                    tooltip="Fetch corridor",
                ).add_to(m)

            if len(path) >= 2:
                folium.PolyLine(
                    [list(c.as_tuple()) for c in path],
                    weight=5,
                    color=self.config.route_color,
                    opacity=0.8,
                ).add_to(m)

            folium.Marker(
                list(path[0].as_tuple()),
                tooltip="Start",
                icon=folium.Icon(color="green"),
            ).add_to(m)
            folium.Marker(
                list(path[-1].as_tuple()),
                tooltip="End",
                icon=folium.Icon(color="red"),
            ).add_to(m)

            for i, stop in enumerate(waypoints, start=1):
                folium.CircleMarker(
                    list(stop.as_tuple()),
                    radius=6,
                    color="blue",
                    fill=True,
                    tooltip=f"Stop {i}",
                ).add_to(m)

            output_path.parent.mkdir(parents=True, exist_ok=True)
            m.save(str(output_path))
        except OSError as e:
            self._logger.error(
                "Map rendering failed",
                extra={"error": str(e), "output_path": str(output_path)},
            )
            raise RenderingError(
                f"Map rendering failed: {e}",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            )

        self._logger.info(
            "Map rendered successfully",
            extra={"output_path": str(output_path)},
        )
        return output_path
