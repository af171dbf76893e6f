"""Rendering port - Abstraction for route map generation."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Coordinate, Corridor


class MapRendererPort(Protocol):
    """Port for map rendering.

    Implementation: adapters/rendering/folium_adapter.py
    """

    def render(
        self,
        path: Sequence[Coordinate],
        output_path: Path,
        waypoints: Sequence[Coordinate] = (),
        corridor: Optional[Corridor] = None,
    ) -> Path:
        """Render a route on a map and save to file.

        Args:
            path: Coordinates of the route, in travel order.
            output_path: Where to save the rendered map.
            waypoints: Optional stops to mark along the route.
            corridor: Optional fetch corridor to outline.

        Returns:
            Path to the generated map file.
        """
        ...
