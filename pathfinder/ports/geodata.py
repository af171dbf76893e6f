"""Geodata ports - Abstraction over the road-data service.

The routing core never talks to the network. A geodata source is asked
for the ways inside a fetch region and hands back already-parsed
``Way`` records.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Protocol

if TYPE_CHECKING:
    from ..domain.models import Corridor, FetchCircle, Way


class GeodataSourcePort(Protocol):
    """Port for fetching road ways.

    Implementation: adapters/geodata/overpass_adapter.py

    Timeouts, rate limiting and retries belong to implementations of
    this port, not to the routing core.
    """

    def fetch_circle(self, circle: FetchCircle) -> List[Way]:
        """Fetch the ways within a circle.

        Args:
            circle: Center and radius of the region.

        Returns:
            Ways intersecting the region.

        Raises:
            DataFetchError: If the service cannot deliver data.
        """
        ...

    def fetch_corridor(self, corridor: Corridor) -> List[Way]:
        """Fetch the ways within a corridor polygon.

        Args:
            corridor: Closed five-corner polygon.

        Returns:
            Ways intersecting the polygon.

        Raises:
            DataFetchError: If the service cannot deliver data.
        """
        ...
