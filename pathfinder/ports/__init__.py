"""Ports layer - Abstract interfaces (Protocols) for the package.

Ports define the contracts between the routing core and external
adapters: the geodata service, map rendering and caching.
"""

from .cache import CachePort
from .geodata import GeodataSourcePort
from .rendering import MapRendererPort

__all__ = [
    "GeodataSourcePort",
    "MapRendererPort",
    "CachePort",
]
