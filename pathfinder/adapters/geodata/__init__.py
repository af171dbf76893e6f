"""Geodata adapters - Implementations of GeodataSourcePort.

Available implementations:
- OverpassGeodataSource: Road ways from the Overpass API
"""

from .overpass_adapter import OverpassGeodataSource

__all__ = ["OverpassGeodataSource"]
