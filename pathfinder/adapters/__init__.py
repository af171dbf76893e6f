"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the routing core to external systems:
- Geodata services (Overpass API)
- Rendering engines (Folium)
- Caching systems (in-memory)
"""
