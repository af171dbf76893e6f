"""Services layer - Application orchestration.

Available services:
- RoutePlannerService: Single-path and multi-stop route queries
"""

from .route_planner import RoutePlannerService

__all__ = ["RoutePlannerService"]
