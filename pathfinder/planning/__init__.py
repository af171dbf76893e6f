"""Multi-stop planning: fetch region and waypoint ordering."""

from .multi_stop import MultiStopPlanner
from .region import MAX_WAYPOINTS, MIN_WAYPOINTS, check_waypoint_count, plan_fetch_region

__all__ = [
    "MultiStopPlanner",
    "plan_fetch_region",
    "check_waypoint_count",
    "MIN_WAYPOINTS",
    "MAX_WAYPOINTS",
]
