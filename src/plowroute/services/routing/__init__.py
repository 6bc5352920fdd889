"""Route construction services."""

from .builder import build_route, partition_jobs, walk_route
from .models import OptimizedRoute, RouteStats, RouteStop, RoutingParameters
from .mutator import reorder_route
from .priority import MAX_PRIORITY_WEIGHT, priority_weight
from .recompute import RecomputeTicket, RouteRecomputeRegistry
from .service_time import ServiceDurationResolver

__all__ = [
    "build_route",
    "reorder_route",
    "walk_route",
    "partition_jobs",
    "priority_weight",
    "MAX_PRIORITY_WEIGHT",
    "ServiceDurationResolver",
    "RouteRecomputeRegistry",
    "RecomputeTicket",
    "OptimizedRoute",
    "RouteStop",
    "RouteStats",
    "RoutingParameters",
]
