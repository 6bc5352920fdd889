"""Fleet summary services."""

from .stats import FleetStats, compute_fleet_stats

__all__ = ["FleetStats", "compute_fleet_stats"]
