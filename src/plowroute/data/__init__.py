"""Fleet data access."""

from .fleet_repository import FleetRepository, InMemoryFleetRepository, get_fleet_repository
from .snapshot import FleetSnapshot, load_fleet_snapshot

__all__ = [
    "FleetRepository",
    "InMemoryFleetRepository",
    "get_fleet_repository",
    "FleetSnapshot",
    "load_fleet_snapshot",
]
