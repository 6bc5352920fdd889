"""Route group exports."""

from . import dispatch, eta, fleet, health, operators, routes

__all__ = ["routes", "operators", "eta", "dispatch", "fleet", "health"]
