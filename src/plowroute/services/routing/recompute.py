"""Latest-wins bookkeeping for per-operator route recomputes."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .models import OptimizedRoute


@dataclass(frozen=True, slots=True)
class RecomputeTicket:
    operator_id: str
    generation: int


class RouteRecomputeRegistry:
    """Track the newest recompute per operator and discard stale results.

    A recompute has no side effects until its route is adopted, so superseding an
    in-flight recompute only means refusing its result once it arrives. Adopted
    routes are stored with their generation so a superseded caller is only ever
    handed a route from a newer request than its own.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._generations: Dict[str, int] = {}
        self._routes: Dict[str, Tuple[int, OptimizedRoute]] = {}

    def begin(self, operator_id: str) -> RecomputeTicket:
        with self._lock:
            generation = self._generations.get(operator_id, 0) + 1
            self._generations[operator_id] = generation
        return RecomputeTicket(operator_id=operator_id, generation=generation)

    def is_current(self, ticket: RecomputeTicket) -> bool:
        with self._lock:
            return self._generations.get(ticket.operator_id) == ticket.generation

    def adopt(self, ticket: RecomputeTicket, route: OptimizedRoute) -> bool:
        with self._lock:
            if self._generations.get(ticket.operator_id) != ticket.generation:
                logging.info(
                    f"Discarding stale route for operator {ticket.operator_id} "
                    f"(generation {ticket.generation} superseded by {self._generations.get(ticket.operator_id)})"
                )
                return False
            self._routes[ticket.operator_id] = (ticket.generation, route)
            return True

    def newer_than(self, ticket: RecomputeTicket) -> Optional[OptimizedRoute]:
        """Adopted route from a request that began after ``ticket``, if any."""
        with self._lock:
            adopted = self._routes.get(ticket.operator_id)
        if adopted is None or adopted[0] <= ticket.generation:
            return None
        return adopted[1]

    def latest(self, operator_id: str) -> Optional[OptimizedRoute]:
        with self._lock:
            adopted = self._routes.get(operator_id)
        return adopted[1] if adopted else None
