"""Manual reordering of an operator's outstanding stops (drag-and-drop)."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from ...errors import ReorderIndexError
from ...models.domain import Job, Operator
from .builder import partition_jobs, walk_route
from .models import OptimizedRoute, RoutingParameters
from .service_time import ServiceDurationResolver


def _check_index(name: str, index: int, size: int) -> None:
    if not 0 <= index < size:
        raise ReorderIndexError(
            f"{name}={index} is out of range for {size} reorderable stop(s) (pending or en route)."
        )


def reorder_route(
    operator: Operator,
    jobs: Sequence[Job],
    from_index: int,
    to_index: int,
    *,
    start_time: datetime | None = None,
    resolver: ServiceDurationResolver | None = None,
    parameters: RoutingParameters | None = None,
) -> OptimizedRoute:
    """Move one outstanding stop and recompute the route timing.

    Indices address only the pending/en-route jobs, in the order given. In-progress
    jobs stay locked at the front and completed jobs are returned separately.
    """
    partition = partition_jobs(jobs)
    _check_index("from_index", from_index, len(partition.candidates))
    _check_index("to_index", to_index, len(partition.candidates))

    reordered = list(partition.candidates)
    moved = reordered.pop(from_index)
    reordered.insert(to_index, moved)

    parameters = parameters or RoutingParameters()
    return walk_route(
        operator,
        [*partition.in_progress, *reordered],
        completed=partition.completed,
        start_time=start_time if start_time is not None else datetime.now(timezone.utc),
        resolver=resolver or ServiceDurationResolver(parameters=parameters),
        parameters=parameters,
    )
