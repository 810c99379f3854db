from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

from .interface import Stop

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from simulation.elevator import Elevator

logger = logging.getLogger(__name__)


class NearestElevatorDispatcher:
    """Picks the idle elevator closest to the start of a route."""

    def select(self, elevators: Iterable["Elevator"], stop: Stop) -> Optional["Elevator"]:
        best: Optional["Elevator"] = None
        best_key: Optional[Tuple[int, int]] = None
        for elevator in elevators:
            if not elevator.available:
                continue
            distance = elevator.distance_to(stop.from_floor)
            if distance == 0:
                return elevator
            # Least travelled car wins among equally close ones
            key = (distance, elevator.cumulative_distance)
            if best_key is None or key < best_key:
                best, best_key = elevator, key
        if best is None:
            logger.debug("No elevator available for stop %s -> %s", stop.from_floor, stop.to_floor)
        return best

    def route(self, elevator: "Elevator", stops: List[Stop]) -> List[Stop]:
        """Prepend a repositioning leg when the elevator is elsewhere."""

        if not stops:
            return []
        first = stops[0]
        if elevator.floor != first.from_floor:
            return [Stop(elevator.floor, first.from_floor)] + list(stops)
        return list(stops)
