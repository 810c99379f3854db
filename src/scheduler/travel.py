from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, List

from .interface import Stop, StepSchedule
from .utils import advance

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from simulation.elevator import Elevator

logger = logging.getLogger(__name__)


class TravelScheduler:
    """Expands a list of legs into a per-second schedule for one elevator.

    Every single-floor movement lasts ``travel_time`` seconds and every leg
    ends with ``floor_time`` seconds of waiting at its destination. Labels
    carry the running distance so that a snapshot taken mid-route shows the
    total the car will have covered at that point.
    """

    def __init__(self, travel_time: int, floor_time: int) -> None:
        self.travel_time = travel_time
        self.floor_time = floor_time

    def build(self, legs: List[Stop], start: datetime, travelled: int = 0) -> StepSchedule:
        steps = StepSchedule()
        instant = start
        running = travelled
        for leg in legs:
            current = leg.from_floor
            for _ in range(leg.distance):
                following = current + leg.direction
                running += 1
                label = f"{current} -> {following}|{running} (in movement)"
                for _ in range(self.travel_time):
                    steps.add(instant, label)
                    instant = advance(instant, 1)
                current = following

            label = f"{current}|{running} (waiting time)"
            for _ in range(self.floor_time):
                steps.add(instant, label)
                instant = advance(instant, 1)
        return steps

    def duration(self, legs: List[Stop]) -> int:
        """Total seconds the given legs keep an elevator busy."""

        return sum(leg.distance * self.travel_time + self.floor_time for leg in legs)

    def dispatch(self, elevator: "Elevator", legs: List[Stop], start: datetime) -> datetime:
        steps = self.build(legs, start, travelled=elevator.cumulative_distance)
        distance = sum(leg.distance for leg in legs)
        available_at = advance(start, self.duration(legs))
        final_floor = legs[-1].to_floor if legs else elevator.floor
        elevator.assign(steps, floor=final_floor, distance=distance, available_at=available_at)
        logger.debug(
            "%s sent through %d legs (%d floors), free at %s",
            elevator.name,
            len(legs),
            distance,
            available_at.strftime("%H:%M:%S"),
        )
        return available_at
