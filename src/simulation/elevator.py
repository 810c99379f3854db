from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from scheduler.interface import StepSchedule


class ElevatorBusyError(RuntimeError):
    """Raised when a route is assigned to an elevator that is still travelling."""


class ElevatorState(str, Enum):
    IDLE = "idle"
    BUSY = "busy"


@dataclass
class Elevator:
    """A car that is either idle at a floor or busy running a step schedule.

    Only two transitions exist: ``assign`` (idle -> busy) during the dispatch
    pass and ``release_if_due`` (busy -> idle) during the release pass.
    """

    name: str
    floor: int = 0
    cumulative_distance: int = 0
    state: ElevatorState = ElevatorState.IDLE
    next_available_at: Optional[datetime] = None
    steps: StepSchedule = field(default_factory=StepSchedule)

    @property
    def available(self) -> bool:
        return self.state is ElevatorState.IDLE

    def distance_to(self, floor: int) -> int:
        return abs(floor - self.floor)

    def assign(self, steps: StepSchedule, floor: int, distance: int, available_at: datetime) -> None:
        if not self.available:
            raise ElevatorBusyError(f"{self.name} is busy until {self.next_available_at}")
        self.state = ElevatorState.BUSY
        self.steps = steps
        self.floor = floor
        self.cumulative_distance += distance
        self.next_available_at = available_at

    def release_if_due(self, now: datetime) -> bool:
        if self.available or self.next_available_at is None:
            return False
        if now < self.next_available_at:
            return False
        self.state = ElevatorState.IDLE
        self.steps.clear()
        return True

    def floor_label(self, instant: datetime) -> str:
        if self.available:
            return f"{self.floor}|{self.cumulative_distance}"
        return self.steps.label_at(instant)
