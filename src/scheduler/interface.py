from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Protocol

IN_MOVEMENT_LABEL = "in movement..."


@dataclass(frozen=True)
class CallRequest:
    """A single origin -> destination trip produced by a firing sequence."""

    origin: int
    destination: int


@dataclass(frozen=True)
class Stop:
    """One leg of a merged route."""

    from_floor: int
    to_floor: int

    @property
    def distance(self) -> int:
        return abs(self.to_floor - self.from_floor)

    @property
    def direction(self) -> int:
        return 1 if self.to_floor >= self.from_floor else -1


@dataclass
class RoutePlan:
    """Ordered legs for one elevator and the pending calls they serve."""

    stops: List[Stop] = field(default_factory=list)
    consumed: List[CallRequest] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.stops)


class StepSchedule:
    """Second-by-second labels describing an elevator's current assignment.

    Keys are second-resolution instants. The schedule is filled once by the
    travel scheduler and cleared when the elevator is released.
    """

    def __init__(self) -> None:
        self._labels: Dict[datetime, str] = {}

    def add(self, instant: datetime, label: str) -> None:
        self._labels[instant] = label

    def label_at(self, instant: datetime, default: str = IN_MOVEMENT_LABEL) -> str:
        return self._labels.get(instant, default)

    def clear(self) -> None:
        self._labels.clear()

    def labels(self) -> List[str]:
        return list(self._labels.values())

    def __len__(self) -> int:
        return len(self._labels)

    def __contains__(self, instant: object) -> bool:
        return instant in self._labels


class CallAggregator(Protocol):
    """Strategy interface for turning pending calls into one route."""

    def plan(self, pending: Iterable[CallRequest]) -> RoutePlan:
        """
        Return the legs to hand to a single elevator.

        The plan lists which pending calls it serves so the caller can drop
        them from the queue once an elevator accepts the route.
        """
        ...
