from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from itertools import product
from typing import Dict, FrozenSet, Iterable, List

from scheduler.interface import CallRequest


@dataclass(frozen=True)
class Sequence:
    """Recurring traffic: the same trips requested every few minutes."""

    name: str
    interval_minutes: int
    active_from: time
    active_until: time
    origins: FrozenSet[int]
    destinations: FrozenSet[int]

    @classmethod
    def build(
        cls,
        name: str,
        interval_minutes: int,
        active_from: time,
        active_until: time,
        origins: Iterable[int],
        destinations: Iterable[int],
    ) -> "Sequence":
        return cls(
            name=name,
            interval_minutes=interval_minutes,
            active_from=active_from,
            active_until=active_until,
            origins=frozenset(origins),
            destinations=frozenset(destinations),
        )

    def fires_at(self, instant: datetime) -> bool:
        moment = instant.time()
        if not self.active_from <= moment <= self.active_until:
            return False
        return instant.minute % self.interval_minutes == 0

    def calls(self) -> List[CallRequest]:
        return [
            CallRequest(origin, destination)
            for origin, destination in product(sorted(self.origins), sorted(self.destinations))
        ]

    def floors(self) -> FrozenSet[int]:
        return self.origins | self.destinations


def default_sequences() -> Dict[str, Sequence]:
    """Typical office day: morning arrivals, lunchtime spread, afternoon exits."""

    sequences = [
        Sequence.build("Sequence 1", 5, time(9, 0), time(11, 0), [0], [2]),
        Sequence.build("Sequence 2", 10, time(9, 0), time(10, 0), [0], [1]),
        Sequence.build("Sequence 3", 20, time(11, 0), time(18, 20), [0], [1, 2, 3]),
        Sequence.build("Sequence 4", 4, time(14, 0), time(15, 0), [1, 2, 3], [0]),
    ]
    return {sequence.name: sequence for sequence in sequences}
