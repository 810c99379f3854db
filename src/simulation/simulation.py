from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Iterator, List

from scheduler import CallRequest, NearestElevatorDispatcher, TravelScheduler, get_aggregator
from scheduler.utils import advance

from .config import SimulationConfig
from .elevator import Elevator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowSnapshot:
    """Elevator labels captured at the start of a simulated minute."""

    time: str
    labels: Dict[str, str]

    def as_row(self, elevator_names: List[str]) -> List[str]:
        return [self.time] + [self.labels[name] for name in elevator_names]


@dataclass
class SimulationResult:
    elevator_names: List[str]
    rows: List[RowSnapshot] = field(default_factory=list)
    dropped_calls: int = 0

    def headers(self) -> List[str]:
        return ["Time"] + [f"{name} (Floor|Total)" for name in self.elevator_names]

    def table(self) -> List[List[str]]:
        return [row.as_row(self.elevator_names) for row in self.rows]


class SimulationClock:
    """Second-by-second driver for a single simulation run.

    Each tick releases elevators whose route has finished, records a row and
    fires sequences on minute boundaries, then tries to dispatch whatever
    calls are pending. Calls that find no idle elevator stay queued and are
    retried on the following tick.
    """

    def __init__(self, config: SimulationConfig) -> None:
        self.config = config
        self.elevators = [Elevator(name) for name in config.elevator_names()]
        sequences = config.resolved_sequences()
        self.sequences = [sequences[name] for name in sorted(sequences)]
        self.aggregator = get_aggregator(config.dispatch_policy)
        self.dispatcher = NearestElevatorDispatcher()
        self.travel = TravelScheduler(config.travel_time, config.floor_time)
        self.pending: List[CallRequest] = []
        self.rows: List[RowSnapshot] = []
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}

    def instants(self) -> Iterator[datetime]:
        instant, end = self.config.window()
        while instant < end:
            yield instant
            instant = advance(instant, 1)

    def run(self) -> SimulationResult:
        start, _ = self.config.window()
        logger.info(
            "Simulating %d elevators over %d floors from %s to %s",
            len(self.elevators),
            self.config.floor_count,
            start.strftime("%H:%M"),
            self.config.end_time.strftime("%H:%M"),
        )
        for instant in self.instants():
            self.step(instant)

        dropped = len(self.pending)
        if dropped:
            logger.info("Discarding %d calls still pending at end of run", dropped)
            self._emit("dropped", {"calls": list(self.pending)})
            self.pending = []
        logger.info("Simulation finished with %d rows", len(self.rows))
        return SimulationResult(
            elevator_names=[elevator.name for elevator in self.elevators],
            rows=list(self.rows),
            dropped_calls=dropped,
        )

    def step(self, instant: datetime) -> None:
        self._release_elevators(instant)
        if instant.second == 0:
            self._take_snapshot(instant)
            self._collect_calls(instant)
        if self.pending:
            self._process_calls(instant)

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def _release_elevators(self, instant: datetime) -> None:
        for elevator in self.elevators:
            if elevator.release_if_due(instant):
                logger.debug("%s idle at floor %d", elevator.name, elevator.floor)

    def _take_snapshot(self, instant: datetime) -> None:
        row = RowSnapshot(
            time=instant.strftime("%H:%M"),
            labels={elevator.name: elevator.floor_label(instant) for elevator in self.elevators},
        )
        self.rows.append(row)
        self._emit("snapshot", row)

    def _collect_calls(self, instant: datetime) -> None:
        for sequence in self.sequences:
            if sequence.fires_at(instant):
                calls = sequence.calls()
                logger.debug("%s fired %d calls at %s", sequence.name, len(calls), instant.strftime("%H:%M"))
                self.pending.extend(calls)

    def _process_calls(self, instant: datetime) -> bool:
        plan = self.aggregator.plan(self.pending)
        if not plan:
            return False

        elevator = self.dispatcher.select(self.elevators, plan.stops[0])
        if elevator is None:
            return False

        legs = self.dispatcher.route(elevator, plan.stops)
        available_at = self.travel.dispatch(elevator, legs, instant)
        for call in plan.consumed:
            self.pending.remove(call)
        self._emit(
            "dispatch",
            {
                "time": instant,
                "elevator": elevator.name,
                "legs": legs,
                "available_at": available_at,
            },
        )
        return True

    def _emit(self, event: str, payload: object) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)


def simulate(config: SimulationConfig) -> SimulationResult:
    """Validate ``config`` and run it from start to end."""

    config.validate()
    return SimulationClock(config).run()
