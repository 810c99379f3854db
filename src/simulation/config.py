from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, tzinfo
from typing import Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from scheduler import AGGREGATOR_REGISTRY
from scheduler.utils import advance

from .sequence import Sequence, default_sequences


class ConfigurationError(ValueError):
    """Raised when a simulation is configured with values it cannot run."""


@dataclass
class SimulationConfig:
    """Everything a run needs; defaults match a small office building."""

    elevator_count: int = 3
    floor_count: int = 4
    travel_time: int = 5
    floor_time: int = 20
    start_time: time = time(9, 0)
    end_time: time = time(20, 0)
    sequences: Dict[str, Sequence] = field(default_factory=dict)
    dispatch_policy: str = "merge"
    timezone: Optional[str] = None
    day: Optional[date] = None

    def resolved_sequences(self) -> Dict[str, Sequence]:
        return dict(self.sequences) if self.sequences else default_sequences()

    def elevator_names(self) -> List[str]:
        return [f"Elevator {index}" for index in range(1, self.elevator_count + 1)]

    def zone(self) -> Optional[tzinfo]:
        return ZoneInfo(self.timezone) if self.timezone else None

    def window(self) -> Tuple[datetime, datetime]:
        """First and one-past-last simulated instant.

        The end is pushed forward by one second so the configured end time is
        itself simulated.
        """

        day = self.day or date.today()
        zone = self.zone()
        start = datetime.combine(day, self.start_time, tzinfo=zone)
        end = advance(datetime.combine(day, self.end_time, tzinfo=zone), 1)
        return start, end

    def validate(self) -> None:
        if self.elevator_count < 1:
            raise ConfigurationError("Simulation requires at least one elevator")
        if self.floor_count < 1:
            raise ConfigurationError("Building must have at least one floor")
        if self.travel_time < 1:
            raise ConfigurationError("Travel time between floors must be at least one second")
        if self.floor_time < 0:
            raise ConfigurationError("Floor waiting time cannot be negative")
        if self.end_time < self.start_time:
            raise ConfigurationError("Simulation end time must not be before its start time")
        if self.dispatch_policy.lower() not in AGGREGATOR_REGISTRY:
            raise ConfigurationError(
                f"Unknown dispatch policy '{self.dispatch_policy}'. Available: {', '.join(AGGREGATOR_REGISTRY)}"
            )
        if self.timezone:
            try:
                self.zone()
            except (ZoneInfoNotFoundError, ValueError) as exc:
                raise ConfigurationError(f"Unknown timezone '{self.timezone}'") from exc
        for name, sequence in self.resolved_sequences().items():
            self._validate_sequence(name, sequence)

    def _validate_sequence(self, name: str, sequence: Sequence) -> None:
        if sequence.interval_minutes < 1:
            raise ConfigurationError(f"Sequence '{name}' interval must be a positive number of minutes")
        if sequence.active_until < sequence.active_from:
            raise ConfigurationError(f"Sequence '{name}' ends before it starts")
        if not sequence.origins or not sequence.destinations:
            raise ConfigurationError(f"Sequence '{name}' needs at least one origin and one destination")
        outside = sorted(f for f in sequence.floors() if not 0 <= f < self.floor_count)
        if outside:
            raise ConfigurationError(
                f"Sequence '{name}' uses floors {outside} outside 0..{self.floor_count - 1}"
            )
