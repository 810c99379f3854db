"""Simulation primitives for Lift Sequencer."""

from .config import ConfigurationError, SimulationConfig
from .elevator import Elevator, ElevatorBusyError, ElevatorState
from .schema import ScenarioModel, SequenceModel, load_scenario
from .sequence import Sequence, default_sequences
from .simulation import RowSnapshot, SimulationClock, SimulationResult, simulate

__all__ = [
    "ConfigurationError",
    "Elevator",
    "ElevatorBusyError",
    "ElevatorState",
    "RowSnapshot",
    "ScenarioModel",
    "Sequence",
    "SequenceModel",
    "SimulationClock",
    "SimulationConfig",
    "SimulationResult",
    "default_sequences",
    "load_scenario",
    "simulate",
]
