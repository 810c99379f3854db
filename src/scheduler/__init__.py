from __future__ import annotations

from typing import Callable, Dict

from .dispatcher import NearestElevatorDispatcher
from .interface import CallAggregator, CallRequest, RoutePlan, StepSchedule, Stop
from .merge import MergeAggregator
from .single_call import SingleCallAggregator
from .travel import TravelScheduler

__all__ = [
    "CallAggregator",
    "CallRequest",
    "MergeAggregator",
    "NearestElevatorDispatcher",
    "RoutePlan",
    "SingleCallAggregator",
    "StepSchedule",
    "Stop",
    "TravelScheduler",
    "get_aggregator",
]


AGGREGATOR_REGISTRY: Dict[str, Callable[[], CallAggregator]] = {
    "merge": MergeAggregator,
    "single_call": SingleCallAggregator,
}


def get_aggregator(name: str) -> CallAggregator:
    cls = AGGREGATOR_REGISTRY.get(name.lower())
    if cls is None:
        raise ValueError(f"Unknown dispatch policy '{name}'. Available: {', '.join(AGGREGATOR_REGISTRY)}")
    return cls()
