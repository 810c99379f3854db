from __future__ import annotations

from typing import Iterable

from .interface import CallRequest, RoutePlan, Stop


class SingleCallAggregator:
    """Dispatches the oldest pending call on its own."""

    def plan(self, pending: Iterable[CallRequest]) -> RoutePlan:
        for call in pending:
            return RoutePlan(stops=[Stop(call.origin, call.destination)], consumed=[call])
        return RoutePlan()
