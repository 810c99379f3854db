from __future__ import annotations

from typing import Iterable, List

from .interface import CallRequest, RoutePlan, Stop
from .utils import chain_floors, unique


class MergeAggregator:
    """Batches every pending call into one sweep across the building.

    Origins and destinations are deduplicated and then visited in a single
    pass so the car reverses direction as rarely as possible:

    * one origin, one destination: a single leg
    * one origin, many destinations: origin then destinations ascending
    * many origins, one destination: origins ascending then the destination
    * many origins, many destinations: origins ascending, then destinations
      descending starting from the last origin
    """

    def plan(self, pending: Iterable[CallRequest]) -> RoutePlan:
        calls = list(pending)
        if not calls:
            return RoutePlan()

        origins = unique(call.origin for call in calls)
        destinations = unique(call.destination for call in calls)
        return RoutePlan(stops=self._merge(origins, destinations), consumed=calls)

    def _merge(self, origins: List[int], destinations: List[int]) -> List[Stop]:
        if len(origins) == 1 and len(destinations) == 1:
            return [Stop(origins[0], destinations[0])]

        if len(origins) == 1:
            return chain_floors(origins + sorted(destinations))

        if len(destinations) == 1:
            return chain_floors(sorted(origins) + destinations)

        origins = sorted(origins)
        stops = chain_floors(origins)
        # Leg into the first destination is dropped when it is the last origin
        stops.extend(
            chain_floors([origins[-1]] + sorted(destinations, reverse=True), skip_stationary=True)
        )
        return stops
