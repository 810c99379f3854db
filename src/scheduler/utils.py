from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable, List, TypeVar

from .interface import Stop

T = TypeVar("T")


def advance(instant: datetime, seconds: int) -> datetime:
    """Move ``instant`` forward by elapsed seconds.

    Aware instants are stepped in UTC so local times skipped or repeated by a
    daylight saving change are handled the way a real clock would.
    """

    if instant.tzinfo is None:
        return instant + timedelta(seconds=seconds)
    moved = instant.astimezone(timezone.utc) + timedelta(seconds=seconds)
    return moved.astimezone(instant.tzinfo)


def unique(values: Iterable[T]) -> List[T]:
    """Drop duplicates while keeping first-seen order."""

    return list(dict.fromkeys(values))


def chain_floors(floors: List[int], skip_stationary: bool = False) -> List[Stop]:
    """Link consecutive floors into legs: [a, b, c] -> [a->b, b->c]."""

    stops: List[Stop] = []
    for current, following in zip(floors, floors[1:]):
        if skip_stationary and current == following:
            continue
        stops.append(Stop(current, following))
    return stops
