from datetime import datetime

from scheduler import NearestElevatorDispatcher, Stop
from simulation import Elevator, ElevatorState


def test_equidistant_prefers_least_travelled():
    first = Elevator("Elevator 1", floor=2, cumulative_distance=5)
    second = Elevator("Elevator 2", floor=2, cumulative_distance=3)
    assert NearestElevatorDispatcher().select([first, second], Stop(0, 1)) is second


def test_full_tie_keeps_first_encountered():
    first = Elevator("Elevator 1", floor=2, cumulative_distance=3)
    second = Elevator("Elevator 2", floor=2, cumulative_distance=3)
    assert NearestElevatorDispatcher().select([first, second], Stop(0, 1)) is first


def test_nearer_car_beats_less_used_car():
    far = Elevator("Elevator 1", floor=3)
    near = Elevator("Elevator 2", floor=1, cumulative_distance=50)
    assert NearestElevatorDispatcher().select([far, near], Stop(0, 1)) is near


def test_car_at_origin_is_taken_immediately():
    busy_traveller = Elevator("Elevator 1", floor=0, cumulative_distance=10)
    fresh = Elevator("Elevator 2", floor=0)
    assert NearestElevatorDispatcher().select([busy_traveller, fresh], Stop(0, 1)) is busy_traveller


def test_busy_elevators_are_skipped():
    busy = Elevator(
        "Elevator 1",
        floor=0,
        state=ElevatorState.BUSY,
        next_available_at=datetime(2024, 1, 1, 9, 1),
    )
    idle = Elevator("Elevator 2", floor=3)
    dispatcher = NearestElevatorDispatcher()
    assert dispatcher.select([busy, idle], Stop(0, 1)) is idle
    assert dispatcher.select([busy], Stop(0, 1)) is None


def test_route_prepends_repositioning_leg():
    dispatcher = NearestElevatorDispatcher()
    stops = [Stop(0, 2)]
    assert dispatcher.route(Elevator("Elevator 1", floor=3), stops) == [Stop(3, 0), Stop(0, 2)]
    assert dispatcher.route(Elevator("Elevator 1", floor=0), stops) == [Stop(0, 2)]
