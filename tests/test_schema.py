import json
from datetime import time

import pytest
from pydantic import ValidationError

from simulation import ScenarioModel, SequenceModel, load_scenario
from simulation.schema import parse_time


def test_parse_time_accepts_24h_clock():
    assert parse_time("09:00") == time(9, 0)
    assert parse_time("23:59") == time(23, 59)
    for value in ("9:00", "24:00", "12:60", "noon"):
        with pytest.raises(ValueError):
            parse_time(value)


def test_scenario_converts_to_config():
    scenario = ScenarioModel(
        elevators=2,
        floors=5,
        travel_time=3,
        floor_time=10,
        start="08:30",
        end="09:30",
        sequences={"Lunch": SequenceModel(interval=15, start="08:30", end="09:00", origins=[4], destinations=[0])},
    )
    config = scenario.to_config()
    config.validate()

    assert config.elevator_count == 2
    assert config.start_time == time(8, 30)
    assert config.end_time == time(9, 30)
    sequence = config.sequences["Lunch"]
    assert sequence.interval_minutes == 15
    assert sequence.origins == frozenset({4})
    assert sequence.active_until == time(9, 0)


def test_defaults_leave_sequences_empty():
    config = ScenarioModel().to_config()
    assert config.sequences == {}
    assert config.elevator_count == 3
    assert config.floor_count == 4


@pytest.mark.parametrize(
    "payload",
    [
        {"elevators": 0},
        {"travel_time": -1},
        {"start": "25:00"},
        {"start": "12:00", "end": "11:00"},
        {"sequences": {"S": {"interval": 0}}},
        {"sequences": {"S": {"origins": []}}},
        {"sequences": {"S": {"origins": [-1]}}},
        {"sequences": {"S": {"start": "10:00", "end": "09:00"}}},
        {"floors": 2, "sequences": {"S": {"origins": [0], "destinations": [2]}}},
    ],
)
def test_invalid_payloads_are_rejected(payload):
    with pytest.raises(ValidationError):
        ScenarioModel.model_validate(payload)


def test_load_scenario(tmp_path):
    path = tmp_path / "scenario.json"
    path.write_text(
        json.dumps(
            {
                "name": "small",
                "elevators": 1,
                "floors": 2,
                "end": "09:10",
                "sequences": {"S": {"interval": 5, "start": "09:00", "end": "09:10", "origins": [0], "destinations": [1]}},
            }
        )
    )
    scenario = load_scenario(path)
    assert scenario.name == "small"
    assert scenario.sequences["S"].destinations == [1]
