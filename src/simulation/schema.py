"""Validation of raw scenario input coming from JSON files, forms or prompts."""
from __future__ import annotations

import json
import re
from datetime import date, datetime, time
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .config import SimulationConfig
from .sequence import Sequence

TIME_PATTERN = re.compile(r"^(?:2[0-3]|[01][0-9]):[0-5][0-9]$")


def parse_time(value: str) -> time:
    """Parse a 24h ``HH:MM`` string."""

    if not TIME_PATTERN.match(value):
        raise ValueError(f'Invalid time "{value}"')
    return datetime.strptime(value, "%H:%M").time()


class SequenceModel(BaseModel):
    interval: int = Field(5, gt=0)
    start: str = "09:00"
    end: str = "11:00"
    origins: List[int] = Field(default_factory=lambda: [0], min_length=1)
    destinations: List[int] = Field(default_factory=lambda: [3], min_length=1)

    @field_validator("start", "end")
    @classmethod
    def check_time(cls, value: str) -> str:
        parse_time(value)
        return value

    @field_validator("origins", "destinations")
    @classmethod
    def check_floors(cls, value: List[int]) -> List[int]:
        if any(floor < 0 for floor in value):
            raise ValueError("Floors cannot be negative")
        return value

    @model_validator(mode="after")
    def check_window(self) -> "SequenceModel":
        if parse_time(self.end) < parse_time(self.start):
            raise ValueError("Sequence end time is before its start time")
        return self

    def to_sequence(self, name: str) -> Sequence:
        return Sequence.build(
            name=name,
            interval_minutes=self.interval,
            active_from=parse_time(self.start),
            active_until=parse_time(self.end),
            origins=self.origins,
            destinations=self.destinations,
        )


class ScenarioModel(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    elevators: int = Field(3, gt=0)
    floors: int = Field(4, gt=0)
    travel_time: int = Field(5, gt=0)
    floor_time: int = Field(20, ge=0)
    start: str = "09:00"
    end: str = "20:00"
    policy: str = "merge"
    timezone: Optional[str] = None
    day: Optional[date] = None
    sequences: Dict[str, SequenceModel] = Field(default_factory=dict)

    @field_validator("start", "end")
    @classmethod
    def check_time(cls, value: str) -> str:
        parse_time(value)
        return value

    @model_validator(mode="after")
    def check_scenario(self) -> "ScenarioModel":
        if parse_time(self.end) < parse_time(self.start):
            raise ValueError("Simulation end time is before its start time")
        for name, sequence in self.sequences.items():
            for floor in sequence.origins + sequence.destinations:
                if floor >= self.floors:
                    raise ValueError(f"Floor {floor} of sequence '{name}' is invalid")
        return self

    def to_config(self) -> SimulationConfig:
        return SimulationConfig(
            elevator_count=self.elevators,
            floor_count=self.floors,
            travel_time=self.travel_time,
            floor_time=self.floor_time,
            start_time=parse_time(self.start),
            end_time=parse_time(self.end),
            sequences={name: model.to_sequence(name) for name, model in self.sequences.items()},
            dispatch_policy=self.policy,
            timezone=self.timezone,
            day=self.day,
        )


def load_scenario(path: Path) -> ScenarioModel:
    return ScenarioModel.model_validate(json.loads(Path(path).read_text()))
