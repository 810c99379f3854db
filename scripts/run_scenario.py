"""CLI for running elevator sequence simulations from JSON configs or an interactive wizard."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

from pydantic import ValidationError

from simulation import ConfigurationError, ScenarioModel, SequenceModel, SimulationResult, load_scenario, simulate
from simulation.schema import parse_time

Ask = Callable[[str], str]


def ask_value(ask: Ask, question: str, default: object, convert: Callable[[str], object]) -> object:
    """Ask until the answer converts; an empty answer keeps ``default``."""

    while True:
        answer = ask(f"{question} [{default}]: ").strip()
        if not answer:
            return default
        try:
            return convert(answer)
        except ValueError:
            print(f'Invalid value "{answer}".')


def _number(answer: str) -> int:
    value = int(answer)
    if value < 0:
        raise ValueError(answer)
    return value


def _positive(answer: str) -> int:
    value = int(answer)
    if value < 1:
        raise ValueError(answer)
    return value


def _time(answer: str) -> str:
    parse_time(answer)
    return answer


def _time_from(start: str) -> Callable[[str], str]:
    def convert(answer: str) -> str:
        if parse_time(answer) < parse_time(start):
            raise ValueError(answer)
        return answer

    return convert


def _floors(floor_count: int) -> Callable[[str], List[int]]:
    def convert(answer: str) -> List[int]:
        floors = [int(part) for part in answer.split(",") if part.strip()]
        if not floors or any(not 0 <= floor < floor_count for floor in floors):
            raise ValueError(answer)
        return sorted(set(floors))

    return convert


def prompt_sequences(ask: Ask, floor_count: int) -> Dict[str, SequenceModel]:
    sequences: Dict[str, SequenceModel] = {}
    question = "New sequence name (press <return> to use default sequences): "
    while True:
        name = ask(question).strip()
        question = "Add another sequence? Enter the sequence name (or press <return> to stop): "
        if not name:
            return sequences
        if name in sequences:
            print(f'The "{name}" sequence already exists.')
            continue
        sequences[name] = prompt_sequence(ask, floor_count)


def prompt_sequence(ask: Ask, floor_count: int) -> SequenceModel:
    """Ask for one sequence, starting over when the answers do not fit together."""

    floor_choices = _floors(floor_count)
    while True:
        try:
            return SequenceModel(
                interval=ask_value(ask, "Sequence interval in minutes", 5, _positive),
                start=ask_value(ask, "Sequence start time (24h format, example: 13:30)", "09:00", _time),
                end=ask_value(ask, "Sequence end time (24h format, example: 13:30)", "11:00", _time),
                origins=ask_value(ask, "Start floors (comma separated)", [0], floor_choices),
                destinations=ask_value(ask, "End floors (comma separated)", [min(3, floor_count - 1)], floor_choices),
            )
        except ValidationError as exc:
            print(f"Invalid sequence: {exc.errors()[0]['msg']}")


def prompt_scenario(ask: Ask, base: ScenarioModel) -> ScenarioModel:
    """Interactive wizard; every answer left empty keeps the value from ``base``."""

    while True:
        values = base.model_dump()
        values["elevators"] = ask_value(ask, "Number of elevators for simulation?", base.elevators, _positive)
        values["floors"] = ask_value(ask, "Number of floors for simulation?", base.floors, _positive)
        values["travel_time"] = ask_value(ask, "Travel time in seconds between floors?", base.travel_time, _positive)
        values["floor_time"] = ask_value(ask, "Floor waiting time in seconds?", base.floor_time, _number)
        values["start"] = ask_value(ask, "Simulation start time (24h format, example: 09:00)", base.start, _time)
        values["end"] = ask_value(
            ask, "Simulation end time (24h format, example: 20:00)", base.end, _time_from(values["start"])
        )
        sequences = prompt_sequences(ask, values["floors"])
        if sequences:
            values["sequences"] = {name: model.model_dump() for name, model in sequences.items()}
        try:
            return ScenarioModel.model_validate(values)
        except ValidationError as exc:
            print(f"Invalid scenario: {exc.errors()[0]['msg']}")


def apply_overrides(scenario: ScenarioModel, args: argparse.Namespace) -> ScenarioModel:
    overrides = {
        "elevators": args.elevators,
        "floors": args.floors,
        "travel_time": args.travel_time,
        "floor_time": args.floor_time,
        "start": args.start,
        "end": args.end,
        "policy": args.policy,
    }
    values = scenario.model_dump()
    values.update({key: value for key, value in overrides.items() if value is not None})
    return ScenarioModel.model_validate(values)


def render_text_table(headers: List[str], rows: List[List[str]]) -> str:
    widths = [len(header) for header in headers]
    for row in rows:
        widths = [max(width, len(cell)) for width, cell in zip(widths, row)]

    def line(cells: List[str]) -> str:
        return "║ " + " │ ".join(cell.ljust(width) for cell, width in zip(cells, widths)) + " ║"

    top = "╔═" + "═╤═".join("═" * width for width in widths) + "═╗"
    middle = "╠═" + "═╪═".join("═" * width for width in widths) + "═╣"
    bottom = "╚═" + "═╧═".join("═" * width for width in widths) + "═╝"
    return "\n".join([top, line(headers), middle] + [line(row) for row in rows] + [bottom])


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, nargs="?", help="Path to a JSON scenario configuration file")
    parser.add_argument("--interactive", action="store_true", help="Ask for every value before running")
    parser.add_argument("--elevators", type=int, help="Number of elevators")
    parser.add_argument("--floors", type=int, help="Number of floors")
    parser.add_argument("--travel-time", type=int, help="Seconds to travel between two floors")
    parser.add_argument("--floor-time", type=int, help="Seconds spent waiting at each stop")
    parser.add_argument("--start", help="Simulation start time (HH:MM)")
    parser.add_argument("--end", help="Simulation end time (HH:MM)")
    parser.add_argument("--policy", help="Dispatch policy: merge or single_call")
    parser.add_argument("--output", type=Path, help="Optional file path to write the result table as JSON")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING...)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        scenario = load_scenario(args.config) if args.config else ScenarioModel()
        scenario = apply_overrides(scenario, args)
        if args.interactive:
            print("Elevators simulator")
            print("Enter the requested values to start the simulation, leave them empty to use the defaults.")
            scenario = prompt_scenario(input, scenario)
        result: SimulationResult = simulate(scenario.to_config())
    except (ValidationError, ConfigurationError) as exc:
        print(f"Invalid scenario: {exc}", file=sys.stderr)
        return 2

    print(render_text_table(result.headers(), result.table()))
    save_results(
        args.output,
        {
            "scenario": scenario.name or (args.config.stem if args.config else "default"),
            "description": scenario.description,
            "headers": result.headers(),
            "rows": result.table(),
            "dropped_calls": result.dropped_calls,
        },
    )
    if args.output:
        print(f"Saved table to {args.output}")
    print("Simulation completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
