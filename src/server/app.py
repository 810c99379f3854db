from __future__ import annotations

from html import escape

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from simulation import ConfigurationError, ScenarioModel, SimulationConfig, SimulationResult, default_sequences, simulate


def run_scenario(scenario: ScenarioModel) -> SimulationResult:
    try:
        return simulate(scenario.to_config())
    except ConfigurationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


def render_table(result: SimulationResult) -> str:
    header_cells = "".join(f"<th>{escape(header)}</th>" for header in result.headers())
    body_rows = "\n".join(
        "<tr>" + "".join(f"<td>{escape(cell)}</td>" for cell in row) + "</tr>" for row in result.table()
    )
    return (
        "<!DOCTYPE html>\n"
        "<html>\n<head><meta charset=\"utf-8\"><title>Elevators simulator</title></head>\n<body>\n"
        "<h1>Elevators simulator</h1>\n"
        f"<table>\n<thead><tr>{header_cells}</tr></thead>\n<tbody>\n{body_rows}\n</tbody>\n</table>\n"
        "</body>\n</html>\n"
    )


app = FastAPI(title="Lift Sequencer Simulation API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", response_class=HTMLResponse)
async def simulator() -> str:
    return render_table(simulate(SimulationConfig()))


@app.post("/simulate")
async def simulate_scenario(scenario: ScenarioModel) -> dict:
    result = run_scenario(scenario)
    return {
        "headers": result.headers(),
        "rows": result.table(),
        "dropped_calls": result.dropped_calls,
    }


@app.post("/simulate/html", response_class=HTMLResponse)
async def simulate_scenario_html(scenario: ScenarioModel) -> str:
    return render_table(run_scenario(scenario))


@app.get("/sequences/default")
async def get_default_sequences() -> list:
    return [
        {
            "name": sequence.name,
            "interval": sequence.interval_minutes,
            "start": sequence.active_from.strftime("%H:%M"),
            "end": sequence.active_until.strftime("%H:%M"),
            "origins": sorted(sequence.origins),
            "destinations": sorted(sequence.destinations),
        }
        for sequence in default_sequences().values()
    ]


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
