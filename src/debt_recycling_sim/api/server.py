"""FastAPI server — HTTP access to the debt recycling simulator.

Run with:
    uvicorn debt_recycling_sim.api.server:app --reload --port 8000

Or:
    python -m debt_recycling_sim.api.server

Endpoints:
    GET  /context              — self-describing manifest (strategies + schemas)
    GET  /schema               — full JSON Schema for SimulationConfig
    GET  /scenario/defaults    — complete default config as JSON
    POST /simulate             — run a simulation (partial or full nested config)
    POST /simulate/flat        — run a simulation from the flat camelCase fields
    POST /simulate/csv         — year-by-year table as CSV
    POST /simulate/sensitivity — parameter sweep → tornado data
    POST /simulate/narrative   — run + plain-English interpretation
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field, ValidationError

from debt_recycling_sim.api.context import build_context, get_default_scenario, get_scenario_schema
from debt_recycling_sim.api.narrative import generate_narrative
from debt_recycling_sim.config.scenario import SimulationConfig
from debt_recycling_sim.engine.simulation import run_simulation
from debt_recycling_sim.export.table import to_csv_string
from debt_recycling_sim.finance.sensitivity import run_sensitivity

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="Debt Recycling Simulator API",
    version="1.0",
    description=(
        "Compare paying off a home loan (Strategy A) with recycling it into "
        "deductible investment debt (Strategy B). Start by calling GET /context."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class SimulateRequest(BaseModel):
    """Request body for /simulate. All fields optional — defaults used for missing."""
    scenario: dict[str, Any] = Field(
        default_factory=dict,
        description="Partial or full SimulationConfig JSON. Missing fields use defaults. "
                    "Example: {'loans': {'kickstart_from_offset': 0}, 'tax': {'marginal_tax_rate_pct': 32.5}}",
    )


class FlatSimulateRequest(BaseModel):
    """Request body for /simulate/flat."""
    inputs: dict[str, Any] = Field(
        default_factory=dict,
        description="Flat field set, e.g. {'homeLoanStart': 600000, 'projectionYears': 20}.",
    )


class SensitivityRequest(BaseModel):
    """Request body for /simulate/sensitivity."""
    scenario: dict[str, Any] = Field(default_factory=dict)
    sweep_params: list[dict[str, Any]] | None = Field(
        default=None,
        description="Optional override of sweep parameters. "
                    "Format: [{'name': 'Growth', 'path': 'investment.invest_growth_pct', 'low_pct': -0.2, 'high_pct': 0.2}]",
    )


class SimulateResponse(BaseModel):
    """Response from /simulate and /simulate/flat."""
    result: dict[str, Any]
    narrative: str = ""


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _build_scenario(overrides: dict[str, Any]) -> SimulationConfig:
    """Build a SimulationConfig from partial overrides merged onto defaults.

    Raises
    ------
    HTTPException
        422 if the merged config has unknown sections or fields.
    """
    defaults = get_default_scenario()
    _deep_merge(defaults, overrides)
    try:
        return SimulationConfig(**defaults)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False)) from exc


def _deep_merge(base: dict, overrides: dict) -> dict:
    """Recursively merge overrides into base dict."""
    for key, val in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(val, dict):
            _deep_merge(base[key], val)
        else:
            base[key] = val
    return base


def _simulate_response(config: SimulationConfig) -> SimulateResponse:
    result = run_simulation(config)
    return SimulateResponse(result=result.model_dump(), narrative=generate_narrative(result))


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/")
def root():
    """API root — returns a welcome message and pointer to /context."""
    return {
        "name": "Debt Recycling Simulator API",
        "version": "1.0",
        "start_here": "GET /context?detail_level=full",
        "docs": "GET /docs (interactive Swagger UI)",
    }


@app.get("/context")
def get_context(
    detail_level: Literal["compact", "full"] = Query(
        default="full",
        description="'compact' for schemas only, 'full' for strategy overview + formulas + guide",
    ),
):
    """Self-describing context manifest."""
    return build_context(detail_level)


@app.get("/schema")
def get_schema():
    """Full JSON Schema for SimulationConfig."""
    return get_scenario_schema()


@app.get("/scenario/defaults")
def get_defaults():
    """Complete default SimulationConfig as JSON."""
    return get_default_scenario()


@app.post("/simulate", response_model=SimulateResponse)
def simulate(req: SimulateRequest):
    """Run a full simulation.

    Example minimal request:
    ```json
    {"scenario": {"loans": {"kickstart_from_offset": 50000}, "projection": {"projection_years": 30}}}
    ```
    """
    return _simulate_response(_build_scenario(req.scenario))


@app.post("/simulate/flat", response_model=SimulateResponse)
def simulate_flat(req: FlatSimulateRequest):
    """Run a simulation from the flat field set used by the calculator form."""
    try:
        config = SimulationConfig.from_flat(req.inputs)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _simulate_response(config)


@app.post("/simulate/csv", response_class=PlainTextResponse)
def simulate_csv(req: SimulateRequest):
    """Year-by-year comparison table as CSV (raw numbers, no currency formatting)."""
    result = run_simulation(_build_scenario(req.scenario))
    return PlainTextResponse(
        to_csv_string(result.years),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="debt-recycling.csv"'},
    )


@app.post("/simulate/sensitivity")
def simulate_sensitivity(req: SensitivityRequest):
    """Rank inputs by how much they swing the final B − A net wealth advantage."""
    config = _build_scenario(req.scenario)

    sweep_config = None
    if req.sweep_params:
        try:
            sweep_config = [
                (sp.get("name", sp["path"]), sp["path"], sp.get("low_pct", -0.15), sp.get("high_pct", 0.15))
                for sp in req.sweep_params
            ]
        except KeyError as exc:
            raise HTTPException(status_code=422, detail=f"sweep_params entry missing {exc}") from exc

    sensitivity_result = run_sensitivity(config, sweep_config)
    logger.debug("Sensitivity run over %d parameters", len(sensitivity_result.bars))

    return {
        "base_advantage": sensitivity_result.base_advantage,
        "tornado_bars": [
            {
                "param_name": bar.param_name,
                "param_path": bar.param_path,
                "base_value": bar.base_value,
                "low_value": bar.low_value,
                "high_value": bar.high_value,
                "advantage_at_low": bar.advantage_at_low,
                "advantage_at_high": bar.advantage_at_high,
                "delta_advantage": bar.delta_advantage,
            }
            for bar in sensitivity_result.bars
        ],
        "interpretation": (
            "Sorted by absolute impact on final net wealth advantage of Strategy B over A "
            "(largest first). A wide spread means the outcome hinges on that assumption."
        ),
    }


@app.post("/simulate/narrative")
def simulate_with_narrative(req: SimulateRequest):
    """Run simulation and return ONLY the plain-English narrative."""
    result = run_simulation(_build_scenario(req.scenario))
    s = result.summary
    return {
        "narrative": generate_narrative(result),
        "headline_metrics": {
            "final_net_wealth_a": round(s.final_net_wealth_a, 2) if s.final_net_wealth_a is not None else None,
            "final_net_wealth_b": round(s.final_net_wealth_b, 2) if s.final_net_wealth_b is not None else None,
            "final_advantage_b": round(s.final_advantage_b, 2) if s.final_advantage_b is not None else None,
            "debt_free_year": s.debt_free_year,
            "effective_base_monthly_repayment": round(result.years[0].effective_base_monthly_repayment, 2) if result.years else None,
        },
    }


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn

    from debt_recycling_sim.logging_config import setup_logging

    setup_logging()
    uvicorn.run(
        "debt_recycling_sim.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
