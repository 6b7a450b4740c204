"""Context manifest generator — makes the simulator self-describing.

Produces structured context at two detail levels:
  - ``compact``: parameter schemas + descriptions
  - ``full``:    strategy explanation + formulas + interpretation guide

A client reads ``GET /context?detail_level=full`` once, then knows what it
can configure, what to run, and how to read the year-by-year output.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from debt_recycling_sim.config import (
    InvestmentConfig,
    LoanConfig,
    ProjectionConfig,
    PropertyConfig,
    RepaymentConfig,
    SimulationConfig,
    TaxConfig,
)
from debt_recycling_sim.config.base import SectionConfig


# ═══════════════════════════════════════════════════════════════════════════
# Public response models
# ═══════════════════════════════════════════════════════════════════════════

class ParameterInfo(BaseModel):
    """One configurable parameter, machine-readable."""
    name: str
    type: str
    default: Any
    description: str
    constraints: dict[str, Any] = Field(default_factory=dict)


class SectionSchema(BaseModel):
    """Schema for one configuration section (e.g. loans, investment)."""
    section: str
    description: str
    parameters: list[ParameterInfo]


class OutputFieldInfo(BaseModel):
    """One output field, machine-readable."""
    name: str
    type: str
    description: str
    unit: str = ""


class EndpointInfo(BaseModel):
    """Description of one API endpoint."""
    method: str
    path: str
    description: str
    request_body: str = ""
    response: str = ""


class SimulatorContext(BaseModel):
    """Full self-describing context."""
    simulator_name: str
    version: str
    description: str
    strategy_overview: str
    key_formulas: list[dict[str, str]]
    input_sections: list[SectionSchema]
    key_outputs: list[OutputFieldInfo]
    endpoints: list[EndpointInfo]
    interpretation_guide: str


# ═══════════════════════════════════════════════════════════════════════════
# Schema extraction from config sections
# ═══════════════════════════════════════════════════════════════════════════

def _extract_params(model_cls: type[SectionConfig]) -> list[ParameterInfo]:
    """Extract parameter info from a config section class.

    Every numeric input is coerced to ≥ 0, so ``min`` is always 0; ``max``
    appears only for capped fields.
    """
    params: list[ParameterInfo] = []
    for name, field_info in model_cls.model_fields.items():
        constraints: dict[str, Any] = {"min": 0}
        if name in model_cls.UPPER_BOUNDS:
            constraints["max"] = model_cls.UPPER_BOUNDS[name]

        type_str = getattr(field_info.annotation, "__name__", str(field_info.annotation))
        params.append(ParameterInfo(
            name=name,
            type=type_str,
            default=field_info.default,
            description=field_info.description or "",
            constraints=constraints,
        ))
    return params


# ═══════════════════════════════════════════════════════════════════════════
# Context builders
# ═══════════════════════════════════════════════════════════════════════════

_STRATEGY_OVERVIEW = """
Debt Recycling Simulator — two strategies, same household cash

STRATEGY A (baseline):
  Keep paying the home loan with a fixed monthly repayment. Cash stays in the
  offset account, reducing interest on the home loan.

STRATEGY B (debt recycling):
  Optionally move a kickstart amount from offset onto the home loan and redraw
  it straight away as a separate, tax-deductible investment split. Each year,
  however much the home split fell is redrawn into the investment split and
  invested. The portfolio's after-tax cash (distributions, franking credits,
  negative gearing refund) is swept onto the home loan over the next year.

THE QUESTION:
  Does converting non-deductible home debt into deductible investment debt
  leave the household wealthier, and in which year could the portfolio be sold
  (after CGT) to clear every loan?
"""

_INTERPRETATION_GUIDE = """
HOW TO INTERPRET RESULTS:

1. NET WEALTH A vs B:
   House value + cash/portfolio − debt. final_advantage_b > 0 means recycling
   came out ahead at the end of the projection.

2. DEBT-FREE YEAR:
   First year in which surplus_if_liquidated ≥ 0 — selling the whole portfolio
   and paying CGT (50 % discount) would clear both loans. None = not within the
   projection.

3. REPAYMENT FLOOR:
   If the base repayment is below the minimum P&I repayment on day-1 debt, the
   minimum is used instead (effective_base_monthly_repayment).

4. INCOME SWEEP:
   after_tax_cash_to_home_loan can be negative when tax on the portfolio income
   exceeds the cash it pays.

COMMON ANALYSIS PATTERNS:
  - "What if returns are lower?" → lower investment.invest_growth_pct, re-run
  - "Does it still work at a 30 % tax rate?" → tax.marginal_tax_rate_pct = 30
  - "Which assumption matters most?" → POST /simulate/sensitivity
"""

_KEY_FORMULAS = [
    {
        "name": "Level P&I repayment",
        "formula": "P × r / (1 − (1+r)^−n),  r = rate/12, n = years × 12",
        "meaning": "Minimum repayment; also each split's monthly fair share",
    },
    {
        "name": "Home split interest",
        "formula": "max(0, home_balance − offset_balance) × rate / 12",
        "meaning": "Offset reduces interest on the home split only",
    },
    {
        "name": "After-tax income sweep",
        "formula": "cash − ((unfranked + franked/0.7 − avg_invest_debt × rate) × marginal − franking_credit)",
        "meaning": "Cash directed to the home loan next year",
    },
    {
        "name": "Redraw",
        "formula": "max(0, home_balance_start_of_year − home_balance_end_of_year)",
        "meaning": "Non-deductible paydown converted into deductible investment debt",
    },
    {
        "name": "Surplus if liquidated",
        "formula": "portfolio − max(0, portfolio − cost_base) × 0.5 × marginal − total_debt",
        "meaning": "≥ 0 → the portfolio could clear all debt after CGT",
    },
]


_KEY_OUTPUTS = [
    OutputFieldInfo(name="summary.final_net_wealth_a", type="float|None", description="Strategy A net wealth in the final year", unit="$"),
    OutputFieldInfo(name="summary.final_net_wealth_b", type="float|None", description="Strategy B net wealth in the final year", unit="$"),
    OutputFieldInfo(name="summary.final_advantage_b", type="float|None", description="B − A final net wealth", unit="$"),
    OutputFieldInfo(name="summary.debt_free_year", type="int|None", description="First year surplus_if_liquidated ≥ 0", unit="year"),
    OutputFieldInfo(name="summary.frozen_required_repayment_b", type="float", description="Minimum P&I repayment on day-1 debt", unit="$/mo"),
    OutputFieldInfo(name="years[].home_loan_a", type="float", description="Strategy A home loan at year end", unit="$"),
    OutputFieldInfo(name="years[].home_loan_b", type="float", description="Strategy B home split at year end", unit="$"),
    OutputFieldInfo(name="years[].invest_loan_b", type="float", description="Strategy B investment split at year end (pre-redraw)", unit="$"),
    OutputFieldInfo(name="years[].portfolio_b", type="float", description="Portfolio value at year end (pre-redraw)", unit="$"),
    OutputFieldInfo(name="years[].surplus_if_liquidated", type="float", description="After-tax portfolio minus all debt", unit="$"),
]


_ENDPOINTS = [
    EndpointInfo(
        method="GET", path="/context",
        description="Returns this self-describing context. detail_level='compact' for schemas only.",
        response="SimulatorContext",
    ),
    EndpointInfo(
        method="GET", path="/schema",
        description="JSON schema for SimulationConfig.",
        response="JSON Schema object",
    ),
    EndpointInfo(
        method="GET", path="/scenario/defaults",
        description="Complete default SimulationConfig as JSON.",
        response="SimulationConfig JSON",
    ),
    EndpointInfo(
        method="POST", path="/simulate",
        description="Run a simulation. Partial nested config; missing fields use defaults.",
        request_body="{'scenario': partial SimulationConfig}",
        response="SimulationResult + narrative",
    ),
    EndpointInfo(
        method="POST", path="/simulate/flat",
        description="Run a simulation from the flat camelCase field set (homeLoanStart, ...).",
        request_body="{'inputs': {field: number}}",
        response="SimulationResult + narrative",
    ),
    EndpointInfo(
        method="POST", path="/simulate/csv",
        description="Run a simulation and download the year-by-year table as CSV.",
        request_body="{'scenario': partial SimulationConfig}",
        response="text/csv",
    ),
    EndpointInfo(
        method="POST", path="/simulate/sensitivity",
        description="One-at-a-time parameter sweeps ranked by impact on final B − A advantage.",
        request_body="{'scenario': ..., 'sweep_params': optional}",
        response="Tornado bars",
    ),
    EndpointInfo(
        method="POST", path="/simulate/narrative",
        description="Run a simulation and return only the plain-English summary.",
        request_body="{'scenario': partial SimulationConfig}",
        response="narrative + headline metrics",
    ),
]


_INPUT_SECTIONS: list[tuple[str, type[SectionConfig], str]] = [
    ("home", PropertyConfig, "Home value and growth"),
    ("loans", LoanConfig, "Home loan, offset, kickstart, term and rates"),
    ("repayment", RepaymentConfig, "Fixed household repayment and voluntary extra"),
    ("investment", InvestmentConfig, "Portfolio growth, yield and franking"),
    ("tax", TaxConfig, "Marginal tax rate incl. Medicare levy"),
    ("projection", ProjectionConfig, "Projection horizon"),
]


# ═══════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════

def build_context(detail_level: Literal["compact", "full"] = "full") -> SimulatorContext:
    """Build the self-describing context manifest.

    Parameters
    ----------
    detail_level : "compact" | "full"
        compact — parameter schemas + descriptions only
        full    — includes strategy overview, formulas, interpretation guide
    """
    sections = [
        SectionSchema(section=name, description=desc, parameters=_extract_params(model_cls))
        for name, model_cls, desc in _INPUT_SECTIONS
    ]
    full = detail_level == "full"

    return SimulatorContext(
        simulator_name="Debt Recycling Simulator",
        version="1.0",
        description=(
            "Deterministic month-by-month projection comparing paying off a home loan "
            "with recycling it into deductible investment debt. Outputs year-by-year "
            "balances, net wealth for both strategies and the debt-free crossover year."
        ),
        strategy_overview=_STRATEGY_OVERVIEW.strip() if full else "",
        key_formulas=_KEY_FORMULAS if full else [],
        input_sections=sections,
        key_outputs=_KEY_OUTPUTS,
        endpoints=_ENDPOINTS,
        interpretation_guide=_INTERPRETATION_GUIDE.strip() if full else "",
    )


def get_scenario_schema() -> dict:
    """Return the full JSON Schema for SimulationConfig."""
    return SimulationConfig.model_json_schema()


def get_default_scenario() -> dict:
    """Return the default SimulationConfig as a JSON-serializable dict."""
    return SimulationConfig().model_dump()
