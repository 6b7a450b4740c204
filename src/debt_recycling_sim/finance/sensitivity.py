"""Sensitivity analysis — which assumptions decide whether recycling pays.

Two tools, both measuring the final net-wealth advantage of Strategy B
over Strategy A (``final_net_wealth_b − final_net_wealth_a``):

  - ``run_sensitivity``  — one-at-a-time ± sweeps → tornado bars
  - ``sweep_parameter``  — evenly spaced grid over one input → curve, with
    ``find_break_even_value`` locating where the advantage crosses zero

Default sweep set:
  - investment.invest_growth_pct ± 20%
  - investment.invest_yield_pct ± 20%
  - loans.home_rate_pct ± 15%
  - loans.invest_loan_rate_pct ± 15%
  - tax.marginal_tax_rate_pct ± 15%
  - investment.franked_portion_pct ± 25%
  - repayment.base_monthly_repayment ± 10%
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from debt_recycling_sim.config.base import SectionConfig
from debt_recycling_sim.config.scenario import SimulationConfig
from debt_recycling_sim.engine.simulation import run_simulation


@dataclass(frozen=True)
class TornadoBar:
    """One bar in the tornado chart."""

    param_name: str
    """Human-readable parameter name."""

    param_path: str
    """Dot-path into SimulationConfig (e.g. 'loans.home_rate_pct')."""

    base_value: float
    low_value: float
    high_value: float

    advantage_at_low: float
    """Final B − A net wealth when param = low_value."""

    advantage_at_high: float
    """Final B − A net wealth when param = high_value."""

    delta_advantage: float
    """abs(advantage_at_high − advantage_at_low) — total swing width."""


@dataclass
class SensitivityResult:
    """Complete sensitivity analysis output."""

    base_advantage: float
    bars: list[TornadoBar] = field(default_factory=list)
    """Sorted by delta_advantage (descending)."""


@dataclass
class SweepResult:
    """Advantage and debt-free year across a grid of values for one input."""

    param_path: str
    values: list[float]
    advantages: list[float]
    debt_free_years: list[int | None]


DEFAULT_SWEEPS: list[tuple[str, str, float, float]] = [
    ("Investment growth", "investment.invest_growth_pct", -0.20, 0.20),
    ("Investment yield", "investment.invest_yield_pct", -0.20, 0.20),
    ("Home loan rate", "loans.home_rate_pct", -0.15, 0.15),
    ("Investment loan rate", "loans.invest_loan_rate_pct", -0.15, 0.15),
    ("Marginal tax rate", "tax.marginal_tax_rate_pct", -0.15, 0.15),
    ("Franked portion", "investment.franked_portion_pct", -0.25, 0.25),
    ("Base monthly repayment", "repayment.base_monthly_repayment", -0.10, 0.10),
]


def _get_value(config: SimulationConfig, path: str) -> float:
    """Read a ``section.field`` value.

    Raises AttributeError unless ``path`` names an input field of a config
    section (attributes such as ``model_config`` do not count).
    """
    section_name, _, name = path.partition(".")
    section = getattr(config, section_name) if section_name in SimulationConfig.model_fields else None
    if not isinstance(section, SectionConfig) or name not in type(section).model_fields:
        raise AttributeError(f"Unknown parameter path: {path!r}")
    return float(getattr(section, name))


def _with_value(config: SimulationConfig, path: str, value: float) -> SimulationConfig:
    """Copy of ``config`` with one field replaced.

    Config models are frozen, so the copy is rebuilt through validation —
    int fields and percentage caps are re-applied to the swept value.
    """
    section, _, name = path.partition(".")
    data = config.model_dump()
    data[section][name] = value
    return SimulationConfig(**data)


def _advantage(config: SimulationConfig) -> tuple[float, int | None]:
    summary = run_simulation(config).summary
    return summary.final_advantage_b or 0.0, summary.debt_free_year


def run_sensitivity(
    config: SimulationConfig,
    sweeps: list[tuple[str, str, float, float]] | None = None,
) -> SensitivityResult:
    """Vary one input at a time and rank inputs by their swing on the advantage.

    Parameters
    ----------
    config : SimulationConfig
        Base case.
    sweeps : list[tuple[name, path, low_pct, high_pct]] | None
        Parameter sweeps. None = use DEFAULT_SWEEPS.  Unknown paths are skipped.
    """
    if sweeps is None:
        sweeps = DEFAULT_SWEEPS

    base_advantage, _ = _advantage(config)
    bars: list[TornadoBar] = []

    for name, path, low_pct, high_pct in sweeps:
        try:
            base_val = _get_value(config, path)
        except AttributeError:
            continue

        low_val = base_val * (1 + low_pct)
        high_val = base_val * (1 + high_pct)
        adv_low, _ = _advantage(_with_value(config, path, low_val))
        adv_high, _ = _advantage(_with_value(config, path, high_val))

        bars.append(TornadoBar(
            param_name=name,
            param_path=path,
            base_value=round(base_val, 4),
            low_value=round(low_val, 4),
            high_value=round(high_val, 4),
            advantage_at_low=round(adv_low, 2),
            advantage_at_high=round(adv_high, 2),
            delta_advantage=round(abs(adv_high - adv_low), 2),
        ))

    bars.sort(key=lambda b: b.delta_advantage, reverse=True)
    return SensitivityResult(base_advantage=round(base_advantage, 2), bars=bars)


def sweep_parameter(
    config: SimulationConfig,
    path: str,
    low: float,
    high: float,
    steps: int = 11,
) -> SweepResult:
    """Run the simulation at ``steps`` evenly spaced values of one input.

    Raises
    ------
    ValueError
        If ``path`` does not name a config field or ``steps < 2``.
    """
    if steps < 2:
        raise ValueError("steps must be at least 2")
    try:
        _get_value(config, path)
    except AttributeError as exc:
        raise ValueError(f"Unknown parameter path: {path!r}") from exc

    values = np.linspace(low, high, steps)
    advantages: list[float] = []
    debt_free_years: list[int | None] = []
    for value in values:
        adv, debt_free = _advantage(_with_value(config, path, float(value)))
        advantages.append(adv)
        debt_free_years.append(debt_free)

    return SweepResult(
        param_path=path,
        values=[float(v) for v in values],
        advantages=advantages,
        debt_free_years=debt_free_years,
    )


def find_break_even_value(sweep: SweepResult) -> float | None:
    """Input value at which the advantage first crosses zero.

    Linear interpolation between the two grid points that bracket the sign
    change.  None if the advantage never changes sign over the grid.
    """
    values = np.asarray(sweep.values, dtype=float)
    adv = np.asarray(sweep.advantages, dtype=float)
    if adv.size == 0:
        return None

    zeros = np.flatnonzero(adv == 0)
    crossings = np.flatnonzero(np.sign(adv[:-1]) * np.sign(adv[1:]) < 0)
    if zeros.size == 0 and crossings.size == 0:
        return None
    if zeros.size and (crossings.size == 0 or zeros[0] <= crossings[0]):
        return float(values[zeros[0]])

    i = crossings[0]
    x0, x1 = values[i], values[i + 1]
    y0, y1 = adv[i], adv[i + 1]
    return float(x0 + (x1 - x0) * (-y0) / (y1 - y0))
