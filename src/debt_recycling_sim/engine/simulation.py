"""Simulation driver — builds day-1 state, runs the month loop, summarises.

Entry point for every caller (API, export, sensitivity).  A run is a pure
function of its ``SimulationConfig``: no I/O, no shared state, and two runs
with the same config produce identical results.
"""

from __future__ import annotations

import logging

from debt_recycling_sim.config.scenario import SimulationConfig
from debt_recycling_sim.engine.rollover import roll_over_year
from debt_recycling_sim.engine.state import (
    FrozenRepayments,
    LoanSplit,
    OffsetAccount,
    Portfolio,
    SimulationState,
    StrategyAState,
    StrategyBState,
    YearStart,
)
from debt_recycling_sim.engine.stepper import step_month
from debt_recycling_sim.finance.amortization import level_payment
from debt_recycling_sim.models.results import RunSummary, SimulationResult, YearSnapshot

logger = logging.getLogger(__name__)


def initial_state(config: SimulationConfig) -> SimulationState:
    """Day-1 state for both strategies, kickstart applied, repayments frozen.

    Kickstart (Strategy B only): up to ``kickstart_from_offset`` — capped at
    the offset and home balances — leaves the offset, pays down the home
    split, and is immediately redrawn into the investment split and invested.

    The starting cost base is ``starting_portfolio`` plus the kickstart.
    ``existing_invest_loan`` is debt, not capital invested, and is never
    added to the cost base.
    """
    loans = config.loans
    term_years = loans.remaining_term_years_start

    home_b = loans.home_loan_start
    offset_b = loans.offset_balance_start
    invest_b = loans.existing_invest_loan
    portfolio = config.investment.starting_portfolio
    cost_base = portfolio

    kickstart = min(loans.kickstart_from_offset, offset_b, home_b)
    if kickstart > 0:
        home_b -= kickstart
        offset_b -= kickstart
        invest_b += kickstart
        portfolio += kickstart
        cost_base += kickstart
        logger.debug("Kickstart of %.2f moved from offset into investment", kickstart)
    else:
        kickstart = 0.0

    total_debt_b = home_b + invest_b
    if invest_b > 0:
        weighted_rate_b = (home_b * loans.home_rate_pct + invest_b * loans.invest_loan_rate_pct) / total_debt_b
    else:
        weighted_rate_b = loans.home_rate_pct

    frozen = FrozenRepayments(
        required_a=level_payment(loans.home_loan_start, loans.home_rate_pct, term_years),
        required_b=level_payment(total_debt_b, weighted_rate_b, term_years),
    )
    logger.debug(
        "Frozen minimum repayments: A %.2f/mo, B %.2f/mo",
        frozen.required_a, frozen.required_b,
    )

    a = StrategyAState(
        home=LoanSplit("home", loans.home_loan_start, loans.home_rate_pct),
        offset=OffsetAccount(loans.offset_balance_start),
    )
    b = StrategyBState(
        home=LoanSplit("home", home_b, loans.home_rate_pct),
        invest=LoanSplit("investment", invest_b, loans.invest_loan_rate_pct),
        offset=OffsetAccount(offset_b),
        portfolio=Portfolio(balance=portfolio, cost_base=cost_base),
    )

    return SimulationState(
        month=0,
        remaining_term_months=term_years * 12,
        a=a,
        b=b,
        year_start=YearStart(home_loan=home_b, invest_loan=invest_b, portfolio=portfolio),
        income_sweep_monthly=0.0,
        frozen=frozen,
        kickstart_used=kickstart,
    )


def run_simulation(config: SimulationConfig | None = None) -> SimulationResult:
    """Run the full projection.

    Returns one ``YearSnapshot`` per projection year plus a ``RunSummary``.
    ``debt_free_year`` is the first year in which selling the portfolio
    (after CGT) would clear both loans.
    """
    if config is None:
        config = SimulationConfig()

    state = initial_state(config)
    total_months = config.projection.projection_years * 12

    years: list[YearSnapshot] = []
    for _ in range(total_months):
        state = step_month(state, config)
        if state.month % 12 == 0:
            state, snapshot = roll_over_year(state, config)
            years.append(snapshot)

    summary = _summarise(config, state, years)
    logger.info(
        "Simulated %d years: advantage B−A %s, debt-free year %s",
        len(years),
        f"{summary.final_advantage_b:.2f}" if summary.final_advantage_b is not None else "n/a",
        summary.debt_free_year,
    )
    return SimulationResult(years=years, summary=summary)


def _summarise(config: SimulationConfig, state: SimulationState, years: list[YearSnapshot]) -> RunSummary:
    last = years[-1] if years else None
    debt_free_year = next(
        (snap.year for snap in years if snap.surplus_if_liquidated >= 0),
        None,
    )
    return RunSummary(
        projection_years=config.projection.projection_years,
        final_net_wealth_a=last.net_wealth_a if last else None,
        final_net_wealth_b=last.net_wealth_b if last else None,
        final_advantage_b=last.net_wealth_b - last.net_wealth_a if last else None,
        debt_free_year=debt_free_year,
        kickstart_used=state.kickstart_used,
        frozen_required_repayment_a=state.frozen.required_a,
        frozen_required_repayment_b=state.frozen.required_b,
        repayment_floor_applied=config.repayment.base_monthly_repayment < state.frozen.required_b,
        total_interest_a=state.a.interest_paid,
        total_interest_b=state.b.interest_paid,
        total_redrawn=state.total_redrawn,
    )
