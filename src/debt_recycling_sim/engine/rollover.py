"""Annual rollover — year-end snapshot, income sweep, growth, and redraw.

Order matters:
  1. snapshot balances (before redraw)
  2. income sweep from the *opening* portfolio and the *average* investment debt
  3. grow the opening portfolio
  4. net wealth + CGT debt-free test on the pre-redraw portfolio
  5. redraw = how far the home split fell this year → investment split,
     portfolio and cost base
  6. next year's monthly sweep = this year's after-tax cash ÷ 12
"""

from __future__ import annotations

import logging
from dataclasses import replace

from debt_recycling_sim.config.scenario import SimulationConfig
from debt_recycling_sim.engine.state import Portfolio, SimulationState, YearStart
from debt_recycling_sim.finance.tax import (
    after_tax_liquidation_value,
    compute_income_sweep,
)
from debt_recycling_sim.models.results import YearSnapshot

logger = logging.getLogger(__name__)


def house_value_at(config: SimulationConfig, year: int) -> float:
    """Home value after ``year`` years of compound growth."""
    home = config.home
    return home.home_value_start * (1 + home.home_value_growth_pct / 100) ** year


def roll_over_year(state: SimulationState, config: SimulationConfig) -> tuple[SimulationState, YearSnapshot]:
    """Close the current projection year.

    Parameters
    ----------
    state : SimulationState
        State after the 12th month of the year has been stepped.
    config : SimulationConfig
        Run inputs.

    Returns
    -------
    tuple[SimulationState, YearSnapshot]
        State primed for next year (redraw applied, sweep updated) and the
        snapshot of the year just closed.
    """
    inv = config.investment
    rep = config.repayment
    marginal = config.tax.marginal_tax_rate_pct
    year = state.month // 12
    a, b, start = state.a, state.b, state.year_start

    home_b_end = b.home.balance
    invest_b_end = b.invest.balance

    sweep = compute_income_sweep(
        portfolio_opening_balance=start.portfolio,
        yield_pct=inv.invest_yield_pct,
        franked_portion_pct=inv.franked_portion_pct,
        marginal_tax_rate_pct=marginal,
        avg_deductible_loan_balance=(start.invest_loan + invest_b_end) / 2,
        invest_loan_rate_pct=config.loans.invest_loan_rate_pct,
    )

    portfolio_before_redraw = start.portfolio * (1 + inv.invest_growth_pct / 100)

    house_value = house_value_at(config, year)
    net_wealth_a = house_value + a.offset.balance - a.home.balance
    net_wealth_b = (
        house_value
        + portfolio_before_redraw
        + b.offset.balance
        - home_b_end
        - invest_b_end
    )

    after_tax_portfolio = after_tax_liquidation_value(
        portfolio_before_redraw, b.portfolio.cost_base, marginal,
    )
    total_debt = home_b_end + invest_b_end

    redraw = max(0.0, start.home_loan - home_b_end)
    effective_base = max(rep.base_monthly_repayment, state.frozen.required_b)

    snapshot = YearSnapshot(
        year=year,
        house_value=house_value,
        home_loan_a=a.home.balance,
        offset_balance_a=a.offset.balance,
        net_wealth_a=net_wealth_a,
        home_loan_b=home_b_end,
        invest_loan_b=invest_b_end,
        offset_balance_b=b.offset.balance,
        portfolio_b=portfolio_before_redraw,
        cost_base_b=b.portfolio.cost_base,
        net_wealth_b=net_wealth_b,
        after_tax_portfolio_value=after_tax_portfolio,
        total_debt_b=total_debt,
        surplus_if_liquidated=after_tax_portfolio - total_debt,
        user_base_monthly_repayment=rep.base_monthly_repayment,
        effective_base_monthly_repayment=effective_base,
        total_monthly_outflow_used=effective_base + rep.extra_monthly_repayment,
        income_sweep_monthly=state.income_sweep_monthly,
        after_tax_cash_to_home_loan=sweep.after_tax_cash_to_home_loan,
        redraw_amount=redraw,
    )

    invest = replace(b.invest, balance=invest_b_end + redraw)
    portfolio = Portfolio(
        balance=portfolio_before_redraw + redraw,
        cost_base=b.portfolio.cost_base + redraw,
    )
    logger.debug(
        "Year %d: redraw %.2f, next-year sweep %.2f/mo, surplus if liquidated %.2f",
        year, redraw, sweep.after_tax_cash_to_home_loan / 12, snapshot.surplus_if_liquidated,
    )

    next_state = replace(
        state,
        b=replace(b, invest=invest, portfolio=portfolio),
        year_start=YearStart(
            home_loan=home_b_end,
            invest_loan=invest.balance,
            portfolio=portfolio.balance,
        ),
        income_sweep_monthly=sweep.after_tax_cash_to_home_loan / 12,
        total_redrawn=state.total_redrawn + redraw,
    )
    return next_state, snapshot
