"""Dual-strategy monthly stepper — one month of repayments for A and B.

Strategy B repayment priority:
  1. effective = max(base repayment, frozen minimum for B)
  2. investment split takes its fair-share P&I payment first
  3. everything left of ``effective`` goes to the home split, and any surplus
     of ``effective`` over the two fair shares is paid onto it on top
  4. voluntary extra + last year's income sweep go on top, to the home split

Home interest accrues on max(0, home − offset); investment interest on the
full investment balance.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from debt_recycling_sim.config.scenario import SimulationConfig
from debt_recycling_sim.engine.state import (
    LoanSplit,
    SimulationState,
    StrategyAState,
    StrategyBState,
)
from debt_recycling_sim.finance.amortization import level_payment


@dataclass(frozen=True)
class RepaymentAllocation:
    """How one month's base repayment is split across the two loan splits."""

    effective: float
    invest_fair_share: float
    home_fair_share: float
    to_invest: float
    to_home: float

    @property
    def surplus(self) -> float:
        """Base repayment beyond both fair shares, paid onto the home split on top."""
        return max(0.0, self.effective - (self.invest_fair_share + self.home_fair_share))


def allocate_repayment(
    effective: float,
    home: LoanSplit,
    invest: LoanSplit,
    remaining_years: float,
) -> RepaymentAllocation:
    """Split ``effective`` between the splits — investment first."""
    invest_fair = level_payment(invest.balance, invest.rate_pct, remaining_years) if invest.balance > 0 else 0.0
    home_fair = level_payment(home.balance, home.rate_pct, remaining_years) if home.balance > 0 else 0.0

    to_invest = min(effective, invest_fair)
    surplus = max(0.0, effective - (invest_fair + home_fair))
    return RepaymentAllocation(
        effective=effective,
        invest_fair_share=invest_fair,
        home_fair_share=home_fair,
        to_invest=to_invest,
        to_home=effective - to_invest + surplus,
    )


def apply_payment(split: LoanSplit, payment: float, offset_balance: float = 0.0) -> tuple[LoanSplit, float]:
    """Accrue one month's interest and apply ``payment`` to a split.

    Returns the updated split and the interest charged.  A payment below
    the interest never increases the balance (no capitalisation).
    """
    interest_bearing = max(0.0, split.balance - offset_balance)
    interest = interest_bearing * ((split.rate_pct / 100) / 12)

    principal = max(payment - interest, 0.0)
    balance = max(split.balance - principal, 0.0)
    return replace(split, balance=balance), interest


def step_strategy_a(a: StrategyAState, config: SimulationConfig, required: float) -> StrategyAState:
    rep = config.repayment
    payment = max(rep.base_monthly_repayment, required) + rep.extra_monthly_repayment

    home, interest = apply_payment(a.home, payment, a.offset.balance)
    return replace(a, home=home, interest_paid=a.interest_paid + interest)


def step_strategy_b(
    b: StrategyBState,
    config: SimulationConfig,
    required: float,
    remaining_years: float,
    income_sweep_monthly: float,
) -> StrategyBState:
    rep = config.repayment
    effective = max(rep.base_monthly_repayment, required)
    alloc = allocate_repayment(effective, b.home, b.invest, remaining_years)

    home_payment = alloc.to_home + rep.extra_monthly_repayment + income_sweep_monthly

    home, home_interest = apply_payment(b.home, home_payment, b.offset.balance)
    invest, invest_interest = apply_payment(b.invest, alloc.to_invest)
    return replace(
        b,
        home=home,
        invest=invest,
        interest_paid=b.interest_paid + home_interest + invest_interest,
    )


def step_month(state: SimulationState, config: SimulationConfig) -> SimulationState:
    """Advance both strategies by one month.  Pure — ``state`` is untouched."""
    b = step_strategy_b(
        state.b,
        config,
        state.frozen.required_b,
        state.remaining_term_years,
        state.income_sweep_monthly,
    )
    a = step_strategy_a(state.a, config, state.frozen.required_a)

    return replace(
        state,
        month=state.month + 1,
        remaining_term_months=max(state.remaining_term_months - 1, 0),
        a=a,
        b=b,
    )
