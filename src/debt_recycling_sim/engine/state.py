"""Simulation state — frozen records threaded through the monthly reducer.

Nothing here is mutated in place: every step builds new records with
``dataclasses.replace``.  Strategy A and Strategy B live in separate
records so a bug in one track can never leak balances into the other.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LoanSplit:
    """One split of the loan facility."""

    name: str
    """'home' (non-deductible) or 'investment' (deductible)."""
    balance: float
    rate_pct: float


@dataclass(frozen=True)
class OffsetAccount:
    """Cash that reduces the interest-bearing home balance, not the balance itself."""

    balance: float


@dataclass(frozen=True)
class Portfolio:
    """Strategy B investments.  ``cost_base`` only grows with new capital."""

    balance: float
    cost_base: float


@dataclass(frozen=True)
class StrategyAState:
    """Baseline: pay off the home loan, keep the offset."""

    home: LoanSplit
    offset: OffsetAccount
    interest_paid: float = 0.0


@dataclass(frozen=True)
class StrategyBState:
    """Debt recycling: home + investment splits, offset, portfolio."""

    home: LoanSplit
    invest: LoanSplit
    offset: OffsetAccount
    portfolio: Portfolio
    interest_paid: float = 0.0

    @property
    def total_debt(self) -> float:
        return self.home.balance + self.invest.balance


@dataclass(frozen=True)
class FrozenRepayments:
    """Minimum P&I repayments fixed at day 1 and held for the whole run."""

    required_a: float
    """Home-only debt over the starting term."""
    required_b: float
    """Home + investment debt (balance-weighted rate) over the starting term."""


@dataclass(frozen=True)
class YearStart:
    """Strategy B balances at the start of the current projection year."""

    home_loan: float
    invest_loan: float
    portfolio: float


@dataclass(frozen=True)
class SimulationState:
    """Everything carried from one month to the next."""

    month: int
    """Months completed so far (0 = day 1, before any repayment)."""
    remaining_term_months: float
    a: StrategyAState
    b: StrategyBState
    year_start: YearStart
    income_sweep_monthly: float
    """Last year's after-tax portfolio cash ÷ 12, added to the home split."""
    frozen: FrozenRepayments
    kickstart_used: float = 0.0
    total_redrawn: float = 0.0

    @property
    def remaining_term_years(self) -> float:
        """Remaining term for fair-share payments, floored away from zero."""
        return max(self.remaining_term_months / 12, 0.0001)
