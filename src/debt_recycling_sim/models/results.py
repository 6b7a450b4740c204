"""Result types — the contract between engine, export, and API.

All monetary figures are unrounded floats in dollars.  Rounding and
currency formatting belong to whoever displays them.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


# ═══════════════════════════════════════════════════════════════════════════
# Tax breakdown
# ═══════════════════════════════════════════════════════════════════════════

class IncomeSweepBreakdown(BaseModel):
    """One year of portfolio income, run through the tax calculation.

    Key formula:
      grossed_up      = franked / (1 − 0.30)
      taxable_result  = unfranked + grossed_up − deductible_interest
      net_tax         = taxable_result × marginal − franking_credit
      after_tax_cash  = cash_income − net_tax
    """

    model_config = ConfigDict(frozen=True)

    cash_income: float
    """Distributions actually received = opening balance × yield."""
    franked_income: float
    unfranked_income: float
    grossed_up_franked_income: float
    franking_credit: float
    assessable_income: float
    deductible_interest: float
    """Average investment-loan balance × investment rate."""
    taxable_result: float
    """Negative = tax loss (negatively geared)."""
    tax_payable: float
    """Before franking credits; negative = tax saving."""
    net_tax: float
    """After franking credits; negative = net refund."""
    after_tax_cash_to_home_loan: float
    """Cash redirected to the home split next year.  May be negative."""


# ═══════════════════════════════════════════════════════════════════════════
# Year snapshot
# ═══════════════════════════════════════════════════════════════════════════

class YearSnapshot(BaseModel):
    """End-of-year position of both strategies.

    Strategy B figures are taken *before* that year-end's redraw is applied,
    so ``portfolio_b`` and ``invest_loan_b`` show the position the CGT test
    was run against.
    """

    model_config = ConfigDict(frozen=True)

    year: int
    """1-indexed projection year."""
    house_value: float

    # --- Strategy A: pay off the home loan ---
    home_loan_a: float
    offset_balance_a: float
    net_wealth_a: float
    """house_value + offset_balance_a − home_loan_a."""

    # --- Strategy B: debt recycling ---
    home_loan_b: float
    invest_loan_b: float
    offset_balance_b: float
    portfolio_b: float
    cost_base_b: float
    net_wealth_b: float
    """house_value + portfolio_b + offset_balance_b − home_loan_b − invest_loan_b."""

    # --- Debt-free test ---
    after_tax_portfolio_value: float
    """portfolio_b net of CGT (50 % discount) at the marginal rate."""
    total_debt_b: float
    surplus_if_liquidated: float
    """after_tax_portfolio_value − total_debt_b.  ≥ 0 → debt could be cleared."""

    # --- Repayments used this year ---
    user_base_monthly_repayment: float
    effective_base_monthly_repayment: float
    """max(user base, frozen minimum P&I) — the repayment floor."""
    total_monthly_outflow_used: float
    """effective base + voluntary extra — household cash out per month."""
    income_sweep_monthly: float
    """Portfolio after-tax cash added to the home split each month this year."""

    # --- Rolled into next year ---
    after_tax_cash_to_home_loan: float
    """This year's after-tax portfolio cash; swept over the next 12 months."""
    redraw_amount: float
    """Home split paydown redrawn into investment after this snapshot."""


# ═══════════════════════════════════════════════════════════════════════════
# Run summary + full result
# ═══════════════════════════════════════════════════════════════════════════

class RunSummary(BaseModel):
    """Headline KPIs for one run."""

    projection_years: int
    final_net_wealth_a: float | None
    final_net_wealth_b: float | None
    final_advantage_b: float | None
    """final_net_wealth_b − final_net_wealth_a.  None for an empty run."""
    debt_free_year: int | None  # None if never within projection
    kickstart_used: float
    """Kickstart actually applied after capping at offset and home balances."""
    frozen_required_repayment_a: float
    frozen_required_repayment_b: float
    repayment_floor_applied: bool
    """True when the configured base repayment was below the frozen minimum."""
    total_interest_a: float
    total_interest_b: float
    """Home + investment interest paid under Strategy B."""
    total_redrawn: float


class SimulationResult(BaseModel):
    """Complete output of one simulation run."""

    years: list[YearSnapshot]
    summary: RunSummary
