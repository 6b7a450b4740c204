"""Investment tax effects — income sweep and CGT on liquidation.

Australian treatment, simplified:
  - franked distributions are grossed up at a flat 30 % company rate and the
    franking credit offsets tax (refundable, so it can produce a net refund)
  - investment loan interest is deductible against the grossed-up income;
    a negative result is a tax saving at the marginal rate (negative gearing)
  - capital gains on disposal get a flat 50 % discount
"""

from __future__ import annotations

from debt_recycling_sim.models.results import IncomeSweepBreakdown

COMPANY_TAX_RATE = 0.30
CGT_DISCOUNT = 0.50


def compute_income_sweep(
    portfolio_opening_balance: float,
    yield_pct: float,
    franked_portion_pct: float,
    marginal_tax_rate_pct: float,
    avg_deductible_loan_balance: float,
    invest_loan_rate_pct: float,
) -> IncomeSweepBreakdown:
    """After-tax cash the portfolio throws off for one year.

    The result's ``after_tax_cash_to_home_loan`` is what gets redirected to
    the home split over the following year.  It is negative when the net
    tax position is a cost larger than the cash income.
    """
    cash_income = portfolio_opening_balance * (yield_pct / 100)

    franked = cash_income * (franked_portion_pct / 100)
    unfranked = cash_income - franked

    # $70 franked cash → $100 assessable, $30 credit
    grossed_up = franked / ((1 - COMPANY_TAX_RATE) or 1)
    franking_credit = grossed_up - franked

    assessable_income = unfranked + grossed_up
    deductible_interest = avg_deductible_loan_balance * (invest_loan_rate_pct / 100)
    taxable_result = assessable_income - deductible_interest

    tax_payable = taxable_result * (marginal_tax_rate_pct / 100)
    net_tax = tax_payable - franking_credit

    return IncomeSweepBreakdown(
        cash_income=cash_income,
        franked_income=franked,
        unfranked_income=unfranked,
        grossed_up_franked_income=grossed_up,
        franking_credit=franking_credit,
        assessable_income=assessable_income,
        deductible_interest=deductible_interest,
        taxable_result=taxable_result,
        tax_payable=tax_payable,
        net_tax=net_tax,
        after_tax_cash_to_home_loan=cash_income - net_tax,
    )


def after_tax_liquidation_value(
    current_value: float,
    cost_base: float,
    marginal_tax_rate_pct: float,
) -> float:
    """Proceeds if the whole portfolio were sold today, after CGT."""
    gain = current_value - cost_base
    if gain <= 0:
        return current_value
    cgt = gain * CGT_DISCOUNT * (marginal_tax_rate_pct / 100)
    return current_value - cgt


def surplus_if_liquidated(
    current_value: float,
    cost_base: float,
    marginal_tax_rate_pct: float,
    total_debt: float,
) -> float:
    """After-tax liquidation proceeds minus all outstanding debt.

    ``>= 0`` means selling the portfolio would clear both loans.
    """
    return after_tax_liquidation_value(current_value, cost_base, marginal_tax_rate_pct) - total_debt
