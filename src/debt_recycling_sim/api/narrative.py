"""Narrative generator — plain-English interpretation of a simulation result.

Mirrors the calculator's summary card: final net wealth per strategy, the
difference, the year all debt could be cleared, and the repayment floor.
"""

from __future__ import annotations

from debt_recycling_sim.models.results import SimulationResult


def _money(value: float) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.0f}"


def generate_narrative(result: SimulationResult) -> str:
    """Generate a plain-English narrative from a simulation result.

    Returns a structured text block covering:
      1. Outcome (final net wealth, difference)
      2. Debt-free test
      3. Repayments
      4. Observations
    """
    s = result.summary
    years = result.years

    if not years:
        return "No projection years were simulated — set projection_years to at least 1."

    last = years[-1]
    sections: list[str] = []

    # ── 1. Outcome ──
    sections.append("=" * 60)
    sections.append(f"OUTCOME AFTER {len(years)} YEARS")
    sections.append("=" * 60)
    advantage = s.final_advantage_b or 0.0
    sections.append(
        f"Final net wealth (Strategy A — pay off home loan): {_money(last.net_wealth_a)}\n"
        f"Final net wealth (Strategy B — debt recycling):   {_money(last.net_wealth_b)}\n"
        f"Strategy B vs A: {'+' if advantage >= 0 else ''}{_money(advantage)}"
    )

    # ── 2. Debt-free test ──
    sections.append("")
    sections.append("=" * 60)
    sections.append("YEAR YOU COULD CLEAR ALL DEBT")
    sections.append("=" * 60)
    if s.debt_free_year is not None:
        sections.append(
            f"Year {s.debt_free_year}: selling the portfolio and paying CGT (50% discount) "
            f"would clear both the home and investment loans."
        )
    else:
        sections.append(
            f"Not within projection. In the final year the after-tax portfolio "
            f"({_money(last.after_tax_portfolio_value)}) falls {_money(-last.surplus_if_liquidated)} "
            f"short of total debt ({_money(last.total_debt_b)})."
        )

    # ── 3. Repayments ──
    sections.append("")
    sections.append("=" * 60)
    sections.append("REPAYMENTS")
    sections.append("=" * 60)
    sections.append(
        f"Household repayment used: {_money(last.total_monthly_outflow_used)}/mo\n"
        f"Minimum P&I repayment on day-1 debt: {_money(s.frozen_required_repayment_b)}/mo\n"
        f"Kickstart from offset: {_money(s.kickstart_used)}\n"
        f"Total redrawn into investments: {_money(s.total_redrawn)}\n"
        f"Interest paid — A: {_money(s.total_interest_a)} | B: {_money(s.total_interest_b)}"
    )

    # ── 4. Observations ──
    sections.append("")
    sections.append("=" * 60)
    sections.append("OBSERVATIONS")
    sections.append("=" * 60)

    notes: list[str] = []
    if s.repayment_floor_applied:
        notes.append(
            f"The base repayment ({_money(last.user_base_monthly_repayment)}/mo) is below the minimum "
            f"P&I repayment, so {_money(last.effective_base_monthly_repayment)}/mo was used instead."
        )
    if advantage < 0:
        notes.append(
            "Recycling finished behind paying off the home loan under these assumptions. "
            "Check the investment return and the investment loan rate."
        )
    negative_sweeps = [snap.year for snap in years if snap.after_tax_cash_to_home_loan < 0]
    if negative_sweeps:
        notes.append(
            f"Portfolio income was a net cash cost after tax in {len(negative_sweeps)} year(s), "
            f"first in year {negative_sweeps[0]}."
        )
    if last.home_loan_b == 0 and last.home_loan_a > 0:
        notes.append("Strategy B fully cleared its non-deductible home debt within the projection.")
    if not notes:
        notes.append("No issues identified. Run sensitivity analysis to test robustness.")

    for i, note in enumerate(notes, 1):
        sections.append(f"  {i}. {note}")

    return "\n".join(sections)
