"""Home loan, offset and investment split inputs."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from debt_recycling_sim.config.base import MAX_AMOUNT, MAX_RATE_PCT, MAX_TERM_YEARS, SectionConfig


class LoanConfig(SectionConfig):
    """Debt and cash position at day 1.

    Home and investment debt are modelled as separate splits of the same
    facility, each at a constant rate.  The offset account only ever
    reduces interest on the home split.
    """

    UPPER_BOUNDS: ClassVar[dict[str, float]] = {
        "home_loan_start": MAX_AMOUNT,
        "offset_balance_start": MAX_AMOUNT,
        "kickstart_from_offset": MAX_AMOUNT,
        "remaining_term_years_start": MAX_TERM_YEARS,
        "home_rate_pct": MAX_RATE_PCT,
        "invest_loan_rate_pct": MAX_RATE_PCT,
        "existing_invest_loan": MAX_AMOUNT,
    }

    home_loan_start: float = Field(default=600_000.0, description="Home loan balance today ($)")
    offset_balance_start: float = Field(
        default=50_000.0,
        description="Cash in offset today. Strategy A leaves it alone; "
                    "Strategy B may deploy part of it via the kickstart.",
    )
    kickstart_from_offset: float = Field(
        default=30_000.0,
        description="One-off amount moved from offset onto the home split on day 1 "
                    "and immediately redrawn as investment debt. "
                    "Capped at both the offset and home loan balances.",
    )
    remaining_term_years_start: float = Field(default=25.0, description="Remaining loan term (years)")
    home_rate_pct: float = Field(default=5.99, description="Home split interest rate, % p.a.")
    invest_loan_rate_pct: float = Field(default=5.99, description="Investment split interest rate, % p.a.")
    existing_invest_loan: float = Field(
        default=0.0,
        description="Investment split already drawn before the projection starts ($).",
    )


class RepaymentConfig(SectionConfig):
    """Household cash going to the loans every month."""

    UPPER_BOUNDS: ClassVar[dict[str, float]] = {
        "base_monthly_repayment": MAX_AMOUNT,
        "extra_monthly_repayment": MAX_AMOUNT,
    }

    base_monthly_repayment: float = Field(
        default=4_000.0,
        description="Fixed household repayment ($/mo). Raised to the frozen "
                    "minimum P&I repayment if it falls short.",
    )
    extra_monthly_repayment: float = Field(
        default=0.0,
        description="Voluntary extra ($/mo), paid onto the home split under both strategies.",
    )
