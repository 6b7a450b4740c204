"""Investment portfolio return assumptions (Strategy B only)."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from debt_recycling_sim.config.base import MAX_AMOUNT, MAX_RATE_PCT, SectionConfig


class InvestmentConfig(SectionConfig):
    """Constant return assumptions — no market volatility is modelled."""

    UPPER_BOUNDS: ClassVar[dict[str, float]] = {
        "starting_portfolio": MAX_AMOUNT,
        "invest_growth_pct": MAX_RATE_PCT,
        "invest_yield_pct": MAX_RATE_PCT,
        "franked_portion_pct": 100.0,
    }

    starting_portfolio: float = Field(
        default=0.0,
        description="Portfolio already held at day 1 ($), assumed carried at cost.",
    )
    invest_growth_pct: float = Field(default=5.0, description="Capital growth, % p.a.")
    invest_yield_pct: float = Field(default=3.0, description="Cash distribution yield, % p.a.")
    franked_portion_pct: float = Field(
        default=30.0,
        description="Share of cash income that is franked (0–100).",
    )
