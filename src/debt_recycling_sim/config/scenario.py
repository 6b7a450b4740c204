"""Top-level simulation config — bundles every input section."""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field

from debt_recycling_sim.config.base import SectionConfig
from debt_recycling_sim.config.investment import InvestmentConfig
from debt_recycling_sim.config.loans import LoanConfig, RepaymentConfig
from debt_recycling_sim.config.property import PropertyConfig
from debt_recycling_sim.config.tax import TaxConfig

MAX_PROJECTION_YEARS = 100


class ProjectionConfig(SectionConfig):
    """Projection horizon.  Fractional years are truncated."""

    UPPER_BOUNDS: ClassVar[dict[str, float]] = {"projection_years": MAX_PROJECTION_YEARS}

    projection_years: int = Field(default=20, description="Years to simulate (1–100)")


# Flat field name (camelCase, as used by the calculator form) → (section, field)
FLAT_FIELDS: dict[str, tuple[str, str]] = {
    "homeValueStart": ("home", "home_value_start"),
    "homeValueGrowthPct": ("home", "home_value_growth_pct"),
    "homeLoanStart": ("loans", "home_loan_start"),
    "offsetBalanceStart": ("loans", "offset_balance_start"),
    "kickstartFromOffset": ("loans", "kickstart_from_offset"),
    "remainingTermYearsStart": ("loans", "remaining_term_years_start"),
    "homeRatePct": ("loans", "home_rate_pct"),
    "investLoanRatePct": ("loans", "invest_loan_rate_pct"),
    "existingInvestLoan": ("loans", "existing_invest_loan"),
    "baseMonthlyRepayment": ("repayment", "base_monthly_repayment"),
    "extraMonthlyRepayment": ("repayment", "extra_monthly_repayment"),
    "startingPortfolio": ("investment", "starting_portfolio"),
    "investGrowthPct": ("investment", "invest_growth_pct"),
    "investYieldPct": ("investment", "invest_yield_pct"),
    "frankedPortionPct": ("investment", "franked_portion_pct"),
    "marginalTaxRatePct": ("tax", "marginal_tax_rate_pct"),
    "projectionYears": ("projection", "projection_years"),
}


class SimulationConfig(BaseModel):
    """Complete, immutable input bundle for one simulation run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    home: PropertyConfig = Field(default_factory=PropertyConfig)
    loans: LoanConfig = Field(default_factory=LoanConfig)
    repayment: RepaymentConfig = Field(default_factory=RepaymentConfig)
    investment: InvestmentConfig = Field(default_factory=InvestmentConfig)
    tax: TaxConfig = Field(default_factory=TaxConfig)
    projection: ProjectionConfig = Field(default_factory=ProjectionConfig)

    @classmethod
    def from_flat(cls, values: Mapping[str, Any]) -> SimulationConfig:
        """Build a config from the flat field set.

        Keys may be camelCase (``homeLoanStart``) or the snake_case field
        name (``home_loan_start``).  Missing keys keep their defaults.

        Raises
        ------
        ValueError
            If a key matches no known field.
        """
        by_snake = {field: (section, field) for section, field in FLAT_FIELDS.values()}
        sections: dict[str, dict[str, Any]] = {}
        unknown: list[str] = []
        for key, value in values.items():
            target = FLAT_FIELDS.get(key) or by_snake.get(key)
            if target is None:
                unknown.append(key)
                continue
            section, field = target
            sections.setdefault(section, {})[field] = value
        if unknown:
            raise ValueError(f"Unknown config field(s): {', '.join(sorted(unknown))}")
        return cls(**sections)

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load a scenario file — nested sections or the flat field set."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if any(key in cls.model_fields for key in data):
            return cls(**data)
        return cls.from_flat(data)

    def to_flat(self) -> dict[str, float | int]:
        """Inverse of :meth:`from_flat`, keyed by camelCase name."""
        return {
            key: getattr(getattr(self, section), field)
            for key, (section, field) in FLAT_FIELDS.items()
        }
