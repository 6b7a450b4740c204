"""Shared test fixtures — configs matching the calculator's worked scenarios."""

from __future__ import annotations

import pytest

from debt_recycling_sim.config import (
    InvestmentConfig,
    LoanConfig,
    ProjectionConfig,
    PropertyConfig,
    RepaymentConfig,
    SimulationConfig,
    TaxConfig,
)
from debt_recycling_sim.finance.amortization import level_payment


@pytest.fixture
def home() -> PropertyConfig:
    return PropertyConfig(home_value_start=900_000, home_value_growth_pct=3)


@pytest.fixture
def loans() -> LoanConfig:
    return LoanConfig(
        home_loan_start=600_000,
        offset_balance_start=50_000,
        kickstart_from_offset=30_000,
        remaining_term_years_start=25,
        home_rate_pct=5.99,
        invest_loan_rate_pct=5.99,
    )


@pytest.fixture
def repayment() -> RepaymentConfig:
    return RepaymentConfig(base_monthly_repayment=4_000)


@pytest.fixture
def investment() -> InvestmentConfig:
    return InvestmentConfig(invest_growth_pct=5, invest_yield_pct=3, franked_portion_pct=30)


@pytest.fixture
def tax() -> TaxConfig:
    return TaxConfig(marginal_tax_rate_pct=39)


@pytest.fixture
def projection() -> ProjectionConfig:
    return ProjectionConfig(projection_years=20)


@pytest.fixture
def config(
    home: PropertyConfig,
    loans: LoanConfig,
    repayment: RepaymentConfig,
    investment: InvestmentConfig,
    tax: TaxConfig,
    projection: ProjectionConfig,
) -> SimulationConfig:
    """Worked scenario A: $600k loan, $30k kickstart, $4k/mo, 20 years."""
    return SimulationConfig(
        home=home,
        loans=loans,
        repayment=repayment,
        investment=investment,
        tax=tax,
        projection=projection,
    )


@pytest.fixture
def home_only_minimum() -> float:
    """Minimum P&I repayment on the $600k home loan alone."""
    return level_payment(600_000, 5.99, 25)


@pytest.fixture
def no_recycling_config(config: SimulationConfig, home_only_minimum: float) -> SimulationConfig:
    """No kickstart, repayment exactly at the home-only minimum."""
    return config.model_copy(update={
        "loans": config.loans.model_copy(update={"kickstart_from_offset": 0.0}),
        "repayment": RepaymentConfig(base_monthly_repayment=home_only_minimum),
    })
