"""Configuration models — every simulation input."""

from debt_recycling_sim.config.property import PropertyConfig
from debt_recycling_sim.config.loans import LoanConfig, RepaymentConfig
from debt_recycling_sim.config.investment import InvestmentConfig
from debt_recycling_sim.config.tax import TaxConfig
from debt_recycling_sim.config.scenario import ProjectionConfig, SimulationConfig

__all__ = [
    "PropertyConfig",
    "LoanConfig",
    "RepaymentConfig",
    "InvestmentConfig",
    "TaxConfig",
    "ProjectionConfig",
    "SimulationConfig",
]
