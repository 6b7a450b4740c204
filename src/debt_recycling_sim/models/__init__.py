"""Result models — simulation output contracts."""

from debt_recycling_sim.models.results import (
    IncomeSweepBreakdown,
    RunSummary,
    SimulationResult,
    YearSnapshot,
)

__all__ = [
    "IncomeSweepBreakdown",
    "RunSummary",
    "SimulationResult",
    "YearSnapshot",
]
