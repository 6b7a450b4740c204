"""Engine — day-1 state, monthly stepper, annual rollover, driver."""

from debt_recycling_sim.engine.state import SimulationState
from debt_recycling_sim.engine.stepper import allocate_repayment, step_month
from debt_recycling_sim.engine.rollover import roll_over_year
from debt_recycling_sim.engine.simulation import initial_state, run_simulation

__all__ = [
    "SimulationState",
    "allocate_repayment",
    "step_month",
    "roll_over_year",
    "initial_state",
    "run_simulation",
]
