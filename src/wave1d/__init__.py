"""
wave1d

Implicit (Crank-Nicolson) finite-difference solver for the 1D wave equation
written as a first-order system, with Newton-Gauss-Seidel relaxation of the
implicit update and radiating boundaries.

The everyday API is exposed at the top level, so you can write, for example:

    from wave1d import SimulationConfig, solve_wave_1d
"""

from .config import InitialDataConfig, RelaxationConfig, SimulationConfig
from .exceptions import ConfigurationError, ConvergenceError, WaveSolverError
from .numerics.grids import Grid, GridConfig
from .simulation import Simulation, StepResult, solve_wave_1d
from .types import FieldName, SimState, Snapshot, WaveSolution1D

__all__ = [
    # Config
    "GridConfig",
    "InitialDataConfig",
    "RelaxationConfig",
    "SimulationConfig",
    # Errors
    "WaveSolverError",
    "ConfigurationError",
    "ConvergenceError",
    # Types
    "Grid",
    "FieldName",
    "SimState",
    "Snapshot",
    "WaveSolution1D",
    # Simulation
    "Simulation",
    "StepResult",
    "solve_wave_1d",
]
