"""Implicit solve of the first-order wave system.

Currently supported system (1D):

    pp_t = pi_x,    pi_t = pp_x

Crank-Nicolson in time, second-order centered differences in the interior,
and one-sided second-order radiating conditions at both boundaries.
"""

from .direct import DirectSolver, assemble_jacobian
from .methods import ImplicitSolver, available_methods, register_method, resolve_method
from .relaxation import RelaxationResult, RelaxationSolver
from .residuals import Region, ResidualEvaluator, Residuals, region_of

__all__ = [
    # Residuals
    "Region",
    "region_of",
    "Residuals",
    "ResidualEvaluator",
    # Solvers
    "RelaxationResult",
    "RelaxationSolver",
    "DirectSolver",
    "assemble_jacobian",
    # Methods / registry
    "ImplicitSolver",
    "register_method",
    "available_methods",
    "resolve_method",
]
