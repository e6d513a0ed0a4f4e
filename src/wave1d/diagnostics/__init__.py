"""Accuracy diagnostics: analytic reference solution, refinement studies and plots."""

from .convergence import ConvergenceRun, convergence_study, exact_solution, max_error

__all__ = [
    "ConvergenceRun",
    "convergence_study",
    "exact_solution",
    "max_error",
]
