# src/wave1d/numerics/__init__.py
"""
Numerical building blocks (advanced API).

Top-level package `wave1d` exposes the everyday simulation API.
This subpackage exposes the grid and finite-difference primitives; the
wave-system residuals and solvers live in `wave1d.numerics.wave`.
"""

from .grids import Grid, GridConfig, build_grid, build_x_grid

__all__ = [
    "Grid",
    "GridConfig",
    "build_grid",
    "build_x_grid",
]
