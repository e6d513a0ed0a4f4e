# src/wave1d/numerics/grids.py
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..exceptions import ConfigurationError

__all__ = [
    "GridConfig",
    "Grid",
    "build_x_grid",
    "build_grid",
]


@dataclass(frozen=True, slots=True)
class GridConfig:
    Nx: int = 101
    xmin: float = 0.0
    xmax: float = 1.0

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if int(self.Nx) != self.Nx:
            raise ConfigurationError("Nx must be an integer")
        if self.Nx < 3:
            raise ConfigurationError("Nx must be >= 3")
        if not (self.xmin < self.xmax):
            raise ConfigurationError("Need xmin < xmax")

    @property
    def dx(self) -> float:
        return (float(self.xmax) - float(self.xmin)) / (int(self.Nx) - 1)


@dataclass(frozen=True, slots=True)
class Grid:
    """Uniform 1D grid. ``x[i] = xmin + i*dx`` for ``i = 0..Nx-1``."""

    x: NDArray[np.floating]
    dx: float

    @property
    def Nx(self) -> int:
        return int(self.x.shape[0])

    @property
    def xmin(self) -> float:
        return float(self.x[0])

    @property
    def xmax(self) -> float:
        return float(self.x[-1])

    def coord(self, i: int) -> float:
        if not (0 <= i < self.Nx):
            raise IndexError(f"grid index {i} outside [0, {self.Nx - 1}]")
        return self.xmin + i * self.dx


def _build_x_grid_validated(cfg: GridConfig) -> NDArray[np.floating]:
    x = np.linspace(float(cfg.xmin), float(cfg.xmax), int(cfg.Nx), dtype=float)
    if not np.all(np.diff(x) > 0):
        raise ConfigurationError("x grid must be strictly increasing")
    return x


def build_x_grid(cfg: GridConfig) -> NDArray[np.floating]:
    cfg.validate()
    return _build_x_grid_validated(cfg)


def build_grid(cfg: GridConfig) -> Grid:
    cfg.validate()
    x = _build_x_grid_validated(cfg)
    x.setflags(write=False)
    return Grid(x=x, dx=cfg.dx)
