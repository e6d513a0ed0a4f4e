"""Initial data for the wave system.

``pp`` is a Gaussian pulse and ``pi = idsignum * pp``. Setting ``pi = +pp``
keeps only the characteristic ``pp + pi``, which travels toward decreasing
``x``; ``pi = -pp`` keeps ``pp - pi``, which travels toward increasing ``x``;
``idsignum = 0`` is time symmetric and splits into two half-amplitude pulses.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from .config import InitialDataConfig
from .numerics.fields import WaveFields
from .numerics.grids import Grid

__all__ = ["gaussian_pulse", "initial_data", "set_initial_data"]


def gaussian_pulse(
    x: NDArray[np.floating], *, amp: float, xc: float, xwid: float
) -> NDArray[np.floating]:
    x = np.asarray(x, dtype=float)
    return float(amp) * np.exp(-(((x - float(xc)) / float(xwid)) ** 2))


def initial_data(
    grid: Grid, cfg: InitialDataConfig
) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
    pp0 = gaussian_pulse(grid.x, amp=cfg.amp, xc=cfg.xc, xwid=cfg.xwid)
    pi0 = float(cfg.idsignum) * pp0
    return pp0, pi0


def set_initial_data(fields: WaveFields, grid: Grid, cfg: InitialDataConfig) -> None:
    """Write the t=0 values into the current (offset-0) buffers."""
    if fields.n != grid.Nx:
        raise ValueError(f"fields have {fields.n} points, grid has {grid.Nx}")

    pp0, pi0 = initial_data(grid, cfg)
    fields.pp.current[:] = pp0
    fields.pi.current[:] = pi0
