"""Persist a :class:`~wave1d.types.WaveSolution1D` as a numpy ``.npz`` archive."""

from __future__ import annotations

from pathlib import Path

import numpy as np

from .numerics.grids import GridConfig, build_grid
from .types import WaveSolution1D

__all__ = ["write_snapshots_npz", "read_snapshots_npz"]


def write_snapshots_npz(path: str | Path, sol: WaveSolution1D) -> Path:
    path = Path(path)
    if path.suffix != ".npz":
        path = path.with_suffix(".npz")
    path.parent.mkdir(parents=True, exist_ok=True)
    np.savez(
        path,
        x=np.asarray(sol.grid.x),
        t=sol.t,
        pp=sol.pp,
        pi=sol.pi,
        sweeps=sol.sweeps,
        method=np.asarray(sol.method),
    )
    return path


def read_snapshots_npz(path: str | Path) -> WaveSolution1D:
    with np.load(Path(path), allow_pickle=False) as data:
        x = np.asarray(data["x"], dtype=float)
        grid = build_grid(
            GridConfig(Nx=int(x.shape[0]), xmin=float(x[0]), xmax=float(x[-1]))
        )
        return WaveSolution1D(
            grid=grid,
            t=np.asarray(data["t"], dtype=float),
            pp=np.asarray(data["pp"], dtype=float),
            pi=np.asarray(data["pi"], dtype=float),
            sweeps=np.asarray(data["sweeps"], dtype=int),
            method=str(data["method"]),
        )
