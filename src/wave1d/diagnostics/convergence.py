from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import asdict, dataclass, replace
from time import perf_counter

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from ..config import InitialDataConfig, SimulationConfig
from ..initial_data import gaussian_pulse
from ..numerics.grids import GridConfig
from ..simulation import solve_wave_1d

__all__ = ["ConvergenceRun", "exact_solution", "max_error", "convergence_study"]


def exact_solution(
    x: NDArray[np.floating], t: float, cfg: InitialDataConfig
) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
    """Traveling-wave solution of ``pp_t = pi_x, pi_t = pp_x`` on the real line.

    With ``g`` the initial Gaussian and ``s = idsignum``, the characteristic
    ``pp + pi = (1+s) g`` moves toward decreasing ``x`` and ``pp - pi = (1-s) g``
    toward increasing ``x``:

        pp = ((1+s) g(x+t) + (1-s) g(x-t)) / 2
        pi = ((1+s) g(x+t) - (1-s) g(x-t)) / 2

    It matches a bounded-domain run only while the boundaries are quiet.
    """
    x = np.asarray(x, dtype=float)
    s = float(cfg.idsignum)
    g_left = gaussian_pulse(x + t, amp=cfg.amp, xc=cfg.xc, xwid=cfg.xwid)
    g_right = gaussian_pulse(x - t, amp=cfg.amp, xc=cfg.xc, xwid=cfg.xwid)
    pp = 0.5 * ((1.0 + s) * g_left + (1.0 - s) * g_right)
    pi = 0.5 * ((1.0 + s) * g_left - (1.0 - s) * g_right)
    return pp, pi


def max_error(
    x: NDArray[np.floating],
    t: float,
    pp: NDArray[np.floating],
    pi: NDArray[np.floating],
    cfg: InitialDataConfig,
) -> float:
    """Largest absolute deviation from :func:`exact_solution` over both fields."""
    pp_ex, pi_ex = exact_solution(x, t, cfg)
    return float(max(np.max(np.abs(pp - pp_ex)), np.max(np.abs(pi - pi_ex))))


# ----------------------------
# Results dataclass
# ----------------------------


@dataclass(frozen=True, slots=True)
class ConvergenceRun:
    level: int
    Nx: int
    dx: float
    dt: float
    n_steps: int
    t_final: float
    max_err: float
    mean_sweeps: float
    runtime_ms: float


def _refine(cfg: SimulationConfig, level: int, final_time: float) -> SimulationConfig:
    factor = 2**level
    g = cfg.grid
    grid = GridConfig(Nx=(int(g.Nx) - 1) * factor + 1, xmin=g.xmin, xmax=g.xmax)
    return replace(
        cfg,
        grid=grid,
        dt=cfg.time_step / factor,
        final_time=None,
        n_steps=int(round(final_time / cfg.time_step)) * factor,
    )


def convergence_study(
    cfg: SimulationConfig,
    *,
    final_time: float,
    levels: int = 3,
) -> pd.DataFrame:
    """Run successive refinements halving ``dx`` and ``dt`` together.

    ``final_time`` must be a multiple of ``cfg.time_step`` (so every level ends
    at the same time). Returns one row per level with the max error against
    :func:`exact_solution`, the error ratio to the previous level and the
    observed order ``log2(ratio)``. A second-order scheme shows ratios
    approaching 4.
    """
    if levels < 2:
        raise ValueError("levels must be >= 2")
    base_steps = final_time / cfg.time_step
    if not math.isclose(base_steps, round(base_steps), rel_tol=0.0, abs_tol=1e-9):
        raise ValueError("final_time must be a multiple of the base time step")

    runs: list[ConvergenceRun] = []
    for level in range(levels):
        c = _refine(cfg, level, final_time)
        t0 = perf_counter()
        sol = solve_wave_1d(c, store="final")
        ms = 1000.0 * (perf_counter() - t0)

        err = max_error(
            sol.grid.x, sol.t_final, sol.pp_final, sol.pi_final, c.initial_data
        )
        runs.append(
            ConvergenceRun(
                level=level,
                Nx=sol.grid.Nx,
                dx=sol.grid.dx,
                dt=c.time_step,
                n_steps=c.total_steps,
                t_final=sol.t_final,
                max_err=err,
                mean_sweeps=float(np.mean(sol.sweeps)) if sol.sweeps.size else 0.0,
                runtime_ms=ms,
            )
        )

    return _to_frame(runs)


def _to_frame(runs: Sequence[ConvergenceRun]) -> pd.DataFrame:
    df = pd.DataFrame([asdict(r) for r in runs])
    err = df["max_err"].astype(float)
    df["ratio"] = err.shift(1) / err
    df["order"] = np.log2(df["ratio"])
    return df
