"""Time stepping for the 1D wave system.

:class:`Simulation` owns the grid, the double-buffered fields and the
implicit-step solver, and moves through the states

    INIT -> STEPPING -> {STEPPING, DONE, FAILED}

Each :meth:`Simulation.step` seeds the advanced level with a copy of the
current one, solves the implicit update, and on convergence commits the
advanced level, advances ``t`` by ``dt`` and emits a snapshot. An unconverged
step is never committed: the simulation becomes ``FAILED`` and raises
:class:`~wave1d.exceptions.ConvergenceError`.

:func:`solve_wave_1d` is the functional entry point that runs a whole
simulation and collects the history.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

import numpy as np

from .config import SimulationConfig
from .exceptions import ConfigurationError, ConvergenceError
from .initial_data import set_initial_data
from .numerics.fields import WaveFields
from .numerics.grids import Grid, build_grid
from .numerics.wave.methods import ImplicitSolver, resolve_method
from .numerics.wave.relaxation import RelaxationResult
from .numerics.wave.residuals import ResidualEvaluator
from .types import SimState, Snapshot, WaveSolution1D

__all__ = ["SnapshotSink", "StepResult", "Simulation", "solve_wave_1d"]

logger = logging.getLogger(__name__)

SnapshotSink = Callable[[Snapshot], None]


@dataclass(frozen=True, slots=True)
class StepResult:
    step: int
    t: float
    relaxation: RelaxationResult

    @property
    def success(self) -> bool:
        return self.relaxation.converged


class Simulation:
    def __init__(
        self,
        cfg: SimulationConfig,
        *,
        sink: SnapshotSink | None = None,
        solver: ImplicitSolver | None = None,
    ) -> None:
        self.state = SimState.INIT
        self.cfg = cfg

        self.grid: Grid = build_grid(cfg.grid)
        self.dt = cfg.time_step
        if not self.dt > 0:
            raise ConfigurationError("dt must be > 0")
        self.n_steps = cfg.total_steps

        self.fields = WaveFields.zeros(self.grid.Nx)
        self.evaluator = ResidualEvaluator(self.grid, self.dt)
        if solver is None:
            solver = resolve_method(cfg.method, cfg.relaxation)
        self.solver = solver

        self.t = 0.0
        self.step_index = 0
        self._sink = sink

        set_initial_data(self.fields, self.grid, cfg.initial_data)
        logger.info(
            "wave1d: Nx=%d dx=%.4g dt=%.4g steps=%d method=%s",
            self.grid.Nx,
            self.grid.dx,
            self.dt,
            self.n_steps,
            self.solver.name,
        )
        self._emit()
        self.state = SimState.DONE if self.n_steps == 0 else SimState.STEPPING

    @property
    def done(self) -> bool:
        return self.state in (SimState.DONE, SimState.FAILED)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            step=self.step_index,
            t=self.t,
            pp=self.fields.pp.current.copy(),
            pi=self.fields.pi.current.copy(),
        )

    def _emit(self) -> None:
        if self._sink is not None:
            self._sink(self.snapshot())

    def step(self) -> StepResult:
        if self.state != SimState.STEPPING:
            raise RuntimeError(
                f"Cannot step a simulation in state {self.state.value!r}"
            )

        self.fields.seed_guess()
        result = self.solver.solve(self.fields, self.evaluator)
        next_step = self.step_index + 1

        if not result.converged:
            self.state = SimState.FAILED
            logger.warning(
                "step %d failed: residual norm %.3e after %d sweeps",
                next_step,
                result.final_norm,
                result.iterations,
            )
            raise ConvergenceError(
                step=next_step, norm=result.final_norm, iterations=result.iterations
            )

        self.fields.commit()
        self.step_index = next_step
        self.t += self.dt
        logger.debug(
            "step %d: t=%.6g sweeps=%d norm=%.3e",
            self.step_index,
            self.t,
            result.iterations,
            result.final_norm,
        )
        self._emit()

        if self.step_index >= self.n_steps:
            self.state = SimState.DONE
            logger.info(
                "wave1d: done at t=%.6g after %d steps", self.t, self.step_index
            )

        return StepResult(step=self.step_index, t=self.t, relaxation=result)

    def run(self, *, store: Literal["all", "final"] = "all") -> WaveSolution1D:
        """Step until DONE and collect the history.

        With ``store="final"`` only the last time level is kept. A simulation
        that has already failed is refused rather than rerun.
        """
        if store not in ("all", "final"):
            raise ValueError("store must be 'all' or 'final'")
        if self.state == SimState.FAILED:
            raise RuntimeError(
                f"Cannot run a failed simulation (failed after step {self.step_index})"
            )

        Nx = self.grid.Nx
        n_snap = (self.n_steps - self.step_index + 1) if store == "all" else 1
        T = np.empty(n_snap, dtype=float)
        PP = np.empty((n_snap, Nx), dtype=float)
        PI = np.empty((n_snap, Nx), dtype=float)
        sweeps: list[int] = []

        def _record(k: int) -> None:
            T[k] = self.t
            PP[k] = self.fields.pp.current
            PI[k] = self.fields.pi.current

        _record(0)
        k = 0
        while self.state == SimState.STEPPING:
            res = self.step()
            sweeps.append(res.relaxation.iterations)
            if store == "all":
                k += 1
            _record(k)

        return WaveSolution1D(
            grid=self.grid,
            t=T[: k + 1],
            pp=PP[: k + 1],
            pi=PI[: k + 1],
            sweeps=np.asarray(sweeps, dtype=int),
            method=self.solver.name,
        )


def solve_wave_1d(
    cfg: SimulationConfig,
    *,
    sink: SnapshotSink | None = None,
    store: Literal["all", "final"] = "all",
    solver: ImplicitSolver | None = None,
) -> WaveSolution1D:
    return Simulation(cfg, sink=sink, solver=solver).run(store=store)
