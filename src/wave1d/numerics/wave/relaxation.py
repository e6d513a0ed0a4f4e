from __future__ import annotations

import logging
from dataclasses import dataclass

from ...types import FIELD_ORDER
from ..fields import WaveFields
from .residuals import NormKind, ResidualEvaluator

__all__ = ["RelaxationResult", "RelaxationSolver"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RelaxationResult:
    converged: bool
    iterations: int  # full sweeps performed
    initial_norm: float
    final_norm: float
    method: str
    norm_history: tuple[float, ...] = ()


@dataclass(frozen=True, slots=True)
class RelaxationSolver:
    """Newton-Gauss-Seidel relaxation of the implicit update.

    Each sweep visits ``i = 0..Nx-1`` in ascending order and, at every point,
    updates ``pp`` then ``pi``. The update solves the local residual for the
    single unknown ``f1[i]`` with every other value held at its latest
    value, including neighbours already updated in the same sweep. Because
    each residual is affine in its own unknown, the Newton step
    ``f1[i] -= R / (dR/df1[i])`` zeroes that residual exactly.

    The offset-0 buffers are only read.
    """

    tolerance: float = 1e-10
    max_iterations: int = 100
    norm: NormKind = "max"

    def __post_init__(self) -> None:
        if not self.tolerance > 0:
            raise ValueError("tolerance must be > 0")
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be >= 1")

    @property
    def name(self) -> str:
        return "relaxation"

    def sweep(self, fields: WaveFields, evaluator: ResidualEvaluator) -> None:
        """One full Gauss-Seidel pass over both fields."""
        for i in range(evaluator.n):
            for name in FIELD_ORDER:
                term = evaluator.term(name, i)
                buf = fields[name].advanced
                buf[i] -= term.evaluate(fields, i) / term.diagonal

    def solve(
        self, fields: WaveFields, evaluator: ResidualEvaluator
    ) -> RelaxationResult:
        tol = float(self.tolerance)
        norm0 = evaluator.norm(fields, self.norm)
        history = [norm0]

        if norm0 < tol:
            return RelaxationResult(
                converged=True,
                iterations=0,
                initial_norm=norm0,
                final_norm=norm0,
                method=self.name,
                norm_history=tuple(history),
            )

        nrm = norm0
        for it in range(1, int(self.max_iterations) + 1):
            self.sweep(fields, evaluator)
            nrm = evaluator.norm(fields, self.norm)
            history.append(nrm)
            logger.debug("sweep %d: residual norm %.3e", it, nrm)

            if nrm < tol:
                return RelaxationResult(
                    converged=True,
                    iterations=it,
                    initial_norm=norm0,
                    final_norm=nrm,
                    method=self.name,
                    norm_history=tuple(history),
                )

        return RelaxationResult(
            converged=False,
            iterations=int(self.max_iterations),
            initial_norm=norm0,
            final_norm=nrm,
            method=self.name,
            norm_history=tuple(history),
        )
