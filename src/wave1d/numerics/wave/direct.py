"""Sparse direct solve of the implicit update.

Assembles the constant Jacobian of the residuals with respect to the
advanced time level from the same stencil weights the residuals use, and
takes a single Newton step ``u1 <- u1 - J^{-1} R(u1)``. Since the residuals
are affine in ``u1`` that step is exact up to round-off, which makes this a
useful cross-check of :class:`~wave1d.numerics.wave.relaxation.RelaxationSolver`.

Unknowns are ordered ``[pp_0..pp_{N-1}, pi_0..pi_{N-1}]``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.linalg import spsolve

from ..fd.stencils import (
    d1_backward_3pt_coeffs,
    d1_central_coeffs,
    d1_forward_3pt_coeffs,
)
from ..fields import WaveFields
from .relaxation import RelaxationResult
from .residuals import NormKind, ResidualEvaluator

__all__ = ["assemble_jacobian", "DirectSolver"]

logger = logging.getLogger(__name__)


def assemble_jacobian(n: int, dt: float, dx: float) -> csr_matrix:
    """Jacobian ``dR/du1`` of the stacked residuals, shape (2n, 2n)."""
    if n < 3:
        raise ValueError("Need n >= 3")

    inv_dt = 1.0 / dt
    dl, _, du = d1_central_coeffs(dx)
    f0, f1, f2 = d1_forward_3pt_coeffs(dx)
    b0, b1, b2 = d1_backward_3pt_coeffs(dx)

    rows: list[int] = []
    cols: list[int] = []
    vals: list[float] = []

    def _add(r: int, c: int, v: float) -> None:
        rows.append(r)
        cols.append(c)
        vals.append(v)

    for blk, other in ((0, n), (n, 0)):
        # left: f_t = f_x (forward)
        _add(blk, blk, inv_dt - 0.5 * f0)
        _add(blk, blk + 1, -0.5 * f1)
        _add(blk, blk + 2, -0.5 * f2)

        # interior: f_t = g_x (centered, other field)
        for i in range(1, n - 1):
            _add(blk + i, blk + i, inv_dt)
            _add(blk + i, other + i - 1, -0.5 * dl)
            _add(blk + i, other + i + 1, -0.5 * du)

        # right: f_t = -f_x (backward)
        r = blk + n - 1
        _add(r, r - 2, 0.5 * b0)
        _add(r, r - 1, 0.5 * b1)
        _add(r, r, inv_dt + 0.5 * b2)

    return csr_matrix((vals, (rows, cols)), shape=(2 * n, 2 * n))


@dataclass(frozen=True, slots=True)
class DirectSolver:
    tolerance: float = 1e-10
    norm: NormKind = "max"

    @property
    def name(self) -> str:
        return "direct"

    def solve(
        self, fields: WaveFields, evaluator: ResidualEvaluator
    ) -> RelaxationResult:
        norm0 = evaluator.norm(fields, self.norm)
        if norm0 < self.tolerance:
            return RelaxationResult(
                converged=True,
                iterations=0,
                initial_norm=norm0,
                final_norm=norm0,
                method=self.name,
                norm_history=(norm0,),
            )

        n = evaluator.n
        J = assemble_jacobian(n, evaluator.dt, evaluator.dx)
        res = evaluator.residuals(fields)
        rhs = np.concatenate((res.pp, res.pi))
        delta = np.asarray(spsolve(J.tocsc(), rhs), dtype=float)

        fields.pp.advanced[:] -= delta[:n]
        fields.pi.advanced[:] -= delta[n:]

        nrm = evaluator.norm(fields, self.norm)
        logger.debug("direct solve: residual norm %.3e -> %.3e", norm0, nrm)
        return RelaxationResult(
            converged=bool(nrm < self.tolerance),
            iterations=1,
            initial_norm=norm0,
            final_norm=nrm,
            method=self.name,
            norm_history=(norm0, nrm),
        )
