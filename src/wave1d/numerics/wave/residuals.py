"""Discretized residuals of the first-order wave system.

The evolved system is

    pp_t = pi_x,    pi_t = pp_x

discretized with a forward time difference and a Crank-Nicolson average of
the spatial term. At the two boundaries each field is instead coupled to its
own one-sided derivative,

    left:   f_t =  f_x        right:  f_t = -f_x

which lets the outgoing characteristic leave the domain with little
reflection.

The residual table is keyed by ``(field, region)``; each entry is a closure
taking both fields explicitly plus the constant ``dR/d f1[i]`` that the
relaxation divides by. Every residual is affine in its own unknown, so that
constant is exact.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import numpy as np
from numpy.typing import NDArray

from ...config import NormKind
from ...types import FIELD_ORDER, FieldName
from ..fd.operators import (
    SpatialOperator,
    backward,
    backward_at_right,
    centered,
    centered_array,
    forward,
    forward_at_left,
    negated,
    time_avg,
    time_diff,
)
from ..fd.stencils import d1_backward_3pt_coeffs, d1_forward_3pt_coeffs
from ..fields import WaveFields
from ..grids import Grid

__all__ = [
    "NormKind",
    "Region",
    "region_of",
    "ResidualTerm",
    "Residuals",
    "ResidualEvaluator",
]

ResidualFn = Callable[[WaveFields, int], float]


class Region(str, Enum):
    LEFT = "left"
    INTERIOR = "interior"
    RIGHT = "right"


def region_of(i: int, n: int) -> Region:
    if not (0 <= i < n):
        raise IndexError(f"index {i} outside [0, {n - 1}]")
    if i == 0:
        return Region.LEFT
    if i == n - 1:
        return Region.RIGHT
    return Region.INTERIOR


@dataclass(frozen=True, slots=True)
class ResidualTerm:
    evaluate: ResidualFn
    diagonal: float  # dR / d f1[i], constant


@dataclass(frozen=True, slots=True)
class Residuals:
    pp: NDArray[np.floating]
    pi: NDArray[np.floating]

    def norm(self, kind: NormKind = "max") -> float:
        """Norm over both fields and all points.

        ``"max"`` is the largest absolute residual; ``"l2"`` is the
        root-mean-square over all ``2*Nx`` residuals.
        """
        r = np.concatenate((self.pp, self.pi))
        if kind == "max":
            return float(np.max(np.abs(r)))
        if kind == "l2":
            return float(np.sqrt(np.mean(r * r)))
        raise ValueError(f"Unknown norm kind '{kind}'. Expected 'max' or 'l2'")


def _make_term(
    target: FieldName,
    source: FieldName,
    op: SpatialOperator,
    *,
    dt: float,
    dx: float,
    diagonal: float,
) -> ResidualTerm:
    t_attr = target.value
    s_attr = source.value

    def _residual(fields: WaveFields, i: int) -> float:
        f = getattr(fields, t_attr)
        s = getattr(fields, s_attr)
        return time_diff(f.current, f.advanced, i, dt) - time_avg(
            op, s.current, s.advanced, i, dx
        )

    return ResidualTerm(evaluate=_residual, diagonal=float(diagonal))


class ResidualEvaluator:
    """Per-point and whole-grid residuals for one implicit time step."""

    def __init__(self, grid: Grid, dt: float) -> None:
        if dt <= 0.0:
            raise ValueError("dt must be > 0")
        self.grid = grid
        self.dt = float(dt)
        self.dx = float(grid.dx)
        self.n = grid.Nx
        self._table = self._build_table()

    def _build_table(self) -> dict[tuple[FieldName, Region], ResidualTerm]:
        dt, dx = self.dt, self.dx
        inv_dt = 1.0 / dt

        # Weight of f[i] in each spatial operator; only enters the diagonal
        # when the operator acts on the field being solved for.
        w_fwd_self = d1_forward_3pt_coeffs(dx)[0]
        w_bwd_self = d1_backward_3pt_coeffs(dx)[2]

        minus_backward = negated(backward)
        table: dict[tuple[FieldName, Region], ResidualTerm] = {}
        for name, other in ((FieldName.PP, FieldName.PI), (FieldName.PI, FieldName.PP)):
            table[name, Region.LEFT] = _make_term(
                name, name, forward, dt=dt, dx=dx, diagonal=inv_dt - 0.5 * w_fwd_self
            )
            table[name, Region.INTERIOR] = _make_term(
                name, other, centered, dt=dt, dx=dx, diagonal=inv_dt
            )
            table[name, Region.RIGHT] = _make_term(
                name,
                name,
                minus_backward,
                dt=dt,
                dx=dx,
                diagonal=inv_dt + 0.5 * w_bwd_self,
            )
        return table

    def term(self, name: FieldName, i: int) -> ResidualTerm:
        return self._table[name, region_of(i, self.n)]

    def residual_at(self, fields: WaveFields, name: FieldName, i: int) -> float:
        return self.term(name, i).evaluate(fields, i)

    def residuals(self, fields: WaveFields) -> Residuals:
        """All residuals at once (vectorised; same values as ``residual_at``)."""
        if fields.n != self.n:
            raise ValueError(f"fields have {fields.n} points, grid has {self.n}")

        dt, dx = self.dt, self.dx
        out: dict[FieldName, NDArray[np.floating]] = {}
        for name in FIELD_ORDER:
            other = FieldName.PI if name == FieldName.PP else FieldName.PP
            f = fields[name]
            s = fields[other]
            f0, f1 = f.current, f.advanced

            r = (f1 - f0) / dt
            r[1:-1] -= 0.5 * (
                centered_array(s.advanced, dx) + centered_array(s.current, dx)
            )
            r[0] -= 0.5 * (forward_at_left(f1, dx) + forward_at_left(f0, dx))
            r[-1] += 0.5 * (backward_at_right(f1, dx) + backward_at_right(f0, dx))
            out[name] = r

        return Residuals(pp=out[FieldName.PP], pi=out[FieldName.PI])

    def norm(self, fields: WaveFields, kind: NormKind = "max") -> float:
        return self.residuals(fields).norm(kind)
