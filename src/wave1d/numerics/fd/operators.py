"""Point-wise finite-difference primitives on a uniform 1D grid.

Spatial operators take ``(f, i, dx)`` and read only the buffer they are
handed, so the same operator can be evaluated on either time level. Time
operators combine the current (``f0``) and advanced (``f1``) buffers.

Index conventions are 0-based: ``centered`` is defined on ``1..N-2``,
``forward`` on ``0..N-3`` and ``backward`` on ``2..N-1``. Requests outside
those ranges raise ``IndexError`` instead of silently wrapping around via
numpy's negative indexing.

Whole-array variants (``*_array``) return the operator on every point where
it is defined and are used for vectorised residual norms.
"""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
from numpy.typing import NDArray

from .stencils import d1_central_coeffs

__all__ = [
    "SpatialOperator",
    "centered",
    "forward",
    "backward",
    "negated",
    "time_diff",
    "time_avg",
    "centered_array",
    "forward_at_left",
    "backward_at_right",
]

SpatialOperator = Callable[[NDArray[np.floating], int, float], float]


def _require_index(f: NDArray[np.floating], i: int, lo: int, hi_offset: int) -> None:
    n = int(f.shape[0])
    if not (lo <= i <= n - 1 - hi_offset):
        raise IndexError(f"stencil undefined at index {i} for N={n}")


def centered(f: NDArray[np.floating], i: int, dx: float) -> float:
    _require_index(f, i, 1, 1)
    dl, _, du = d1_central_coeffs(dx)
    return float(dl * f[i - 1] + du * f[i + 1])


def forward(f: NDArray[np.floating], i: int, dx: float) -> float:
    """``(-3 f[i] + 4 f[i+1] - f[i+2]) / (2 dx)``, summed as differences.

    Written in terms of neighbour differences so a constant field gives
    exactly zero.
    """
    _require_index(f, i, 0, 2)
    d1 = f[i + 1] - f[i]
    d2 = f[i + 2] - f[i + 1]
    return float((3.0 * d1 - d2) / (2.0 * dx))


def backward(f: NDArray[np.floating], i: int, dx: float) -> float:
    """``(3 f[i] - 4 f[i-1] + f[i-2]) / (2 dx)``, mirror image of :func:`forward`."""
    _require_index(f, i, 2, 0)
    d1 = f[i] - f[i - 1]
    d2 = f[i - 1] - f[i - 2]
    return float((3.0 * d1 - d2) / (2.0 * dx))


def negated(op: SpatialOperator) -> SpatialOperator:
    """Return the spatial operator ``-op``."""

    def _neg(f: NDArray[np.floating], i: int, dx: float) -> float:
        return -op(f, i, dx)

    _neg.__name__ = f"neg_{getattr(op, '__name__', 'op')}"
    return _neg


def time_diff(
    f0: NDArray[np.floating], f1: NDArray[np.floating], i: int, dt: float
) -> float:
    """First-order forward time difference ``(f1[i] - f0[i]) / dt``."""
    return float((f1[i] - f0[i]) / dt)


def time_avg(
    op: SpatialOperator,
    f0: NDArray[np.floating],
    f1: NDArray[np.floating],
    i: int,
    dx: float,
) -> float:
    """Average of ``op`` evaluated separately on both time levels (Crank-Nicolson)."""
    return 0.5 * (op(f1, i, dx) + op(f0, i, dx))


# -----------------------------
# Whole-array variants
# -----------------------------


def centered_array(f: NDArray[np.floating], dx: float) -> NDArray[np.floating]:
    """Centered derivative on the interior points, shape (N-2,)."""
    dl, _, du = d1_central_coeffs(dx)
    return dl * f[:-2] + du * f[2:]


def forward_at_left(f: NDArray[np.floating], dx: float) -> float:
    return forward(f, 0, dx)


def backward_at_right(f: NDArray[np.floating], dx: float) -> float:
    return backward(f, int(f.shape[0]) - 1, dx)
