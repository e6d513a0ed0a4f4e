# tests/test_fd_stencils.py

import numpy as np
import pytest

from wave1d.numerics.fd.operators import (
    backward,
    centered,
    centered_array,
    forward,
    negated,
    time_avg,
    time_diff,
)
from wave1d.numerics.fd.stencils import (
    d1_backward_3pt_coeffs,
    d1_central_coeffs,
    d1_forward_3pt_coeffs,
)
from wave1d.numerics.grids import GridConfig, build_grid


@pytest.mark.parametrize("Nx", [3, 4, 11, 101])
def test_operators_exact_for_x_squared(Nx: int) -> None:
    """centered/forward/backward reproduce d/dx x^2 = 2x wherever they are defined."""
    grid = build_grid(GridConfig(Nx=Nx, xmin=-0.7, xmax=1.3))
    x = np.asarray(grid.x)
    f = x**2
    dx = grid.dx

    for i in range(1, Nx - 1):
        assert centered(f, i, dx) == pytest.approx(2.0 * x[i], abs=1e-12)
    for i in range(0, Nx - 2):
        assert forward(f, i, dx) == pytest.approx(2.0 * x[i], abs=1e-12)
    for i in range(2, Nx):
        assert backward(f, i, dx) == pytest.approx(2.0 * x[i], abs=1e-12)


def test_centered_array_matches_pointwise() -> None:
    grid = build_grid(GridConfig(Nx=17, xmin=0.0, xmax=2.0))
    rng = np.random.default_rng(11)
    f = rng.normal(size=grid.Nx)

    expected = np.array([centered(f, i, grid.dx) for i in range(1, grid.Nx - 1)])
    np.testing.assert_allclose(centered_array(f, grid.dx), expected, rtol=0.0, atol=1e-12)


@pytest.mark.parametrize(
    "coeffs",
    [d1_central_coeffs, d1_forward_3pt_coeffs, d1_backward_3pt_coeffs],
)
def test_first_derivative_weights_sum_to_zero(coeffs) -> None:
    """Derivative of a constant is zero."""
    assert sum(coeffs(0.1)) == pytest.approx(0.0, abs=1e-12)


@pytest.mark.parametrize(
    "op, bad",
    [
        (centered, [0, 4]),
        (forward, [3, 4]),
        (backward, [0, 1]),
    ],
)
def test_stencils_refuse_out_of_range_indices(op, bad) -> None:
    f = np.arange(5, dtype=float)
    for i in bad:
        with pytest.raises(IndexError):
            op(f, i, 0.1)


def test_minimum_grid_boundary_stencils_stay_in_range() -> None:
    """On Nx=3 the one-sided stencils use exactly the three grid points."""
    grid = build_grid(GridConfig(Nx=3, xmin=0.0, xmax=1.0))
    f = np.asarray(grid.x) ** 2

    assert forward(f, 0, grid.dx) == pytest.approx(0.0, abs=1e-12)
    assert backward(f, 2, grid.dx) == pytest.approx(2.0, abs=1e-12)
    assert centered(f, 1, grid.dx) == pytest.approx(1.0, abs=1e-12)


def test_time_operators() -> None:
    f0 = np.array([0.0, 1.0, 4.0, 9.0])
    f1 = np.array([1.0, 2.0, 5.0, 10.0])

    assert time_diff(f0, f1, 2, 0.5) == pytest.approx(2.0)
    avg = time_avg(centered, f0, f1, 1, 1.0)
    assert avg == pytest.approx(0.5 * (centered(f1, 1, 1.0) + centered(f0, 1, 1.0)))
    assert negated(backward)(f0, 3, 1.0) == pytest.approx(-backward(f0, 3, 1.0))


def test_one_sided_operators_match_their_weights() -> None:
    rng = np.random.default_rng(5)
    f = rng.normal(size=6)
    dx = 0.13

    w0, w1, w2 = d1_forward_3pt_coeffs(dx)
    assert forward(f, 1, dx) == pytest.approx(w0 * f[1] + w1 * f[2] + w2 * f[3])
    b0, b1, b2 = d1_backward_3pt_coeffs(dx)
    assert backward(f, 5, dx) == pytest.approx(b0 * f[3] + b1 * f[4] + b2 * f[5])


@pytest.mark.parametrize("c", [0.3, -1.7, 1e6, 0.1 + 0.2])
def test_operators_vanish_exactly_on_constants(c: float) -> None:
    f = np.full(7, c)
    dx = 1.0 / 6.0

    assert forward(f, 0, dx) == 0.0
    assert backward(f, 6, dx) == 0.0
    assert centered(f, 3, dx) == 0.0
    assert np.all(centered_array(f, dx) == 0.0)
