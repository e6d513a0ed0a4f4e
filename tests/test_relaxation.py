import numpy as np
import pytest

from wave1d import RelaxationConfig, Simulation
from wave1d.numerics.fields import WaveFields
from wave1d.numerics.grids import GridConfig, build_grid
from wave1d.numerics.wave import (
    DirectSolver,
    ImplicitSolver,
    RelaxationSolver,
    ResidualEvaluator,
    assemble_jacobian,
    available_methods,
    register_method,
    resolve_method,
)


def _seeded(make_cfg, **overrides):
    sim = Simulation(make_cfg(**overrides))
    sim.fields.seed_guess()
    return sim


def test_already_solved_state_takes_zero_sweeps() -> None:
    grid = build_grid(GridConfig(Nx=21))
    ev = ResidualEvaluator(grid, dt=0.025)
    fields = WaveFields.zeros(21)
    for f in fields:
        f.current[:] = -1.5
    fields.seed_guess()

    result = RelaxationSolver(tolerance=1e-12).solve(fields, ev)

    assert result.converged
    assert result.iterations == 0
    assert result.final_norm == 0.0
    np.testing.assert_array_equal(fields.pp.advanced, fields.pp.current)


def test_first_step_of_pulse_converges_within_twenty_sweeps(make_cfg) -> None:
    sim = _seeded(make_cfg)

    pre = sim.evaluator.norm(sim.fields)
    assert pre > 0.0

    result = RelaxationSolver(tolerance=1e-10, max_iterations=20).solve(sim.fields, sim.evaluator)

    assert result.converged
    assert 1 <= result.iterations <= 20
    assert result.initial_norm == pytest.approx(pre)
    assert result.final_norm < 1e-10
    assert sim.evaluator.norm(sim.fields) < 1e-10
    assert len(result.norm_history) == result.iterations + 1


def test_relaxation_never_touches_current_level(make_cfg) -> None:
    sim = _seeded(make_cfg, idsignum=1)
    pp0 = sim.fields.pp.current.copy()
    pi0 = sim.fields.pi.current.copy()

    RelaxationSolver(tolerance=1e-12).solve(sim.fields, sim.evaluator)

    np.testing.assert_array_equal(sim.fields.pp.current, pp0)
    np.testing.assert_array_equal(sim.fields.pi.current, pi0)
    assert not np.array_equal(sim.fields.pp.advanced, pp0)


def test_exhausted_sweeps_report_non_convergence(make_cfg) -> None:
    sim = _seeded(make_cfg)

    result = RelaxationSolver(tolerance=1e-14, max_iterations=2).solve(sim.fields, sim.evaluator)

    assert not result.converged
    assert result.iterations == 2
    assert result.final_norm >= 1e-14
    assert result.final_norm < result.initial_norm


def test_l2_norm_also_converges(make_cfg) -> None:
    sim = _seeded(make_cfg, idsignum=-1)
    result = RelaxationSolver(tolerance=1e-10, norm="l2").solve(sim.fields, sim.evaluator)
    assert result.converged
    assert sim.evaluator.norm(sim.fields, "l2") < 1e-10


@pytest.mark.parametrize("Nx", [3, 5, 41])
@pytest.mark.parametrize("idsignum", [-1, 0, 1])
def test_relaxation_matches_direct_solve(make_cfg, Nx: int, idsignum: int) -> None:
    a = _seeded(make_cfg, Nx=Nx, idsignum=idsignum, xwid=0.3)
    b = _seeded(make_cfg, Nx=Nx, idsignum=idsignum, xwid=0.3)

    ra = RelaxationSolver(tolerance=1e-12, max_iterations=500).solve(a.fields, a.evaluator)
    rb = DirectSolver(tolerance=1e-10).solve(b.fields, b.evaluator)

    assert ra.converged and rb.converged
    assert rb.iterations == 1
    np.testing.assert_allclose(a.fields.pp.advanced, b.fields.pp.advanced, rtol=0.0, atol=1e-10)
    np.testing.assert_allclose(a.fields.pi.advanced, b.fields.pi.advanced, rtol=0.0, atol=1e-10)


def test_jacobian_matches_residual_slopes() -> None:
    n, dt = 6, 0.07
    grid = build_grid(GridConfig(Nx=n))
    ev = ResidualEvaluator(grid, dt=dt)
    J = assemble_jacobian(n, dt, grid.dx).toarray()

    rng = np.random.default_rng(5)
    fields = WaveFields.zeros(n)
    for f in fields:
        f.current[:] = rng.normal(size=n)
        f.advanced[:] = rng.normal(size=n)

    def stacked() -> np.ndarray:
        r = ev.residuals(fields)
        return np.concatenate((r.pp, r.pi))

    base = stacked()
    for col in range(2 * n):
        f = fields.pp if col < n else fields.pi
        f.advanced[col % n] += 1.0
        np.testing.assert_allclose(stacked() - base, J[:, col], rtol=1e-9, atol=1e-9)
        f.advanced[col % n] -= 1.0


# --- registry ---------------------------------------------------------------


def test_builtin_methods_and_aliases() -> None:
    cfg = RelaxationConfig(tolerance=1e-8, max_iterations=9)
    names = available_methods()
    for key in ("relaxation", "ngs", "gauss-seidel", "direct", "sparse"):
        assert key in names

    ngs = resolve_method("NGS", cfg)
    assert isinstance(ngs, RelaxationSolver)
    assert ngs.tolerance == pytest.approx(1e-8)
    assert ngs.max_iterations == 9
    assert isinstance(resolve_method(None, cfg), RelaxationSolver)
    assert isinstance(resolve_method("sparse", cfg), DirectSolver)


def test_unknown_method_lists_available() -> None:
    with pytest.raises(ValueError, match="Available"):
        resolve_method("multigrid", RelaxationConfig())


def test_register_custom_method() -> None:
    register_method(
        "ngs-tight",
        lambda cfg: RelaxationSolver(tolerance=cfg.tolerance * 1e-2),
        overwrite=True,
    )
    solver = resolve_method("ngs-tight", RelaxationConfig(tolerance=1e-8))
    assert isinstance(solver, ImplicitSolver)
    assert solver.tolerance == pytest.approx(1e-10)

    with pytest.raises(KeyError):
        register_method("ngs-tight", lambda cfg: RelaxationSolver())
