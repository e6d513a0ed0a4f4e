import math

import numpy as np
import pytest

from wave1d import (
    ConfigurationError,
    GridConfig,
    InitialDataConfig,
    RelaxationConfig,
    SimulationConfig,
)
from wave1d.numerics.grids import build_grid


def test_grid_spacing_and_coordinates() -> None:
    grid = build_grid(GridConfig(Nx=5, xmin=-1.0, xmax=1.0))
    assert grid.Nx == 5
    assert grid.dx == pytest.approx(0.5)
    np.testing.assert_allclose(grid.x, [-1.0, -0.5, 0.0, 0.5, 1.0], atol=1e-15)
    assert grid.coord(3) == pytest.approx(0.5)
    with pytest.raises(IndexError):
        grid.coord(5)


def test_grid_coordinates_are_read_only() -> None:
    grid = build_grid(GridConfig(Nx=4))
    with pytest.raises(ValueError):
        grid.x[0] = 42.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"Nx": 2},
        {"Nx": 0},
        {"Nx": 5.5},
        {"Nx": 11, "xmin": 1.0, "xmax": 1.0},
        {"Nx": 11, "xmin": 2.0, "xmax": 1.0},
    ],
)
def test_grid_config_rejects_bad_values(kwargs) -> None:
    with pytest.raises(ConfigurationError):
        GridConfig(**kwargs)


@pytest.mark.parametrize("idsignum", [-2, 2, 0.5])
def test_idsignum_out_of_range(idsignum) -> None:
    with pytest.raises(ConfigurationError):
        InitialDataConfig(idsignum=idsignum)


def test_configuration_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        InitialDataConfig(xwid=0.0)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"tolerance": 0.0},
        {"max_iterations": 0},
        {"norm": "l1"},
    ],
)
def test_relaxation_config_rejects_bad_values(kwargs) -> None:
    with pytest.raises(ConfigurationError):
        RelaxationConfig(**kwargs)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"n_steps": 1, "dt": 0.0},
        {"n_steps": 1, "dt": -0.1},
        {"n_steps": 1, "courant": 0.0},
        {},
        {"n_steps": 1, "final_time": 1.0},
        {"n_steps": -1},
        {"final_time": -0.5},
    ],
)
def test_simulation_config_rejects_bad_values(kwargs) -> None:
    with pytest.raises(ConfigurationError):
        SimulationConfig(**kwargs)


def test_default_time_step_is_half_dx() -> None:
    cfg = SimulationConfig(n_steps=3)
    assert cfg.dx == pytest.approx(0.01)
    assert cfg.time_step == pytest.approx(0.005)
    assert cfg.total_steps == 3


def test_final_time_rounds_up_to_whole_steps() -> None:
    cfg = SimulationConfig(dt=0.1, final_time=0.25)
    assert cfg.total_steps == 3

    exact = SimulationConfig(dt=0.1, final_time=0.3)
    assert exact.total_steps == 3
    assert math.isclose(exact.total_steps * exact.time_step, 0.3)


def test_from_mapping_builds_nested_configs() -> None:
    cfg = SimulationConfig.from_mapping(
        {
            "Nx": 21,
            "xmin": -1.0,
            "xmax": 1.0,
            "dt": 0.05,
            "amp": 2.0,
            "xc": 0.1,
            "xwid": 0.2,
            "idsignum": -1,
            "tolerance": 1e-9,
            "max_iterations": 7,
            "final_time": 0.5,
            "method": "direct",
        }
    )
    assert cfg.grid == GridConfig(Nx=21, xmin=-1.0, xmax=1.0)
    assert cfg.initial_data == InitialDataConfig(amp=2.0, xc=0.1, xwid=0.2, idsignum=-1)
    assert cfg.relaxation.tolerance == pytest.approx(1e-9)
    assert cfg.relaxation.max_iterations == 7
    assert cfg.total_steps == 10
    assert cfg.method == "direct"


def test_from_mapping_rejects_unknown_and_malformed_keys() -> None:
    with pytest.raises(ConfigurationError):
        SimulationConfig.from_mapping({"n_steps": 1, "nx": 11})
    with pytest.raises(ConfigurationError):
        SimulationConfig.from_mapping({"n_steps": 1, "Nx": "many"})
    with pytest.raises(ConfigurationError):
        SimulationConfig.from_mapping({"n_steps": 1, "Nx": 2})


@pytest.mark.parametrize(
    "key, value",
    [
        ("idsignum", 0.5),
        ("Nx", 5.5),
        ("max_iterations", 2.5),
        ("n_steps", 1.5),
        ("Nx", float("nan")),
    ],
)
def test_from_mapping_rejects_fractional_integers(key: str, value: float) -> None:
    mapping = {"n_steps": 1, key: value}
    with pytest.raises(ConfigurationError, match=key):
        SimulationConfig.from_mapping(mapping)


def test_from_mapping_accepts_integral_floats_and_strings() -> None:
    cfg = SimulationConfig.from_mapping({"Nx": 11.0, "idsignum": "-1", "n_steps": "4"})
    assert cfg.grid.Nx == 11
    assert isinstance(cfg.grid.Nx, int)
    assert cfg.initial_data.idsignum == -1
    assert cfg.total_steps == 4


def test_nan_settings_are_rejected() -> None:
    nan = float("nan")
    with pytest.raises(ConfigurationError):
        RelaxationConfig(tolerance=nan)
    with pytest.raises(ConfigurationError):
        InitialDataConfig(xwid=nan)
    with pytest.raises(ConfigurationError):
        SimulationConfig(final_time=nan)
    with pytest.raises(ConfigurationError):
        SimulationConfig(final_time=float("inf"))
    with pytest.raises(ConfigurationError):
        SimulationConfig.from_mapping({"final_time": nan})
