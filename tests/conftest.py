"""Pytest helpers for the wave1d library."""

from __future__ import annotations

import pytest

from wave1d import GridConfig, InitialDataConfig, RelaxationConfig, SimulationConfig


@pytest.fixture
def scenario_params() -> dict:
    """Canonical pulse: 101 points on [0, 1], Gaussian of width 0.05 at 0.5, dt = dx/2."""
    return {
        "Nx": 101,
        "xmin": 0.0,
        "xmax": 1.0,
        "amp": 1.0,
        "xc": 0.5,
        "xwid": 0.05,
        "idsignum": 0,
        "courant": 0.5,
    }


@pytest.fixture
def make_cfg(scenario_params):
    """Factory fixture for SimulationConfig with scenario defaults."""

    def _make(**overrides) -> SimulationConfig:
        p = {**scenario_params, **overrides}
        if "final_time" not in p and "n_steps" not in p:
            p["n_steps"] = 1
        return SimulationConfig(
            grid=GridConfig(Nx=p["Nx"], xmin=p["xmin"], xmax=p["xmax"]),
            initial_data=InitialDataConfig(
                amp=p["amp"], xc=p["xc"], xwid=p["xwid"], idsignum=p["idsignum"]
            ),
            relaxation=RelaxationConfig(
                tolerance=p.get("tolerance", 1e-10),
                max_iterations=p.get("max_iterations", 100),
                norm=p.get("norm", "max"),
            ),
            dt=p.get("dt"),
            courant=p["courant"],
            final_time=p.get("final_time"),
            n_steps=p.get("n_steps"),
            method=p.get("method", "relaxation"),
        )

    return _make
