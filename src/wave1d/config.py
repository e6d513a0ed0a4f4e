from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from .exceptions import ConfigurationError
from .numerics.grids import GridConfig

NormKind = Literal["max", "l2"]


def _as_int(key: str, v: Any) -> int:
    """Integer-valued setting from loader input; fractional values are rejected."""
    try:
        num = float(v)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{key} must be an integer, got {v!r}") from e
    if not num.is_integer():
        raise ConfigurationError(f"{key} must be an integer, got {v!r}")
    return int(num)


@dataclass(frozen=True, slots=True)
class InitialDataConfig:
    """Gaussian pulse ``amp * exp(-((x - xc)/xwid)^2)`` with ``pi = idsignum * pp``."""

    amp: float = 1.0
    xc: float = 0.5
    xwid: float = 0.05
    idsignum: int = 0

    def __post_init__(self) -> None:
        if self.idsignum not in (-1, 0, 1):
            raise ConfigurationError("idsignum must be one of -1, 0, 1")
        if not self.xwid > 0:
            raise ConfigurationError("xwid must be > 0")


@dataclass(frozen=True, slots=True)
class RelaxationConfig:
    tolerance: float = 1e-10
    max_iterations: int = 100
    norm: NormKind = "max"

    def __post_init__(self) -> None:
        if not self.tolerance > 0:
            raise ConfigurationError("tolerance must be > 0")
        if self.max_iterations < 1:
            raise ConfigurationError("max_iterations must be >= 1")
        if self.norm not in ("max", "l2"):
            raise ConfigurationError("norm must be 'max' or 'l2'")


@dataclass(frozen=True, slots=True)
class SimulationConfig:
    """Everything a :class:`~wave1d.simulation.Simulation` needs.

    Exactly one of ``final_time`` and ``n_steps`` must be given. When ``dt`` is
    omitted it defaults to ``courant * dx``.
    """

    grid: GridConfig = field(default_factory=GridConfig)
    initial_data: InitialDataConfig = field(default_factory=InitialDataConfig)
    relaxation: RelaxationConfig = field(default_factory=RelaxationConfig)
    dt: float | None = None
    courant: float = 0.5
    final_time: float | None = None
    n_steps: int | None = None
    method: str = "relaxation"

    def __post_init__(self) -> None:
        if self.dt is not None and not self.dt > 0:
            raise ConfigurationError("dt must be > 0")
        if self.dt is None and not self.courant > 0:
            raise ConfigurationError("courant must be > 0")
        if (self.final_time is None) == (self.n_steps is None):
            raise ConfigurationError("Provide exactly one of final_time or n_steps")
        ft = self.final_time
        if ft is not None and not (ft >= 0 and math.isfinite(ft)):
            raise ConfigurationError("final_time must be finite and >= 0")
        n = self.n_steps
        if n is not None and (int(n) != n or n < 0):
            raise ConfigurationError("n_steps must be a non-negative integer")

    @property
    def dx(self) -> float:
        return self.grid.dx

    @property
    def time_step(self) -> float:
        if self.dt is not None:
            return float(self.dt)
        return float(self.courant) * self.grid.dx

    @property
    def total_steps(self) -> int:
        """Steps to take; a final_time that is not a multiple of dt is rounded up."""
        if self.n_steps is not None:
            return int(self.n_steps)
        assert self.final_time is not None
        return max(0, math.ceil(float(self.final_time) / self.time_step - 1e-9))

    @classmethod
    def from_mapping(cls, d: Mapping[str, Any]) -> SimulationConfig:
        """Build a config from flat scalars as supplied by an external loader.

        Recognised keys: ``xmin, xmax, Nx, dt, courant, amp, xc, xwid,
        idsignum, tolerance, max_iterations, norm, final_time, n_steps,
        method``. Unknown keys raise :class:`ConfigurationError`.
        """
        known = {
            "xmin", "xmax", "Nx", "dt", "courant", "amp", "xc", "xwid",
            "idsignum", "tolerance", "max_iterations", "norm", "final_time",
            "n_steps", "method",
        }  # fmt: skip
        unknown = sorted(set(d) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {unknown}")

        grid_defaults = GridConfig()
        id_defaults = InitialDataConfig()
        rx_defaults = RelaxationConfig()

        def _opt(key: str, conv):
            v = d.get(key)
            return None if v is None else conv(v)

        try:
            return cls(
                grid=GridConfig(
                    Nx=_as_int("Nx", d.get("Nx", grid_defaults.Nx)),
                    xmin=float(d.get("xmin", grid_defaults.xmin)),
                    xmax=float(d.get("xmax", grid_defaults.xmax)),
                ),
                initial_data=InitialDataConfig(
                    amp=float(d.get("amp", id_defaults.amp)),
                    xc=float(d.get("xc", id_defaults.xc)),
                    xwid=float(d.get("xwid", id_defaults.xwid)),
                    idsignum=_as_int(
                        "idsignum", d.get("idsignum", id_defaults.idsignum)
                    ),
                ),
                relaxation=RelaxationConfig(
                    tolerance=float(d.get("tolerance", rx_defaults.tolerance)),
                    max_iterations=_as_int(
                        "max_iterations",
                        d.get("max_iterations", rx_defaults.max_iterations),
                    ),
                    norm=d.get("norm", rx_defaults.norm),
                ),
                dt=_opt("dt", float),
                courant=float(d.get("courant", 0.5)),
                final_time=_opt("final_time", float),
                n_steps=_opt("n_steps", lambda v: _as_int("n_steps", v)),
                method=str(d.get("method", "relaxation")),
            )
        except ConfigurationError:
            raise
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration value: {e}") from e
