"""Implicit-step solvers and a small registry.

This module provides two things:

1) A lightweight *solver interface* (:class:`ImplicitSolver`) so the
   simulation can drive different solvers of the implicit update uniformly.
2) A string-to-solver *registry* so users can do ``method="direct"`` (or
   register their own solvers) without editing :class:`~wave1d.simulation.Simulation`.

Built-in solvers are the Newton-Gauss-Seidel relaxation (the default) and a
sparse direct solve used for cross-checking.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from ...config import RelaxationConfig
from ..fields import WaveFields
from .direct import DirectSolver
from .relaxation import RelaxationResult, RelaxationSolver
from .residuals import ResidualEvaluator

__all__ = [
    "ImplicitSolver",
    "register_method",
    "available_methods",
    "resolve_method",
]


@runtime_checkable
class ImplicitSolver(Protocol):
    """Solves the implicit update of one time step in place."""

    @property
    def name(self) -> str:  # pragma: no cover
        ...

    def solve(
        self, fields: WaveFields, evaluator: ResidualEvaluator
    ) -> RelaxationResult:  # pragma: no cover
        ...


# -----------------------------
# Registry
# -----------------------------

SolverFactory = Callable[[RelaxationConfig], ImplicitSolver]
_METHOD_REGISTRY: dict[str, SolverFactory] = {}


def register_method(
    name: str,
    factory: SolverFactory,
    *,
    overwrite: bool = False,
    aliases: tuple[str, ...] = (),
) -> None:
    """Register a solver factory under one or more names.

    Parameters
    ----------
    name:
        Primary key users will pass as ``SimulationConfig(method=...)``.
    factory:
        Callable taking a :class:`~wave1d.config.RelaxationConfig` and
        returning a new solver instance.
    overwrite:
        If False (default), raise if ``name`` or any alias already exists.
    aliases:
        Additional strings that should resolve to the same factory.
    """

    keys = (name, *aliases)
    for k in keys:
        kk = str(k).lower().strip()
        if not kk:
            raise ValueError("Method name/alias cannot be empty")
        if (not overwrite) and (kk in _METHOD_REGISTRY):
            raise KeyError(f"Method '{kk}' is already registered")
        _METHOD_REGISTRY[kk] = factory


def available_methods() -> list[str]:
    """Return the currently registered method keys (sorted)."""

    return sorted(_METHOD_REGISTRY.keys())


def resolve_method(
    method: str | ImplicitSolver | None,
    cfg: RelaxationConfig,
) -> ImplicitSolver:
    """Resolve the user's method choice into a concrete :class:`ImplicitSolver`.

    A solver instance is returned as-is; ``None`` means ``"relaxation"``;
    strings are looked up in the registry.
    """

    if method is None:
        method = "relaxation"

    if isinstance(method, ImplicitSolver):
        return method

    key = str(method).lower().strip()
    try:
        factory = _METHOD_REGISTRY[key]
    except KeyError as e:
        raise ValueError(
            f"Unknown method '{method}'. Available: {', '.join(available_methods())}"
        ) from e
    return factory(cfg)


def _register_builtin_methods() -> None:
    register_method(
        "relaxation",
        lambda cfg: RelaxationSolver(
            tolerance=cfg.tolerance,
            max_iterations=cfg.max_iterations,
            norm=cfg.norm,
        ),
        overwrite=True,
        aliases=("ngs", "gauss-seidel", "newton-gauss-seidel"),
    )
    register_method(
        "direct",
        lambda cfg: DirectSolver(tolerance=cfg.tolerance, norm=cfg.norm),
        overwrite=True,
        aliases=("sparse", "spsolve"),
    )


_register_builtin_methods()
