"""Exceptions raised by the wave solver."""


class WaveSolverError(Exception):
    """Base class for wave1d failures."""


class ConfigurationError(WaveSolverError, ValueError):
    """Raised when grid, time-step or initial-data parameters are invalid.

    This error is raised before any stepping takes place, typically from the
    ``__post_init__`` of the configuration dataclasses in :mod:`wave1d.config`.

    Notes
    -----
    Typical causes are ``Nx < 3`` (the one-sided stencils need three points),
    ``xmin >= xmax`` (non-positive ``dx``), ``dt <= 0`` or an ``idsignum``
    outside ``{-1, 0, 1}``.
    """


class ConvergenceError(WaveSolverError, RuntimeError):
    """Raised when the implicit update of a time step fails to converge.

    The simulation that raised it is left in the ``FAILED`` state and refuses
    further steps; the unconverged advanced time level is never committed.
    """

    def __init__(self, step: int, norm: float, iterations: int) -> None:
        self.step = int(step)
        self.norm = float(norm)
        self.iterations = int(iterations)
        super().__init__(
            f"Relaxation did not converge at step {self.step}: "
            f"residual norm {self.norm:.3e} after {self.iterations} sweeps"
        )
