from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import cast

import numpy as np
from numpy.typing import NDArray

from .numerics.grids import Grid


class FieldName(str, Enum):
    """Names of the two evolved fields.

    Attributes
    ----------
    PP : str
        Spatial derivative of the scalar field ("pp").
    PI : str
        Time derivative of the scalar field ("pi").
    """

    PP = "pp"
    PI = "pi"


# Fixed update order within a relaxation sweep.
FIELD_ORDER: tuple[FieldName, FieldName] = (FieldName.PP, FieldName.PI)


class SimState(str, Enum):
    INIT = "init"
    STEPPING = "stepping"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class Snapshot:
    """A committed time level.

    Parameters
    ----------
    step : int
        Number of steps taken to reach this level (0 for the initial data).
    t : float
        Simulation time.
    pp, pi : numpy.ndarray
        Copies of the field values, shape ``(Nx,)``. Later steps never mutate
        them.
    """

    step: int
    t: float
    pp: NDArray[np.floating]
    pi: NDArray[np.floating]


@dataclass(frozen=True, slots=True)
class WaveSolution1D:
    grid: Grid
    t: NDArray[np.floating]  # (n_snap,)
    pp: NDArray[np.floating]  # (n_snap, Nx)
    pi: NDArray[np.floating]  # (n_snap, Nx)
    sweeps: NDArray[np.integer]  # (n_steps,) solver iterations per step
    method: str

    @property
    def t_final(self) -> float:
        return float(self.t[-1])

    @property
    def pp_final(self) -> NDArray[np.floating]:
        return cast(NDArray[np.floating], self.pp[-1])

    @property
    def pi_final(self) -> NDArray[np.floating]:
        return cast(NDArray[np.floating], self.pi[-1])
