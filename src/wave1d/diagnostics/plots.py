from __future__ import annotations

import numpy as np
import pandas as pd

from ..types import FieldName, WaveSolution1D
from ._mpl import finish_ax, new_axes, require_columns

__all__ = ["plot_snapshots", "plot_convergence"]


def plot_snapshots(
    sol: WaveSolution1D,
    *,
    field: FieldName | str = FieldName.PP,
    n_curves: int = 6,
    figsize=(7, 4),
):
    """Overlay ``n_curves`` evenly spaced snapshots of one field."""
    name = FieldName(field)
    data = sol.pp if name == FieldName.PP else sol.pi
    n_snap = int(data.shape[0])
    idx = np.unique(np.linspace(0, n_snap - 1, max(1, n_curves)).round().astype(int))

    fig, ax = new_axes(figsize)
    x = np.asarray(sol.grid.x)
    for k in idx:
        ax.plot(x, data[k], label=f"t={sol.t[k]:.3g}")

    title = f"{name.value} snapshots ({sol.method})"
    finish_ax(ax, xlabel="x", ylabel=name.value, title=title)
    return fig, ax


def plot_convergence(
    df: pd.DataFrame,
    *,
    x_col: str = "dx",
    y_col: str = "max_err",
    figsize=(7, 4),
):
    """Log-log error vs resolution with a second-order reference slope."""
    require_columns(df, [x_col, y_col])

    x = df[x_col].astype(float).to_numpy()
    y = df[y_col].astype(float).to_numpy()

    fig, ax = new_axes(figsize)
    ax.plot(x, y, "o-", label=y_col)
    ax.plot(x, y[0] * (x / x[0]) ** 2, "--", label="slope 2")

    finish_ax(ax, xlabel=x_col, ylabel=y_col, title="Refinement study", loglog=True)
    return fig, ax
