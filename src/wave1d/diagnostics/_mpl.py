"""Matplotlib plumbing for the wave1d plots.

Matplotlib is the optional ``plot`` extra, so pyplot is only imported when a
figure is actually requested.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from matplotlib.figure import Figure


def get_plt():
    """Return matplotlib.pyplot, or explain which extra to install."""
    try:
        import matplotlib.pyplot as plt
    except ModuleNotFoundError as e:
        raise ModuleNotFoundError(
            "wave1d plots need matplotlib: pip install wave1d[plot]"
        ) from e
    return plt


def new_axes(figsize=(7, 4)) -> tuple[Figure, Axes]:
    """A single-panel figure with constrained layout."""
    fig, ax = get_plt().subplots(1, 1, figsize=figsize, constrained_layout=True)
    return fig, ax


def finish_ax(
    ax: Axes,
    *,
    xlabel: str,
    ylabel: str,
    title: str,
    loglog: bool = False,
) -> None:
    """Label, legend and light grid; both axes logarithmic when ``loglog``."""
    if loglog:
        ax.set_xscale("log")
        ax.set_yscale("log")
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    ax.grid(which="major", alpha=0.25)
    for side in ("top", "right"):
        ax.spines[side].set_visible(False)
    if ax.get_legend_handles_labels()[0]:
        ax.legend(frameon=True)


def require_columns(df, cols: Iterable[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"convergence table is missing columns: {missing}")
