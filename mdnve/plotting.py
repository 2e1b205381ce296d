"""
Plotting utilities for block-averaged results.

Example:
    >>> from mdnve import simulate, plotting
    >>> result = simulate.lj_fluid(n_cells=3, verbose=False)
    >>> plotting.block_averages(result, show=False)
    >>> plotting.save("blocks.png")
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from .analysis.properties import DISPLAYED

if TYPE_CHECKING:
    from .simulate import SimulationResult

logger = logging.getLogger(__name__)

# Try to import matplotlib, but don't fail if not available
try:
    import matplotlib.pyplot as plt

    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False
    plt = None


def _check_matplotlib():
    """Check if matplotlib is available."""
    if not HAS_MATPLOTLIB:
        raise ImportError(
            "matplotlib is required for plotting. "
            "Install it with: pip install matplotlib"
        )


def block_averages(
    result: SimulationResult,
    names: Sequence[str] | None = None,
    show: bool = True,
    figsize: tuple[float, float] = (12, 6),
):
    """
    Plot block values of each observable against block number.

    Run averages are drawn as dashed lines.

    Args:
        result: SimulationResult from a run.
        names: Observables to plot (default: the displayed ones).
        show: Whether to display the plot immediately.
        figsize: Figure size (width, height) in inches.

    Returns:
        The matplotlib Figure.
    """
    _check_matplotlib()

    if names is None:
        names = result.names[:DISPLAYED]
    n_plots = len(names)
    n_cols = min(3, n_plots)
    n_rows = int(np.ceil(n_plots / n_cols))

    fig, axes = plt.subplots(n_rows, n_cols, figsize=figsize, squeeze=False)
    blocks = np.arange(1, len(result.block_values) + 1)

    for ax, name in zip(axes.flat, names):
        ax.plot(blocks, result.series(name), "o-", lw=1.0, ms=3)
        if name in result.averages:
            ax.axhline(result.averages[name], color="k", linestyle="--", alpha=0.5)
        ax.set_xlabel("Block")
        ax.set_title(name)
        ax.grid(True, alpha=0.3)

    for ax in list(axes.flat)[n_plots:]:
        ax.set_visible(False)

    fig.tight_layout()
    if show:
        plt.show()
    return fig


def conserved_energy(result: SimulationResult, show: bool = True):
    """
    Plot block mean-squared deviation of the conserved energy.

    A flat curve indicates no systematic drift.
    """
    _check_matplotlib()

    fig, ax = plt.subplots(figsize=(6, 4))
    values = result.series("E:MSD")
    ax.semilogy(np.arange(1, len(values) + 1), values, "ko-", ms=3)
    ax.set_xlabel("Block")
    ax.set_ylabel("MSD of conserved energy")
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    if show:
        plt.show()
    return fig


def save(filename: str | Path, dpi: int = 150) -> None:
    """
    Save the current figure to a file.

    Args:
        filename: Output filename (e.g., "plot.png", "plot.pdf").
        dpi: Resolution in dots per inch.
    """
    _check_matplotlib()
    plt.savefig(filename, dpi=dpi, bbox_inches="tight")
    logger.info("Saved plot to %s", filename)
