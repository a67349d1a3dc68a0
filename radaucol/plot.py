"""
Visualization of transcription grids.
"""

import logging

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure as MplFigure

from .transcription.base import TranscriptionScheme


logger = logging.getLogger(__name__)


def plot_transcription_grid(
    scheme: TranscriptionScheme,
    figsize: tuple[float, float] = (10.0, 5.0),
) -> MplFigure:
    """
    Plot grid points, mesh boundaries and quadrature coefficients of a scheme.

    Args:
        scheme: Configured transcription scheme
        figsize: Figure size

    Returns:
        The created figure; the caller decides whether to show or save it

    Examples:
        >>> fig = plot_transcription_grid(create_transcription(settings))
        >>> fig.savefig("grid.png")
    """
    grid = scheme.build_grid()
    mesh_indicator = scheme.build_mesh_indicator().astype(bool)
    coefficients = scheme.build_quadrature_coefficients()

    fig, (ax_grid, ax_quad) = plt.subplots(2, 1, figsize=figsize, sharex=True)

    ax_grid.plot(
        grid[~mesh_indicator],
        np.zeros(np.count_nonzero(~mesh_indicator)),
        "o",
        color="tab:blue",
        label="Collocation points",
    )
    ax_grid.plot(
        grid[mesh_indicator],
        np.zeros(np.count_nonzero(mesh_indicator)),
        "s",
        color="tab:red",
        label="Mesh points",
    )
    for mesh_time in grid[mesh_indicator]:
        ax_grid.axvline(mesh_time, color="tab:red", alpha=0.3, linestyle="--")
    ax_grid.set_yticks([])
    ax_grid.set_title(
        f"{scheme.name}: {scheme.num_mesh_intervals} intervals, "
        f"{scheme.num_grid_points} grid points"
    )
    ax_grid.legend(loc="upper right")

    ax_quad.stem(grid, coefficients)
    ax_quad.set_xlabel("Time")
    ax_quad.set_ylabel("Quadrature coefficient")
    ax_quad.grid(True, alpha=0.3)

    fig.tight_layout()
    return fig
