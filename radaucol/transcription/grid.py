# radaucol/transcription/grid.py
"""
Grid and mesh construction for collocation transcriptions.

The user mesh is normalized to [0, 1]. Grid times are produced in absolute
problem time, so the (final_time - initial_time) scaling happens here and only
here; every downstream routine takes interval durations from absolute times.
"""

import logging

import numpy as np

from ..rc_types import FloatArray, IntArray


logger = logging.getLogger(__name__)


def normalized_to_absolute_time(
    normalized_times: FloatArray, initial_time: float, final_time: float
) -> FloatArray:
    """Map normalized times in [0, 1] onto [initial_time, final_time]."""
    duration = final_time - initial_time
    return initial_time + duration * np.asarray(normalized_times, dtype=np.float64)


def absolute_mesh(mesh: FloatArray, initial_time: float, final_time: float) -> FloatArray:
    """Mesh breakpoints in absolute problem time."""
    mesh_times = normalized_to_absolute_time(mesh, initial_time, final_time)
    # Endpoints are pinned so the horizon length is reproduced exactly
    mesh_times[0] = initial_time
    mesh_times[-1] = final_time
    return mesh_times


def build_grid(
    mesh: FloatArray,
    roots: FloatArray,
    initial_time: float,
    final_time: float,
) -> FloatArray:
    """
    Expand a normalized mesh into absolute grid times.

    Each interval contributes its left breakpoint followed by one point per
    root (fractions of the interval in (0, 1]). A root equal to 1 lands on the
    next breakpoint, which is then shared with the following interval rather
    than duplicated.

    Args:
        mesh: Strictly increasing normalized breakpoints, first 0 and last 1
        roots: Ascending interval fractions in (0, 1], the last equal to 1
        initial_time: Absolute time of mesh point 0
        final_time: Absolute time of mesh point 1

    Returns:
        Grid times of length ``(len(mesh) - 1) * len(roots) + 1``
    """
    degree = len(roots)
    num_mesh_intervals = len(mesh) - 1
    num_grid_points = num_mesh_intervals * degree + 1

    mesh_times = absolute_mesh(mesh, initial_time, final_time)
    grid = np.empty(num_grid_points, dtype=np.float64)
    for imesh in range(num_mesh_intervals):
        igrid = imesh * degree
        h = mesh_times[imesh + 1] - mesh_times[imesh]
        grid[igrid] = mesh_times[imesh]
        grid[igrid + 1 : igrid + degree + 1] = mesh_times[imesh] + h * roots
        # Right endpoint reproduced exactly as the next interval's breakpoint
        grid[igrid + degree] = mesh_times[imesh + 1]

    logger.debug(
        "Built grid: %d mesh intervals, degree %d, %d grid points on [%g, %g]",
        num_mesh_intervals,
        degree,
        num_grid_points,
        initial_time,
        final_time,
    )
    return grid


def build_mesh_indicator(num_mesh_intervals: int, degree: int) -> IntArray:
    """Binary vector marking the grid points that are mesh breakpoints."""
    indicator = np.zeros(num_mesh_intervals * degree + 1, dtype=np.int64)
    indicator[::degree] = 1
    return indicator


def mesh_interval_durations(grid: FloatArray, degree: int) -> FloatArray:
    """Absolute duration of each mesh interval taken from the grid."""
    return np.asarray(grid[degree::degree] - grid[:-1:degree], dtype=np.float64)
