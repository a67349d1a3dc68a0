# radaucol/transcription/quadrature.py
"""
Global quadrature coefficients assembled from per-interval Radau weights.
"""

from typing import Any

import numpy as np

from ..input_validation import validate_array_shape
from ..rc_types import FloatArray
from ..utils.casadi_utils import is_casadi, matmul


def build_quadrature_coefficients(
    mesh_durations: FloatArray, quadrature_weights: FloatArray
) -> FloatArray:
    """
    Combine base Radau weights and interval durations into one coefficient vector.

    Weights attach to the interior and right nodes of each interval, never to
    its left boundary, so every grid point receives its weight from exactly one
    interval and the first grid point keeps weight 0.

    Args:
        mesh_durations: Absolute duration of each mesh interval
        quadrature_weights: Base weights on [0, 1], one per collocation node

    Returns:
        Coefficients ``c`` with ``sum(c * f(grid))`` approximating the integral
        of ``f`` over the whole horizon
    """
    degree = len(quadrature_weights)
    num_mesh_intervals = len(mesh_durations)
    coefficients = np.zeros(num_mesh_intervals * degree + 1, dtype=np.float64)
    for imesh in range(num_mesh_intervals):
        igrid = imesh * degree
        for k in range(degree):
            coefficients[igrid + k + 1] += quadrature_weights[k] * mesh_durations[imesh]
    return coefficients


def integrate(quadrature_coefficients: FloatArray, samples: Any) -> Any:
    """
    Integrate sampled functions over the horizon.

    Args:
        quadrature_coefficients: Output of :func:`build_quadrature_coefficients`
        samples: Samples on the grid, shape ``(num_grid_points,)`` or
            ``(num_functions, num_grid_points)``; CasADi matrices are accepted

    Returns:
        One integral per function (a float for one-dimensional samples)
    """
    num_grid_points = len(quadrature_coefficients)
    if is_casadi(samples):
        validate_array_shape(samples, (samples.shape[0], num_grid_points), "samples", "quadrature")
        return matmul(samples, quadrature_coefficients.reshape(-1, 1))

    values = np.asarray(samples, dtype=np.float64)
    if values.ndim == 1:
        validate_array_shape(values, (num_grid_points,), "samples", "quadrature")
        return float(values @ quadrature_coefficients)
    validate_array_shape(values, (values.shape[0], num_grid_points), "samples", "quadrature")
    return values @ quadrature_coefficients
