# radaucol/transcription/defects.py
"""
Dynamic-feasibility (defect) residuals for Legendre-Gauss-Radau collocation.
"""

import logging
from typing import Any

import casadi as ca
import numpy as np

from ..input_validation import validate_dynamics_output, validate_variable_block
from ..rc_types import DynamicsCallable, FloatArray, ResidualVector, VariableBlock
from ..utils.casadi_utils import concatenate_columns, flatten_columns, is_casadi, matmul


logger = logging.getLogger(__name__)


def compute_defects(
    states: VariableBlock,
    state_derivatives: VariableBlock,
    grid: FloatArray,
    differentiation_matrix: FloatArray,
) -> ResidualVector:
    """
    Per-interval collocation residuals ``h * xdot - x_local @ D``.

    ``x_local`` holds the state samples at the interval's ``degree + 1`` local
    grid points, ``xdot`` the derivative samples at its ``degree`` collocation
    nodes and ``h`` its absolute duration. Each residual block is flattened
    with the state index fastest; blocks are stacked one per interval.

    Residuals are returned as computed. Nonzero values are infeasibility
    information for the NLP solver, not errors.

    Args:
        states: State samples, shape ``(num_states, num_grid_points)``
        state_derivatives: Dynamics evaluations on the same grid; the column of
            each interval's left boundary is ignored
        grid: Absolute grid times
        differentiation_matrix: ``(degree + 1, degree)`` Radau operator

    Returns:
        Vector of length ``num_mesh_intervals * degree * num_states``

    Raises:
        DataIntegrityError: If either block does not match the grid
    """
    degree = differentiation_matrix.shape[1]
    num_grid_points = len(grid)
    num_mesh_intervals = (num_grid_points - 1) // degree
    states = validate_variable_block(states, num_grid_points, "states")
    state_derivatives = validate_variable_block(
        state_derivatives, num_grid_points, "state derivatives", num_rows=states.shape[0]
    )
    if is_casadi(states) and not is_casadi(state_derivatives):
        state_derivatives = ca.DM(state_derivatives)

    blocks = []
    for imesh in range(num_mesh_intervals):
        igrid = imesh * degree
        h = float(grid[igrid + degree] - grid[igrid])
        x_local = states[:, igrid : igrid + degree + 1]
        xdot_interior = state_derivatives[:, igrid + 1 : igrid + degree + 1]

        residual = h * xdot_interior - matmul(x_local, differentiation_matrix)
        blocks.append(flatten_columns(residual))

    return concatenate_columns(blocks, like=states)


def evaluate_state_derivatives(
    dynamics: DynamicsCallable,
    grid: FloatArray,
    states: VariableBlock,
    controls: VariableBlock | None = None,
    multipliers: VariableBlock | None = None,
) -> VariableBlock:
    """
    Evaluate the dynamics column by column on the grid.

    Returns a ``(num_states, num_grid_points)`` block: a float array for
    numeric inputs, a CasADi matrix when any input or output is symbolic.
    """
    num_grid_points = len(grid)
    states = validate_variable_block(states, num_grid_points, "states")
    num_states = states.shape[0]
    controls = _optional_block(controls, num_grid_points, "controls", like=states)
    multipliers = _optional_block(multipliers, num_grid_points, "multipliers", like=states)

    columns = []
    for i in range(num_grid_points):
        output = dynamics(float(grid[i]), states[:, i], controls[:, i], multipliers[:, i])
        columns.append(validate_dynamics_output(output, num_states))

    if any(is_casadi(column) for column in columns):
        return ca.horzcat(
            *[column if is_casadi(column) else ca.DM(column.reshape(-1, 1)) for column in columns]
        )
    return np.column_stack(columns)


def _optional_block(values: Any, num_grid_points: int, name: str, like: Any) -> Any:
    if values is None:
        if is_casadi(like):
            return type(like)(0, num_grid_points)
        return np.zeros((0, num_grid_points), dtype=np.float64)
    return validate_variable_block(values, num_grid_points, name)
