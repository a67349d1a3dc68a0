# radaucol/transcription/interpolation.py
"""
Interpolation residuals for variables that are not collocated at every node.

Controls and multipliers sampled at the interior nodes of an interval are
forced onto the straight line between the interval's boundary samples, which
removes spurious oscillation in those variables.
"""

import logging

from ..input_validation import validate_variable_block
from ..rc_types import FloatArray, ResidualVector, VariableBlock
from ..utils.casadi_utils import concatenate_columns, flatten_columns


logger = logging.getLogger(__name__)


def compute_interpolation_residuals(
    variables: VariableBlock | None,
    legendre_roots: FloatArray,
    num_grid_points: int,
    enabled: bool = True,
) -> ResidualVector:
    """
    Residuals ``v_k - (v_i + root_k * (v_{i+1} - v_i))`` for every interval.

    No residuals are emitted when ``enabled`` is False or the block has no
    rows; in that case ``variables`` is not inspected at all.

    Args:
        variables: Samples of one variable class, ``(num_variables, num_grid_points)``
        legendre_roots: The ``degree - 1`` interpolation fractions in (0, 1)
        num_grid_points: Grid length of the transcription
        enabled: Midpoint interpolation flag for this variable class

    Returns:
        Vector of length ``num_mesh_intervals * (degree - 1) * num_variables``,
        ordered by interval, then interior node, then variable
    """
    if not enabled or variables is None:
        return concatenate_columns([], like=variables)

    variables = validate_variable_block(variables, num_grid_points, "interpolated variables")
    if variables.shape[0] == 0:
        return concatenate_columns([], like=variables)

    degree = len(legendre_roots) + 1
    num_mesh_intervals = (num_grid_points - 1) // degree

    blocks = []
    for imesh in range(num_mesh_intervals):
        igrid = imesh * degree
        x_i = variables[:, igrid]
        x_ip1 = variables[:, igrid + degree]
        for k in range(degree - 1):
            x_t = variables[:, igrid + k + 1]
            root = float(legendre_roots[k])
            blocks.append(flatten_columns(x_t - (x_i + root * (x_ip1 - x_i))))

    return concatenate_columns(blocks, like=variables)
