# radaucol/transcription/trapezoidal.py
"""
Trapezoidal transcription: the grid is the mesh itself.
"""

import logging

import casadi as ca
import numpy as np

from ..input_validation import validate_configured_block, validate_variable_block
from ..rc_types import FloatArray, IntArray, ResidualVector, VariableBlock
from ..utils.casadi_utils import concatenate_columns, flatten_columns, is_casadi
from .base import TranscriptionSettings
from .grid import build_grid, build_mesh_indicator, mesh_interval_durations


logger = logging.getLogger(__name__)

_MESH_ENDPOINT_ROOTS = np.array([1.0], dtype=np.float64)


def build_trapezoidal_quadrature_coefficients(mesh_durations: FloatArray) -> FloatArray:
    """Half of every interval duration assigned to each of its two endpoints."""
    coefficients = np.zeros(len(mesh_durations) + 1, dtype=np.float64)
    coefficients[:-1] += 0.5 * mesh_durations
    coefficients[1:] += 0.5 * mesh_durations
    return coefficients


def compute_trapezoidal_defects(
    states: VariableBlock, state_derivatives: VariableBlock, grid: FloatArray
) -> ResidualVector:
    """Residuals ``x_{i+1} - x_i - h/2 * (xdot_i + xdot_{i+1})``, one block per interval."""
    num_grid_points = len(grid)
    states = validate_variable_block(states, num_grid_points, "states")
    state_derivatives = validate_variable_block(
        state_derivatives, num_grid_points, "state derivatives", num_rows=states.shape[0]
    )
    if is_casadi(states) and not is_casadi(state_derivatives):
        state_derivatives = ca.DM(state_derivatives)

    blocks = []
    for imesh in range(num_grid_points - 1):
        h = float(grid[imesh + 1] - grid[imesh])
        residual = (
            states[:, imesh + 1]
            - states[:, imesh]
            - 0.5 * h * (state_derivatives[:, imesh] + state_derivatives[:, imesh + 1])
        )
        blocks.append(flatten_columns(residual))

    return concatenate_columns(blocks, like=states)


class Trapezoidal:
    """
    Trapezoidal collocation on a fixed mesh.

    Every grid point is a mesh breakpoint, so there are no interior samples
    and no interpolation residuals; the settings' degree is not used.
    """

    name = "trapezoidal"

    def __init__(self, settings: TranscriptionSettings) -> None:
        self.settings = settings
        self._grid = build_grid(
            settings.mesh, _MESH_ENDPOINT_ROOTS, settings.initial_time, settings.final_time
        )
        self._grid.setflags(write=False)
        self._quadrature_coefficients = build_trapezoidal_quadrature_coefficients(
            mesh_interval_durations(self._grid, 1)
        )
        self._quadrature_coefficients.setflags(write=False)
        self._mesh_indicator = build_mesh_indicator(self.num_mesh_intervals, 1)
        self._mesh_indicator.setflags(write=False)

        logger.debug(
            "Configured %s transcription: intervals=%d, grid points=%d",
            self.name,
            self.num_mesh_intervals,
            self.num_grid_points,
        )

    @property
    def degree(self) -> int:
        return 1

    @property
    def num_mesh_intervals(self) -> int:
        return self.settings.num_mesh_intervals

    @property
    def num_grid_points(self) -> int:
        return self.num_mesh_intervals + 1

    @property
    def num_defect_residuals(self) -> int:
        return self.num_mesh_intervals * self.settings.num_states

    @property
    def num_interpolated_control_residuals(self) -> int:
        return 0

    @property
    def num_interpolated_multiplier_residuals(self) -> int:
        return 0

    def build_grid(self) -> FloatArray:
        return self._grid.copy()

    def build_quadrature_coefficients(self) -> FloatArray:
        return self._quadrature_coefficients.copy()

    def build_mesh_indicator(self) -> IntArray:
        return self._mesh_indicator.copy()

    def compute_defects(
        self, states: VariableBlock, state_derivatives: VariableBlock
    ) -> ResidualVector:
        num_states = self.settings.num_states
        states = validate_configured_block(states, self.num_grid_points, num_states, "states")
        state_derivatives = validate_configured_block(
            state_derivatives, self.num_grid_points, num_states, "state derivatives"
        )
        return compute_trapezoidal_defects(states, state_derivatives, self._grid)

    def compute_interpolation_residuals(
        self, variables: VariableBlock | None, enabled: bool = True
    ) -> ResidualVector:
        return concatenate_columns([], like=variables)

    def compute_interpolated_controls(self, controls: VariableBlock | None) -> ResidualVector:
        if controls is not None:
            validate_variable_block(
                controls, self.num_grid_points, "controls", num_rows=self.settings.num_controls
            )
        return self.compute_interpolation_residuals(controls)

    def compute_interpolated_multipliers(
        self, multipliers: VariableBlock | None
    ) -> ResidualVector:
        if multipliers is not None:
            validate_variable_block(
                multipliers,
                self.num_grid_points,
                "multipliers",
                num_rows=self.settings.num_multipliers,
            )
        return self.compute_interpolation_residuals(multipliers)

    def __repr__(self) -> str:
        return f"Trapezoidal(intervals={self.num_mesh_intervals})"
