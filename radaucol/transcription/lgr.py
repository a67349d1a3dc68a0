# radaucol/transcription/lgr.py
"""
Legendre-Gauss-Radau transcription.

Each mesh interval holds ``degree + 1`` grid points: its left breakpoint,
shared with the previous interval, and ``degree`` Radau IIA collocation nodes,
the last of which is the right breakpoint. Dynamics are enforced at the
collocation nodes only.
"""

import logging

from ..input_validation import validate_configured_block
from ..radau import RadauBasisComponents, compute_radau_collocation_components
from ..rc_types import FloatArray, IntArray, ResidualVector, VariableBlock
from .base import TranscriptionSettings
from .defects import compute_defects
from .grid import build_grid, build_mesh_indicator, mesh_interval_durations
from .interpolation import compute_interpolation_residuals
from .quadrature import build_quadrature_coefficients


logger = logging.getLogger(__name__)


class LegendreGaussRadau:
    """
    Legendre-Gauss-Radau collocation on a fixed mesh.

    All structural data (coefficient tables, grid, quadrature coefficients and
    mesh indicator) is computed once here and stored read-only. The ``build_*``
    methods return copies and the ``compute_*`` methods allocate fresh
    residual vectors, so one instance can be shared between threads.
    """

    name = "legendre-gauss-radau"

    def __init__(self, settings: TranscriptionSettings) -> None:
        self.settings = settings
        self._components: RadauBasisComponents = compute_radau_collocation_components(
            settings.degree
        )

        self._grid = build_grid(
            settings.mesh,
            self._components.radau_roots,
            settings.initial_time,
            settings.final_time,
        )
        self._grid.setflags(write=False)

        self._quadrature_coefficients = build_quadrature_coefficients(
            mesh_interval_durations(self._grid, self.degree),
            self._components.quadrature_weights,
        )
        self._quadrature_coefficients.setflags(write=False)

        self._mesh_indicator = build_mesh_indicator(self.num_mesh_intervals, self.degree)
        self._mesh_indicator.setflags(write=False)

        logger.debug(
            "Configured %s transcription: degree=%d, intervals=%d, grid points=%d",
            self.name,
            self.degree,
            self.num_mesh_intervals,
            self.num_grid_points,
        )

    # Dimensions

    @property
    def degree(self) -> int:
        return self.settings.degree

    @property
    def num_mesh_intervals(self) -> int:
        return self.settings.num_mesh_intervals

    @property
    def num_grid_points(self) -> int:
        return self.num_mesh_intervals * self.degree + 1

    @property
    def num_defect_residuals(self) -> int:
        return self.num_mesh_intervals * self.degree * self.settings.num_states

    @property
    def num_interpolated_control_residuals(self) -> int:
        if not self.settings.interpolate_control_midpoints:
            return 0
        return self.num_mesh_intervals * (self.degree - 1) * self.settings.num_controls

    @property
    def num_interpolated_multiplier_residuals(self) -> int:
        if not self.settings.interpolate_multiplier_midpoints:
            return 0
        return self.num_mesh_intervals * (self.degree - 1) * self.settings.num_multipliers

    # Structural tables

    @property
    def differentiation_matrix(self) -> FloatArray:
        return self._components.differentiation_matrix

    @property
    def quadrature_weights(self) -> FloatArray:
        return self._components.quadrature_weights

    @property
    def radau_roots(self) -> FloatArray:
        return self._components.radau_roots

    @property
    def legendre_roots(self) -> FloatArray:
        return self._components.legendre_roots

    def build_grid(self) -> FloatArray:
        """Absolute grid times, length ``num_grid_points``."""
        return self._grid.copy()

    def build_quadrature_coefficients(self) -> FloatArray:
        """Quadrature coefficients over the absolute horizon."""
        return self._quadrature_coefficients.copy()

    def build_mesh_indicator(self) -> IntArray:
        return self._mesh_indicator.copy()

    # Residuals

    def compute_defects(
        self, states: VariableBlock, state_derivatives: VariableBlock
    ) -> ResidualVector:
        num_states = self.settings.num_states
        states = validate_configured_block(states, self.num_grid_points, num_states, "states")
        state_derivatives = validate_configured_block(
            state_derivatives, self.num_grid_points, num_states, "state derivatives"
        )
        return compute_defects(
            states, state_derivatives, self._grid, self._components.differentiation_matrix
        )

    def compute_interpolation_residuals(
        self, variables: VariableBlock | None, enabled: bool = True
    ) -> ResidualVector:
        return compute_interpolation_residuals(
            variables, self._components.legendre_roots, self.num_grid_points, enabled
        )

    def compute_interpolated_controls(self, controls: VariableBlock | None) -> ResidualVector:
        return self._interpolate_configured(
            controls,
            self.settings.num_controls,
            self.settings.interpolate_control_midpoints,
            "controls",
        )

    def compute_interpolated_multipliers(
        self, multipliers: VariableBlock | None
    ) -> ResidualVector:
        return self._interpolate_configured(
            multipliers,
            self.settings.num_multipliers,
            self.settings.interpolate_multiplier_midpoints,
            "multipliers",
        )

    def _interpolate_configured(
        self, values: VariableBlock | None, num_rows: int, enabled: bool, name: str
    ) -> ResidualVector:
        if enabled and num_rows > 0:
            values = validate_configured_block(values, self.num_grid_points, num_rows, name)
        return self.compute_interpolation_residuals(values, enabled=enabled and num_rows > 0)

    def __repr__(self) -> str:
        return (
            f"LegendreGaussRadau(degree={self.degree}, "
            f"intervals={self.num_mesh_intervals}, grid_points={self.num_grid_points})"
        )
