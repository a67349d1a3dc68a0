# radaucol/transcription/base.py
"""
Configuration and interface shared by all transcription schemes.

Schemes do not inherit from a common base class. Each one is a plain class
that owns immutable tables built from :class:`TranscriptionSettings` and
satisfies the :class:`TranscriptionScheme` protocol.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from ..input_validation import (
    validate_normalized_mesh,
    validate_polynomial_degree,
    validate_time_horizon,
    validate_variable_counts,
)
from ..rc_types import (
    DynamicsCallable,
    FloatArray,
    IntArray,
    NumericArrayLike,
    ResidualVector,
    VariableBlock,
)
from ..utils.constants import DEFAULT_DEGREE
from .defects import evaluate_state_derivatives


logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class TranscriptionSettings:
    """
    Problem-level configuration consumed by every transcription scheme.

    The mesh is normalized to [0, 1]; ``initial_time`` and ``final_time`` place
    it in absolute problem time. Validation happens on construction and raises
    :class:`~radaucol.exceptions.ConfigurationError`.

    Args:
        mesh: Strictly increasing breakpoints, first 0 and last 1
        degree: Collocation nodes per mesh interval (>= 1)
        initial_time: Absolute start of the horizon
        final_time: Absolute end of the horizon
        num_states: Number of differential states
        num_controls: Number of controls
        num_multipliers: Number of algebraic multipliers
        interpolate_control_midpoints: Constrain interior control samples onto
            the line between interval boundary values
        interpolate_multiplier_midpoints: Same for multipliers
    """

    mesh: NumericArrayLike
    degree: int = DEFAULT_DEGREE
    initial_time: float = 0.0
    final_time: float = 1.0
    num_states: int = 0
    num_controls: int = 0
    num_multipliers: int = 0
    interpolate_control_midpoints: bool = True
    interpolate_multiplier_midpoints: bool = True

    def __post_init__(self) -> None:
        validate_polynomial_degree(self.degree)
        mesh_array = validate_normalized_mesh(self.mesh)
        mesh_array.setflags(write=False)
        object.__setattr__(self, "mesh", mesh_array)
        validate_time_horizon(self.initial_time, self.final_time)
        validate_variable_counts(self.num_states, self.num_controls, self.num_multipliers)

    @property
    def num_mesh_intervals(self) -> int:
        return len(self.mesh) - 1

    def with_degree(self, degree: int) -> TranscriptionSettings:
        """Copy of these settings with a different collocation degree."""
        return dataclasses.replace(self, degree=degree)


@runtime_checkable
class TranscriptionScheme(Protocol):
    """Operations every transcription scheme provides to the NLP layer."""

    name: str
    settings: TranscriptionSettings

    @property
    def degree(self) -> int: ...

    @property
    def num_mesh_intervals(self) -> int: ...

    @property
    def num_grid_points(self) -> int: ...

    @property
    def num_defect_residuals(self) -> int: ...

    @property
    def num_interpolated_control_residuals(self) -> int: ...

    @property
    def num_interpolated_multiplier_residuals(self) -> int: ...

    def build_grid(self) -> FloatArray: ...

    def build_quadrature_coefficients(self) -> FloatArray: ...

    def build_mesh_indicator(self) -> IntArray: ...

    def compute_defects(
        self, states: VariableBlock, state_derivatives: VariableBlock
    ) -> ResidualVector: ...

    def compute_interpolation_residuals(
        self, variables: VariableBlock | None, enabled: bool = True
    ) -> ResidualVector: ...

    def compute_interpolated_controls(self, controls: VariableBlock | None) -> ResidualVector: ...

    def compute_interpolated_multipliers(
        self, multipliers: VariableBlock | None
    ) -> ResidualVector: ...


def evaluate_defects(
    scheme: TranscriptionScheme,
    dynamics: DynamicsCallable,
    states: VariableBlock,
    controls: VariableBlock | None = None,
    multipliers: VariableBlock | None = None,
) -> ResidualVector:
    """Evaluate the dynamics on the scheme's grid and return its defect residuals."""
    state_derivatives = evaluate_state_derivatives(
        dynamics, scheme.build_grid(), states, controls, multipliers
    )
    return scheme.compute_defects(states, state_derivatives)
