import logging
import math
from collections.abc import Sequence
from typing import Any

import casadi as ca
import numpy as np

from .exceptions import ConfigurationError, DataIntegrityError
from .rc_types import FloatArray, NumericArrayLike
from .utils.constants import MESH_TOLERANCE, MINIMUM_TIME_INTERVAL, ZERO_TOLERANCE


logger = logging.getLogger(__name__)


# ============================================================================
# CORE VALIDATION PRIMITIVES
# ============================================================================


def validate_positive_integer(value: Any, name: str, min_value: int = 1) -> None:
    """Single source for positive integer validation."""
    if isinstance(value, bool) or not isinstance(value, int | np.integer):
        raise ConfigurationError(f"{name} must be integer, got {type(value)}")
    if value < min_value:
        raise ConfigurationError(f"{name} must be >= {min_value}, got {value}")


def validate_finite_number(value: Any, name: str) -> None:
    """Single source for finite real number validation."""
    if isinstance(value, bool) or not isinstance(value, int | float | np.number):
        raise ConfigurationError(f"{name} must be numeric, got {type(value)}")
    if math.isnan(value) or math.isinf(value):
        raise ConfigurationError(f"{name} cannot be NaN or infinite, got {value}")


def validate_array_numerical_integrity(
    array: FloatArray, name: str, context: str = "validation"
) -> None:
    """Single source for NaN/Inf validation."""
    if np.any(np.isnan(array)) or np.any(np.isinf(array)):
        raise DataIntegrityError(
            f"{name} contains NaN or Inf values", f"Numerical corruption in {context}"
        )


def validate_array_shape(
    array: Any, expected_shape: tuple[int, ...], name: str, context: str = "validation"
) -> None:
    """Single source for shape validation. Accepts NumPy arrays and CasADi matrices."""
    if tuple(array.shape) != expected_shape:
        raise DataIntegrityError(
            f"{name} has shape {tuple(array.shape)}, expected {expected_shape}",
            f"Shape mismatch in {context}",
        )


# ============================================================================
# TRANSCRIPTION CONFIGURATION VALIDATION
# ============================================================================


def validate_polynomial_degree(degree: int, context: str = "polynomial degree") -> None:
    """SINGLE SOURCE for polynomial degree validation."""
    validate_positive_integer(degree, context, min_value=1)


def validate_variable_counts(
    num_states: int, num_controls: int, num_multipliers: int, context: str = "transcription"
) -> None:
    """SINGLE SOURCE for problem dimension validation."""
    for count, name in [
        (num_states, "states"),
        (num_controls, "controls"),
        (num_multipliers, "multipliers"),
    ]:
        if isinstance(count, bool) or not isinstance(count, int | np.integer) or count < 0:
            raise ConfigurationError(
                f"Number of {name} must be non-negative integer, got {count}", context
            )


def validate_normalized_mesh(mesh_points: NumericArrayLike) -> FloatArray:
    """SINGLE SOURCE for normalized mesh validation.

    Returns the mesh as a float array once it is known to be a strictly
    increasing sequence of at least two points starting at 0 and ending at 1.
    """
    try:
        mesh_array = np.array(mesh_points, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Mesh must be a sequence of numbers: {e}") from e

    if mesh_array.ndim != 1:
        raise ConfigurationError(f"Mesh must be one-dimensional, got shape {mesh_array.shape}")
    if len(mesh_array) < 2:
        raise ConfigurationError(f"Mesh needs at least 2 points, got {len(mesh_array)}")

    if not np.all(np.isfinite(mesh_array)):
        raise ConfigurationError("Mesh contains NaN or Inf values", "mesh configuration")

    # Endpoints must match to ZERO_TOLERANCE, with no relative slack
    if abs(mesh_array[0]) > ZERO_TOLERANCE:
        raise ConfigurationError(f"First mesh point must be 0.0, got {mesh_array[0]}")
    if abs(mesh_array[-1] - 1.0) > ZERO_TOLERANCE:
        raise ConfigurationError(f"Last mesh point must be 1.0, got {mesh_array[-1]}")

    # Spacing validation
    mesh_diffs = np.diff(mesh_array)
    if not np.all(mesh_diffs > MESH_TOLERANCE):
        raise ConfigurationError(
            f"Mesh points must be strictly increasing with min spacing {MESH_TOLERANCE}"
        )

    return mesh_array


def validate_time_horizon(initial_time: float, final_time: float) -> None:
    """SINGLE SOURCE for problem time horizon validation."""
    validate_finite_number(initial_time, "initial time")
    validate_finite_number(final_time, "final time")
    if final_time - initial_time < MINIMUM_TIME_INTERVAL:
        raise ConfigurationError(
            f"Final time ({final_time}) must exceed initial time ({initial_time}) "
            f"by at least {MINIMUM_TIME_INTERVAL}"
        )


# ============================================================================
# EVALUATION-TIME VALIDATION
# ============================================================================


def validate_variable_block(
    values: Any, num_grid_points: int, name: str, num_rows: int | None = None
) -> Any:
    """Check a decision-variable block against the transcription grid.

    CasADi matrices are returned unchanged. NumPy-compatible inputs are
    converted to float arrays; a one-dimensional input is a single-row block.
    When ``num_rows`` is None the row count is taken from the block itself.
    """
    if isinstance(values, ca.MX | ca.SX | ca.DM):
        expected_rows = values.shape[0] if num_rows is None else num_rows
        validate_array_shape(values, (expected_rows, num_grid_points), name, "variable block")
        return values

    array = np.asarray(values, dtype=np.float64)
    if array.ndim == 1:
        array = array.reshape(1, -1)
    expected_rows = array.shape[0] if num_rows is None else num_rows
    validate_array_shape(array, (expected_rows, num_grid_points), name, "variable block")
    return array


def validate_configured_block(
    values: Any, num_grid_points: int, num_rows: int, name: str
) -> Any:
    """Check a block against the configured variable count of a transcription.

    A missing block (None) is accepted only when ``num_rows`` is zero.
    """
    if values is None:
        if num_rows > 0:
            raise DataIntegrityError(
                f"{name} block is missing, expected {num_rows} rows",
                "Shape mismatch in variable block",
            )
        return None
    return validate_variable_block(values, num_grid_points, name, num_rows=num_rows)


def validate_dynamics_output(output: Any, num_states: int) -> Any:
    """
    Normalize a single dynamics evaluation to a column of ``num_states`` entries.

    Symbolic outputs (CasADi) stay symbolic; numeric outputs become float arrays.
    """
    if output is None:
        raise DataIntegrityError("Dynamics function returned None", "Dynamics evaluation error")

    if isinstance(output, ca.MX | ca.SX):
        if output.shape == (num_states, 1):
            return output
        if output.shape == (1, num_states):
            return output.T
        raise DataIntegrityError(
            f"Dynamics output shape mismatch: got {output.shape}, expected ({num_states}, 1)",
            "Dynamics evaluation error",
        )

    if isinstance(output, list | tuple) and any(
        isinstance(item, ca.MX | ca.SX) for item in output
    ):
        if len(output) != num_states:
            raise DataIntegrityError(
                f"Dynamics list length mismatch: got {len(output)}, expected {num_states}",
                "Dynamics evaluation error",
            )
        return ca.vertcat(*output)

    if isinstance(output, ca.DM):
        output = output.full()

    if isinstance(output, Sequence | np.ndarray | float | int):
        result = np.asarray(output, dtype=np.float64).reshape(-1)
        if result.shape != (num_states,):
            raise DataIntegrityError(
                f"Dynamics output has {result.size} entries, expected {num_states}",
                "Dynamics evaluation error",
            )
        return result

    raise DataIntegrityError(
        f"Unsupported dynamics output type: {type(output)}", "Dynamics evaluation error"
    )
