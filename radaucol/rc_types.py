"""
Core type definitions for the radaucol transcription package.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, TypeAlias

import casadi as ca
import numpy as np
from numpy.typing import NDArray


# --- NUMERICAL SAFETY TYPES ---
FloatArray: TypeAlias = NDArray[np.float64]
IntArray: TypeAlias = NDArray[np.int64]
NumericArrayLike: TypeAlias = (
    NDArray[np.floating[Any]]
    | NDArray[np.integer[Any]]
    | Sequence[float]
    | Sequence[int]
    | list[float]
    | list[int]
)

SymbolicMatrix: TypeAlias = ca.MX | ca.SX | ca.DM
"""CasADi matrix accepted wherever a decision-variable block is expected."""

VariableBlock: TypeAlias = FloatArray | SymbolicMatrix
"""Samples of one variable class, shape (num_variables, num_grid_points)."""

ResidualVector: TypeAlias = FloatArray | SymbolicMatrix
"""Flat residual vector, numeric for NumPy inputs and symbolic for CasADi inputs."""


# --- EXTERNAL INTERFACE PROTOCOLS ---
class DynamicsCallable(Protocol):
    """Dynamics of the continuous-time problem evaluated at a single grid point.

    Returns the state derivative as a sequence, NumPy vector or CasADi column
    of length ``num_states``.
    """

    def __call__(
        self,
        time: float,
        state: Any,
        control: Any,
        multiplier: Any,
    ) -> Any: ...
