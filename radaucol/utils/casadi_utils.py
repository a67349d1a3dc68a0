"""
Array helpers that accept both NumPy arrays and CasADi matrices.

The defect and interpolation engines are written once against these helpers so
that the same residual formulas produce numeric vectors for NumPy inputs and
symbolic expressions for CasADi inputs.
"""

import logging
from collections.abc import Sequence
from typing import Any

import casadi as ca
import numpy as np

from ..rc_types import FloatArray, ResidualVector


logger = logging.getLogger(__name__)


def is_casadi(value: Any) -> bool:
    """Return True for CasADi matrix types (MX, SX or DM)."""
    return isinstance(value, ca.MX | ca.SX | ca.DM)


def matmul(left: Any, right: FloatArray) -> Any:
    """Matrix product that dispatches to ``ca.mtimes`` for symbolic operands."""
    if is_casadi(left):
        return ca.mtimes(left, ca.DM(np.asarray(right)))
    return left @ right


def flatten_columns(matrix: Any) -> ResidualVector:
    """Stack the columns of ``matrix`` into one vector (row index fastest)."""
    if is_casadi(matrix):
        return ca.vec(matrix)
    return np.asarray(matrix, dtype=np.float64).flatten(order="F")


def concatenate_columns(blocks: Sequence[Any], like: Any = None) -> ResidualVector:
    """Concatenate flattened residual blocks into a single vector.

    ``like`` decides the type of an empty result: a zero-length CasADi column
    of the same type when it is a CasADi matrix, otherwise an empty float array.
    """
    if not blocks:
        if is_casadi(like):
            return type(like)(0, 1)
        return np.zeros(0, dtype=np.float64)
    if is_casadi(blocks[0]):
        return ca.vertcat(*blocks)
    return np.concatenate(blocks).astype(np.float64, copy=False)
