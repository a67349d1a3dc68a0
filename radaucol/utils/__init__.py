"""
Utility functions shared by the transcription engines.
"""

from .casadi_utils import concatenate_columns, flatten_columns, is_casadi, matmul


__all__ = [
    "concatenate_columns",
    "flatten_columns",
    "is_casadi",
    "matmul",
]
