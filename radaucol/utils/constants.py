from typing import TypeAlias


_Tolerance: TypeAlias = float

ZERO_TOLERANCE: _Tolerance = 1e-18
"""Tolerance for considering floating point values as zero."""

MESH_TOLERANCE: _Tolerance = 1e-9
"""Minimum spacing required between mesh points."""

MINIMUM_TIME_INTERVAL: float = 1e-6
"""Minimum allowed duration between initial and final time."""

DEFAULT_SCHEME: str = "legendre-gauss-radau"
"""Transcription scheme used when none is requested."""

DEFAULT_DEGREE: int = 3
"""Default number of collocation nodes per mesh interval."""
