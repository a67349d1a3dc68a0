# radaucol/__init__.py
"""
radaucol: Legendre-Gauss-Radau transcription of optimal control problems

This package turns a continuous-time optimal control problem into the vectors
a nonlinear programming solver consumes: grid times, mesh indicator, quadrature
coefficients, defect residuals and interpolation residuals.

Logging:
By default, radaucol produces no output. To enable logging::

    import logging
    logging.getLogger('radaucol').setLevel(logging.DEBUG)  # Detailed debugging
"""

import logging

from radaucol.casadi_build import build_constraint_function, build_integral_expression
from radaucol.exceptions import (
    ConfigurationError,
    DataIntegrityError,
    RadauColBaseError,
)
from radaucol.radau import RadauBasisComponents, compute_radau_collocation_components
from radaucol.transcription import (
    LegendreGaussRadau,
    TranscriptionScheme,
    TranscriptionSettings,
    Trapezoidal,
    available_schemes,
    create_transcription,
    evaluate_defects,
    integrate,
)


__all__ = [
    "ConfigurationError",
    "DataIntegrityError",
    "LegendreGaussRadau",
    "RadauBasisComponents",
    "RadauColBaseError",
    "TranscriptionScheme",
    "TranscriptionSettings",
    "Trapezoidal",
    "available_schemes",
    "build_constraint_function",
    "build_integral_expression",
    "compute_radau_collocation_components",
    "create_transcription",
    "evaluate_defects",
    "integrate",
]

__version__ = "0.1.0"


# Silent by default, user controls handlers and level
logging.getLogger(__name__).addHandler(logging.NullHandler())
