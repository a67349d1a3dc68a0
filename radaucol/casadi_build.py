"""
CasADi assembly of transcription residuals for an external NLP solver.
"""

import logging

import casadi as ca

from .rc_types import DynamicsCallable
from .transcription.base import TranscriptionScheme
from .transcription.defects import evaluate_state_derivatives


logger = logging.getLogger(__name__)

CONSTRAINT_FUNCTION_INPUTS = ["states", "controls", "multipliers"]
CONSTRAINT_FUNCTION_OUTPUTS = ["defects", "interp_controls", "interp_multipliers"]


def build_constraint_function(
    scheme: TranscriptionScheme, dynamics: DynamicsCallable
) -> ca.Function:
    """
    Build a CasADi function evaluating every transcription residual.

    The function takes the ``(n, num_grid_points)`` sample blocks of states,
    controls and multipliers and returns the defect, control-interpolation and
    multiplier-interpolation vectors. Disabled interpolation classes produce
    zero-length outputs.

    Args:
        scheme: Configured transcription scheme
        dynamics: Called once per grid point as ``dynamics(time, state, control,
            multiplier)`` with CasADi columns; must return ``num_states`` entries

    Returns:
        ``ca.Function`` named ``"transcription_constraints"``

    Examples:
        >>> function = build_constraint_function(scheme, lambda t, x, u, m: u)
        >>> defects, _, _ = function(states, controls, multipliers)
    """
    settings = scheme.settings
    num_grid_points = scheme.num_grid_points

    states = ca.MX.sym("states", settings.num_states, num_grid_points)
    controls = ca.MX.sym("controls", settings.num_controls, num_grid_points)
    multipliers = ca.MX.sym("multipliers", settings.num_multipliers, num_grid_points)

    state_derivatives = evaluate_state_derivatives(
        dynamics, scheme.build_grid(), states, controls, multipliers
    )

    defects = ca.MX(scheme.compute_defects(states, state_derivatives))
    interp_controls = ca.MX(scheme.compute_interpolated_controls(controls))
    interp_multipliers = ca.MX(scheme.compute_interpolated_multipliers(multipliers))

    logger.debug(
        "Built constraint function for %s: %d defects, %d control and %d multiplier residuals",
        scheme.name,
        defects.numel(),
        interp_controls.numel(),
        interp_multipliers.numel(),
    )

    return ca.Function(
        "transcription_constraints",
        [states, controls, multipliers],
        [defects, interp_controls, interp_multipliers],
        CONSTRAINT_FUNCTION_INPUTS,
        CONSTRAINT_FUNCTION_OUTPUTS,
    )


def build_integral_expression(scheme: TranscriptionScheme, integrand_samples: ca.MX) -> ca.MX:
    """Quadrature of integrand samples ``(num_integrals, num_grid_points)`` over the horizon."""
    coefficients = ca.DM(scheme.build_quadrature_coefficients())
    return ca.mtimes(integrand_samples, coefficients)
