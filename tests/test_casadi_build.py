# test_casadi_build.py
"""
CasADi constraint functions reproduce the numeric residual engines.
"""

import casadi as ca
import numpy as np
import pytest
from numpy.testing import assert_allclose

from radaucol import (
    TranscriptionSettings,
    build_constraint_function,
    build_integral_expression,
    create_transcription,
    evaluate_defects,
)


def _dynamics(time, state, control, multiplier):
    return [state[1], control[0] - state[0] + time]


class TestCasadiConstraintFunction:
    @pytest.mark.parametrize("identifier", ["legendre-gauss-radau-3", "trapezoidal"])
    def test_matches_numeric_engines(self, identifier):
        settings = TranscriptionSettings(
            mesh=[0.0, 0.4, 1.0],
            final_time=3.0,
            num_states=2,
            num_controls=1,
            num_multipliers=1,
        )
        scheme = create_transcription(settings, identifier)
        rng = np.random.default_rng(5)
        states = rng.normal(size=(2, scheme.num_grid_points))
        controls = rng.normal(size=(1, scheme.num_grid_points))
        multipliers = rng.normal(size=(1, scheme.num_grid_points))

        function = build_constraint_function(scheme, _dynamics)
        defects, interp_controls, interp_multipliers = function(states, controls, multipliers)

        assert_allclose(
            np.asarray(defects.full()).ravel(),
            evaluate_defects(scheme, _dynamics, states, controls, multipliers),
            atol=1e-12,
        )
        assert_allclose(
            np.asarray(interp_controls.full()).ravel(),
            scheme.compute_interpolated_controls(controls),
            atol=1e-14,
        )
        assert interp_multipliers.numel() == scheme.num_interpolated_multiplier_residuals

    def test_function_signature(self):
        settings = TranscriptionSettings(mesh=[0.0, 1.0], degree=2, num_states=2, num_controls=1)
        function = build_constraint_function(create_transcription(settings), _dynamics)

        assert function.name() == "transcription_constraints"
        assert function.name_in() == ["states", "controls", "multipliers"]
        assert function.name_out() == ["defects", "interp_controls", "interp_multipliers"]
        assert function.size1_out(0) == 2 * 2
        assert function.size1_out(1) == 1
        assert function.numel_out(2) == 0

    def test_disabled_interpolation_has_empty_outputs(self):
        settings = TranscriptionSettings(
            mesh=[0.0, 0.5, 1.0],
            degree=4,
            num_states=2,
            num_controls=1,
            interpolate_control_midpoints=False,
        )
        function = build_constraint_function(create_transcription(settings), _dynamics)

        assert function.numel_out(1) == 0
        assert function.numel_out(0) == 2 * 4 * 2

    def test_integral_expression(self):
        settings = TranscriptionSettings(mesh=[0.0, 0.5, 1.0], degree=3, final_time=2.0)
        scheme = create_transcription(settings)
        samples = ca.MX.sym("samples", 1, scheme.num_grid_points)
        integral = ca.Function("integral", [samples], [build_integral_expression(scheme, samples)])

        grid = scheme.build_grid()
        value = float(integral(grid.reshape(1, -1)))
        assert abs(value - 2.0) < 1e-13
