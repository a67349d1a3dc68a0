import numpy as np
import pytest
from numpy.testing import assert_allclose

from radaucol import DataIntegrityError, TranscriptionSettings, create_transcription
from radaucol.transcription.interpolation import compute_interpolation_residuals


class TestInterpolationConstraints:
    def test_degree_four_boundary_scenario(self):
        settings = TranscriptionSettings(mesh=[0.0, 1.0], degree=4, num_controls=1)
        scheme = create_transcription(settings)
        actual = np.array([0.2, 0.6, 0.7])
        controls = np.concatenate([[0.0], actual, [1.0]]).reshape(1, -1)

        residuals = scheme.compute_interpolated_controls(controls)

        assert residuals.shape == (3,)
        assert_allclose(residuals, actual - scheme.legendre_roots, atol=1e-15)

    def test_samples_on_interpolation_line_give_zero_residual(self):
        settings = TranscriptionSettings(mesh=[0.0, 0.5, 1.0], degree=3, num_multipliers=1)
        scheme = create_transcription(settings)
        roots = scheme.legendre_roots
        multipliers = np.empty((1, scheme.num_grid_points))
        for imesh, (left, right) in enumerate([(1.0, 3.0), (3.0, -2.0)]):
            igrid = imesh * 3
            multipliers[0, igrid] = left
            multipliers[0, igrid + 1 : igrid + 3] = left + roots * (right - left)
            multipliers[0, igrid + 3] = right

        residuals = scheme.compute_interpolated_multipliers(multipliers)
        assert_allclose(residuals, np.zeros(4), atol=1e-15)

    def test_residual_ordering(self):
        settings = TranscriptionSettings(mesh=[0.0, 0.5, 1.0], degree=3, num_controls=2)
        scheme = create_transcription(settings)
        rng = np.random.default_rng(11)
        controls = rng.normal(size=(2, scheme.num_grid_points))
        roots = scheme.legendre_roots

        residuals = scheme.compute_interpolated_controls(controls)

        assert residuals.shape == (scheme.num_interpolated_control_residuals,)
        assert scheme.num_interpolated_control_residuals == 2 * 2 * 2
        for imesh in range(2):
            igrid = imesh * 3
            for k in range(2):
                for v in range(2):
                    left, right = controls[v, igrid], controls[v, igrid + 3]
                    expected = controls[v, igrid + k + 1] - (left + roots[k] * (right - left))
                    index = imesh * 2 * 2 + k * 2 + v
                    assert abs(residuals[index] - expected) < 1e-14

    @pytest.mark.parametrize("degree", [2, 3, 5])
    def test_disabled_flag_emits_nothing(self, degree):
        settings = TranscriptionSettings(
            mesh=[0.0, 0.5, 1.0],
            degree=degree,
            num_controls=2,
            num_multipliers=3,
            interpolate_control_midpoints=False,
            interpolate_multiplier_midpoints=False,
        )
        scheme = create_transcription(settings)
        controls = np.ones((2, scheme.num_grid_points))
        multipliers = np.ones((3, scheme.num_grid_points))

        assert scheme.compute_interpolated_controls(controls).shape == (0,)
        assert scheme.compute_interpolated_multipliers(multipliers).shape == (0,)
        assert scheme.num_interpolated_control_residuals == 0
        assert scheme.num_interpolated_multiplier_residuals == 0

    def test_flags_are_independent(self):
        settings = TranscriptionSettings(
            mesh=[0.0, 1.0],
            degree=3,
            num_controls=1,
            num_multipliers=1,
            interpolate_control_midpoints=True,
            interpolate_multiplier_midpoints=False,
        )
        scheme = create_transcription(settings)
        values = np.arange(4.0).reshape(1, -1)

        assert scheme.compute_interpolated_controls(values).shape == (2,)
        assert scheme.compute_interpolated_multipliers(values).shape == (0,)

    def test_zero_variables_emit_nothing(self):
        scheme = create_transcription(TranscriptionSettings(mesh=[0.0, 1.0], degree=4))

        assert scheme.compute_interpolated_controls(np.zeros((0, 5))).shape == (0,)
        assert scheme.compute_interpolated_controls(None).shape == (0,)

    def test_degree_one_has_no_interior_samples(self):
        settings = TranscriptionSettings(mesh=[0.0, 0.5, 1.0], degree=1, num_controls=1)
        scheme = create_transcription(settings)

        residuals = scheme.compute_interpolated_controls(np.array([[0.0, 1.0, 2.0]]))
        assert residuals.shape == (0,)

    def test_disabled_engine_does_not_inspect_values(self):
        residuals = compute_interpolation_residuals(
            "not a block", np.array([0.5]), num_grid_points=3, enabled=False
        )
        assert residuals.shape == (0,)

    def test_row_count_must_match_configured_controls(self):
        settings = TranscriptionSettings(mesh=[0.0, 1.0], degree=3, num_controls=1)
        scheme = create_transcription(settings)

        with pytest.raises(DataIntegrityError):
            scheme.compute_interpolated_controls(np.zeros((2, scheme.num_grid_points)))

    def test_missing_block_with_configured_count_raises(self):
        settings = TranscriptionSettings(
            mesh=[0.0, 0.5, 1.0], degree=3, num_controls=1, num_multipliers=2
        )
        scheme = create_transcription(settings)

        with pytest.raises(DataIntegrityError):
            scheme.compute_interpolated_controls(None)
        with pytest.raises(DataIntegrityError):
            scheme.compute_interpolated_multipliers(None)

    def test_missing_block_is_allowed_when_flag_is_off(self):
        settings = TranscriptionSettings(
            mesh=[0.0, 1.0], degree=3, num_controls=1, interpolate_control_midpoints=False
        )
        scheme = create_transcription(settings)

        assert scheme.compute_interpolated_controls(None).shape == (0,)
