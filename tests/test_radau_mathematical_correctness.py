import numpy as np
import pytest
from numpy.testing import assert_allclose

from radaucol import ConfigurationError, DataIntegrityError
from radaucol.radau import (
    _compute_barycentric_weights,
    compute_lagrange_derivative_coefficients_at_point,
    compute_legendre_roots,
    compute_radau_collocation_components,
)


class TestRadauMathematicalCorrectness:
    @pytest.mark.parametrize("degree", [1, 2, 3, 4, 5, 8, 10, 15])
    def test_radau_roots_structure(self, degree):
        components = compute_radau_collocation_components(degree)
        roots = components.radau_roots

        assert roots.shape == (degree,)
        assert roots[-1] == 1.0, "Right endpoint must be a collocation node"
        assert np.all(roots > 0.0), "Left endpoint must not be collocated"
        assert np.all(np.diff(roots) > 0.0), f"Roots not ascending for degree {degree}"

        nodes = components.state_approximation_nodes
        assert nodes[0] == 0.0
        assert_allclose(nodes[1:], roots, rtol=0, atol=0)

    def test_known_radau_iia_tables(self):
        two = compute_radau_collocation_components(2)
        assert_allclose(two.radau_roots, [1.0 / 3.0, 1.0], atol=1e-15)
        assert_allclose(two.quadrature_weights, [0.75, 0.25], atol=1e-15)

        three = compute_radau_collocation_components(3)
        sqrt6 = np.sqrt(6.0)
        assert_allclose(
            three.radau_roots, [(4.0 - sqrt6) / 10.0, (4.0 + sqrt6) / 10.0, 1.0], atol=1e-14
        )
        assert_allclose(
            three.quadrature_weights,
            [(16.0 - sqrt6) / 36.0, (16.0 + sqrt6) / 36.0, 1.0 / 9.0],
            atol=1e-14,
        )

    def test_backward_euler_for_single_node(self):
        components = compute_radau_collocation_components(1)

        assert_allclose(components.radau_roots, [1.0])
        assert_allclose(components.quadrature_weights, [1.0])
        assert_allclose(components.differentiation_matrix, [[-1.0], [1.0]], atol=1e-15)
        assert components.legendre_roots.shape == (0,)

    @pytest.mark.parametrize("degree", [1, 2, 3, 4, 5])
    def test_radau_quadrature_exactness(self, degree):
        components = compute_radau_collocation_components(degree)
        roots = components.radau_roots
        weights = components.quadrature_weights

        # Radau quadrature with d nodes is exact up to degree 2d - 2
        for power in range(2 * degree - 1):
            radau_integral = np.sum(weights * roots**power)
            exact_integral = 1.0 / (power + 1)

            assert abs(radau_integral - exact_integral) < 1e-14, (
                f"Quadrature exactness failed for degree={degree}, power={power}: "
                f"Radau={radau_integral}, Exact={exact_integral}"
            )

    @pytest.mark.parametrize("degree", [1, 2, 3, 4, 5, 8])
    def test_differentiation_matrix_exact_for_polynomials(self, degree):
        components = compute_radau_collocation_components(degree)
        nodes = components.state_approximation_nodes
        roots = components.radau_roots
        diff_matrix = components.differentiation_matrix

        assert diff_matrix.shape == (degree + 1, degree)

        for power in range(degree + 1):
            values = nodes**power
            exact = power * roots ** max(power - 1, 0) if power > 0 else np.zeros(degree)
            computed = values @ diff_matrix

            max_error = np.max(np.abs(computed - exact))
            assert max_error < 1e-10, (
                f"Differentiation matrix failed for s^{power} with degree={degree}: "
                f"max_error={max_error}"
            )

    @pytest.mark.parametrize("degree", [2, 3, 5])
    def test_differentiation_matrix_columns_sum_to_zero(self, degree):
        diff_matrix = compute_radau_collocation_components(degree).differentiation_matrix
        assert_allclose(diff_matrix.sum(axis=0), np.zeros(degree), atol=1e-11)

    def test_barycentric_weights_partition_of_unity(self):
        test_cases = [
            np.array([0.0, 1.0]),
            np.array([0.0, 0.5, 1.0]),
            compute_radau_collocation_components(4).state_approximation_nodes,
        ]

        for nodes in test_cases:
            weights = _compute_barycentric_weights(nodes)
            for tau in np.linspace(0.05, 0.95, 19):
                if np.min(np.abs(tau - nodes)) < 1e-14:
                    continue
                terms = weights / (tau - nodes)
                assert_allclose(np.sum(terms / np.sum(terms)), 1.0, atol=1e-12)

    def test_legendre_roots_known_values(self):
        assert compute_legendre_roots(0).shape == (0,)
        assert_allclose(compute_legendre_roots(1), [0.5], atol=1e-15)
        assert_allclose(
            compute_legendre_roots(2),
            [(1.0 - 1.0 / np.sqrt(3.0)) / 2.0, (1.0 + 1.0 / np.sqrt(3.0)) / 2.0],
            atol=1e-15,
        )
        assert_allclose(
            compute_legendre_roots(3),
            [(1.0 - np.sqrt(0.6)) / 2.0, 0.5, (1.0 + np.sqrt(0.6)) / 2.0],
            atol=1e-15,
        )

    @pytest.mark.parametrize("degree", [1, 2, 4, 7])
    def test_legendre_roots_count_and_range(self, degree):
        roots = compute_radau_collocation_components(degree).legendre_roots
        assert roots.shape == (degree - 1,)
        assert np.all((roots > 0.0) & (roots < 1.0))


class TestRadauTables:
    def test_components_are_cached(self):
        first = compute_radau_collocation_components(6)
        second = compute_radau_collocation_components(6)
        assert first is second

    def test_tables_are_read_only(self):
        components = compute_radau_collocation_components(3)

        for table in (
            components.radau_roots,
            components.quadrature_weights,
            components.differentiation_matrix,
            components.legendre_roots,
        ):
            assert not table.flags.writeable
        with pytest.raises(ValueError):
            components.differentiation_matrix[0, 0] = 1.0

    @pytest.mark.parametrize("degree", [0, -2, 2.5, "3", True])
    def test_invalid_degree_rejected(self, degree):
        with pytest.raises(ConfigurationError):
            compute_radau_collocation_components(degree)

    def test_derivative_coefficients_require_a_node(self):
        nodes = np.array([0.0, 0.5, 1.0])
        weights = _compute_barycentric_weights(nodes)

        with pytest.raises(DataIntegrityError):
            compute_lagrange_derivative_coefficients_at_point(nodes, weights, 0.25)
