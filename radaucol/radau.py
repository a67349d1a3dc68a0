"""
Legendre-Gauss-Radau coefficient tables on the unit interval.

The tables follow the Radau IIA convention: for ``degree`` collocation nodes
the interval [0, 1] is sampled at the left endpoint (not collocated) and at
``degree`` Radau roots, the last of which is the right endpoint.
"""

import logging
import threading
from dataclasses import dataclass
from typing import ClassVar, Literal, cast, overload

import numpy as np
from scipy.special import roots_jacobi as _scipy_roots_jacobi
from scipy.special import roots_legendre as _scipy_roots_legendre

from .exceptions import DataIntegrityError
from .input_validation import validate_array_numerical_integrity, validate_polynomial_degree
from .rc_types import FloatArray
from .utils.constants import ZERO_TOLERANCE


logger = logging.getLogger(__name__)


def _read_only(array: FloatArray) -> FloatArray:
    array.setflags(write=False)
    return array


@dataclass(frozen=True)
class RadauBasisComponents:
    """Immutable per-degree tables for Legendre-Gauss-Radau collocation."""

    degree: int
    state_approximation_nodes: FloatArray
    radau_roots: FloatArray
    quadrature_weights: FloatArray
    differentiation_matrix: FloatArray
    legendre_roots: FloatArray
    barycentric_weights_for_state_nodes: FloatArray


@dataclass
class RadauNodesAndWeights:
    state_approximation_nodes: FloatArray
    radau_roots: FloatArray
    quadrature_weights: FloatArray


class RadauBasisCache:
    """Thread-safe global cache for Radau basis components."""

    _instance: ClassVar["RadauBasisCache | None"] = None
    _cache: ClassVar[dict[int, RadauBasisComponents]] = {}
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __new__(cls) -> "RadauBasisCache":
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def get_components(self, degree: int) -> RadauBasisComponents:
        with self._lock:
            if degree not in self._cache:
                self._cache[degree] = self._compute_components(degree)
            return self._cache[degree]

    def _compute_components(self, degree: int) -> RadauBasisComponents:
        # Parameter validation assumed done by caller
        logger.debug("Computing Radau basis components for degree %d", degree)
        lgr_data = compute_legendre_gauss_radau_nodes_and_weights(degree)

        state_nodes = lgr_data.state_approximation_nodes
        bary_weights_state_nodes = _compute_barycentric_weights(state_nodes)

        # Column k holds the derivative of every state-node Lagrange basis at root k
        diff_matrix = np.zeros((degree + 1, degree), dtype=np.float64)
        for k, root in enumerate(lgr_data.radau_roots):
            diff_matrix[:, k] = compute_lagrange_derivative_coefficients_at_point(
                state_nodes, bary_weights_state_nodes, float(root)
            )

        validate_array_numerical_integrity(
            diff_matrix, "Differentiation matrix", f"Radau tables for degree {degree}"
        )

        return RadauBasisComponents(
            degree=degree,
            state_approximation_nodes=_read_only(state_nodes),
            radau_roots=_read_only(lgr_data.radau_roots),
            quadrature_weights=_read_only(lgr_data.quadrature_weights),
            differentiation_matrix=_read_only(diff_matrix),
            legendre_roots=_read_only(compute_legendre_roots(degree - 1)),
            barycentric_weights_for_state_nodes=_read_only(bary_weights_state_nodes),
        )


# Global cache instance
_radau_cache = RadauBasisCache()


@overload
def roots_jacobi(
    n: int, alpha: float, beta: float, mu: Literal[False]
) -> tuple[FloatArray, FloatArray]: ...


@overload
def roots_jacobi(
    n: int, alpha: float, beta: float, mu: Literal[True]
) -> tuple[FloatArray, FloatArray, float]: ...


def roots_jacobi(
    n: int, alpha: float, beta: float, mu: bool = False
) -> tuple[FloatArray, FloatArray] | tuple[FloatArray, FloatArray, float]:
    # Wrapper for scipy roots_jacobi with proper typing - parameter validation assumed
    if mu:
        x_val, w_val, mu_val = _scipy_roots_jacobi(n, alpha, beta, mu=True)
        return (
            cast(FloatArray, x_val.astype(np.float64)),
            cast(FloatArray, w_val.astype(np.float64)),
            float(mu_val),
        )
    x_val, w_val = _scipy_roots_jacobi(n, alpha, beta, mu=False)
    return (
        cast(FloatArray, x_val.astype(np.float64)),
        cast(FloatArray, w_val.astype(np.float64)),
    )


def compute_legendre_gauss_radau_nodes_and_weights(degree: int) -> RadauNodesAndWeights:
    """Radau IIA abscissae and weights mapped from [-1, 1] onto [0, 1].

    The right endpoint is always a root; interior roots are the zeros of the
    Jacobi polynomial P_{degree-1}^{(1,0)}.
    """
    if degree == 1:
        roots_symmetric = np.array([1.0], dtype=np.float64)
        weights_symmetric = np.array([2.0], dtype=np.float64)
    else:
        interior_roots, jacobi_weights = roots_jacobi(degree - 1, 1.0, 0.0, mu=False)
        interior_weights = jacobi_weights / (np.subtract(1.0, interior_roots))
        right_endpoint_weight = 2.0 / (degree**2)
        order = np.argsort(interior_roots)
        roots_symmetric = np.append(interior_roots[order], 1.0)
        weights_symmetric = np.append(interior_weights[order], right_endpoint_weight)

    radau_roots = (roots_symmetric + 1.0) / 2.0
    radau_roots[-1] = 1.0
    quadrature_weights = weights_symmetric / 2.0

    # State nodes add the non-collocated left endpoint
    state_approximation_nodes = np.concatenate([np.array([0.0], dtype=np.float64), radau_roots])

    return RadauNodesAndWeights(
        state_approximation_nodes=state_approximation_nodes,
        radau_roots=radau_roots.astype(np.float64),
        quadrature_weights=quadrature_weights.astype(np.float64),
    )


def compute_legendre_roots(order: int) -> FloatArray:
    """Roots of the Legendre polynomial P_order shifted onto (0, 1), ascending."""
    if order < 1:
        return np.array([], dtype=np.float64)
    roots, _ = _scipy_roots_legendre(order)
    return np.sort((np.asarray(roots, dtype=np.float64) + 1.0) / 2.0)


def _compute_barycentric_weights(nodes: FloatArray) -> FloatArray:
    num_nodes = len(nodes)
    if num_nodes == 1:
        return np.array([1.0], dtype=np.float64)

    nodes_col = nodes[:, np.newaxis]
    nodes_row = nodes[np.newaxis, :]
    differences_matrix = nodes_col - nodes_row

    diagonal_mask = np.eye(num_nodes, dtype=bool)

    # Perturbation prevents division by zero for near-coincident nodes
    near_zero_mask = np.abs(differences_matrix) < ZERO_TOLERANCE
    perturbation = np.sign(differences_matrix) * ZERO_TOLERANCE
    perturbation[perturbation == 0] = ZERO_TOLERANCE

    off_diagonal_near_zero = near_zero_mask & ~diagonal_mask
    differences_matrix = np.where(off_diagonal_near_zero, perturbation, differences_matrix)

    # Diagonal set to 1 for product computation
    differences_matrix[diagonal_mask] = 1.0

    products = np.prod(differences_matrix, axis=1, dtype=np.float64)

    small_product_mask = np.abs(products) < ZERO_TOLERANCE**2
    safe_products = np.where(
        small_product_mask,
        np.where(products == 0, 1.0 / (ZERO_TOLERANCE**2), np.sign(products) / (ZERO_TOLERANCE**2)),
        1.0 / products,
    )

    return safe_products.astype(np.float64)


def compute_lagrange_derivative_coefficients_at_point(
    polynomial_definition_nodes: FloatArray,
    barycentric_weights: FloatArray,
    evaluation_point_tau: float,
) -> FloatArray:
    """Derivatives of every Lagrange basis polynomial at one of its own nodes.

    Raises:
        DataIntegrityError: If the evaluation point is not one of the nodes
    """
    num_nodes = len(polynomial_definition_nodes)

    differences = np.abs(evaluation_point_tau - polynomial_definition_nodes)
    matched_indices = np.where(differences < ZERO_TOLERANCE)[0]

    if len(matched_indices) == 0:
        raise DataIntegrityError(
            f"Evaluation point {evaluation_point_tau} is not a polynomial node",
            "Lagrange derivative coefficients",
        )

    matched_node_idx_k = matched_indices[0]
    derivatives = np.zeros(num_nodes, dtype=np.float64)

    node_diffs = polynomial_definition_nodes[matched_node_idx_k] - polynomial_definition_nodes

    near_zero_mask = np.abs(node_diffs) < ZERO_TOLERANCE
    safe_diffs = np.where(
        near_zero_mask,
        np.where(node_diffs == 0, ZERO_TOLERANCE, np.sign(node_diffs) * ZERO_TOLERANCE),
        node_diffs,
    )

    non_diagonal_mask = np.arange(num_nodes) != matched_node_idx_k

    if abs(barycentric_weights[matched_node_idx_k]) < ZERO_TOLERANCE:
        derivatives[non_diagonal_mask] = 0.0
    else:
        weight_ratios = barycentric_weights / barycentric_weights[matched_node_idx_k]
        derivatives[non_diagonal_mask] = (
            weight_ratios[non_diagonal_mask] / safe_diffs[non_diagonal_mask]
        )

    # Diagonal from sum of reciprocals (differentiation matrix property)
    derivatives[matched_node_idx_k] = np.sum(1.0 / safe_diffs[non_diagonal_mask])

    return derivatives


def compute_radau_collocation_components(degree: int) -> RadauBasisComponents:
    """Get Radau components for ``degree`` from the global cache.

    Raises:
        ConfigurationError: If ``degree`` is not an integer >= 1
    """
    validate_polynomial_degree(degree, "collocation degree")

    return _radau_cache.get_components(int(degree))
