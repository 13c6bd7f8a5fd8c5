"""
Test solver implementations.

LU and Givens QR are checked against known solutions, against each other
and against the LAPACK reference solver.
"""

import warnings

import pytest
import numpy as np

from pypolyfit import (
    DenseMatrix,
    DimensionMismatchError,
    SingularMatrixError,
    IllConditionedWarning,
)
from pypolyfit._core import (
    lu_decompose,
    lu_solve,
    givens_decompose,
    givens_solve,
    apply_transpose,
    orthogonal_factor,
)
from pypolyfit._solvers import (
    get_solver,
    list_available_solvers,
    print_solver_info,
    pivot_ratio,
    LUSolver,
    GivensQRSolver,
    LapackLUSolver,
)


A_KNOWN = np.array([[2.0, 1.0, 1.0],
                    [4.0, -6.0, 0.0],
                    [-2.0, 7.0, 2.0]])
X_KNOWN = np.array([1.0, 2.0, 3.0])
B_KNOWN = A_KNOWN @ X_KNOWN    # [7, -8, 18]

ALL_SOLVERS = ['lu', 'qr', 'lapack']


def well_conditioned(n, seed=42):
    rng = np.random.default_rng(seed)
    return rng.normal(size=(n, n)) + n * np.eye(n)


class TestLUDecomposition:
    """Test the partial-pivot factorisation."""

    def test_pa_equals_lu(self):
        """Rows of A permuted by perm equal L @ U."""
        result = lu_decompose(A_KNOWN)
        L = np.tril(result.lu, -1) + np.eye(3)
        U = np.triu(result.lu)
        np.testing.assert_allclose(A_KNOWN[result.perm], L @ U, atol=1e-12)

    def test_largest_pivot_chosen(self):
        """First pivot is the largest entry of column 0."""
        result = lu_decompose(A_KNOWN)
        assert result.perm[0] == 1
        assert result.pivots[0] == 4.0

    def test_multipliers_bounded(self):
        """Partial pivoting keeps |L| <= 1."""
        result = lu_decompose(well_conditioned(6))
        assert np.all(np.abs(np.tril(result.lu, -1)) <= 1.0)

    def test_input_not_modified(self):
        A = A_KNOWN.copy()
        lu_decompose(A)
        np.testing.assert_array_equal(A, A_KNOWN)

    def test_solve_known_system(self):
        x = lu_solve(lu_decompose(A_KNOWN), B_KNOWN)
        np.testing.assert_allclose(x, X_KNOWN, rtol=1e-12)

    def test_solve_multiple_rhs(self):
        B = np.column_stack([B_KNOWN, 2 * B_KNOWN])
        X = lu_solve(lu_decompose(A_KNOWN), B)
        np.testing.assert_allclose(X[:, 0], X_KNOWN, rtol=1e-12)
        np.testing.assert_allclose(X[:, 1], 2 * X_KNOWN, rtol=1e-12)

    def test_zero_column_is_singular(self):
        with pytest.raises(SingularMatrixError):
            lu_decompose(np.array([[0.0, 1.0], [0.0, 1.0]]))


class TestGivensDecomposition:
    """Test the rotation-based QR factorisation."""

    def test_r_is_upper_triangular(self):
        result = givens_decompose(well_conditioned(5))
        assert np.all(np.tril(result.R, -1) == 0)

    def test_q_is_orthogonal(self):
        result = givens_decompose(well_conditioned(5))
        Q = orthogonal_factor(result)
        np.testing.assert_allclose(Q.T @ Q, np.eye(5), atol=1e-12)

    def test_qr_reconstructs_a(self):
        A = well_conditioned(5)
        result = givens_decompose(A)
        np.testing.assert_allclose(orthogonal_factor(result) @ result.R, A, atol=1e-12)

    def test_tall_matrix(self):
        """Rectangular (m > n) input is reduced to n non-zero rows."""
        rng = np.random.default_rng(3)
        A = rng.normal(size=(6, 3))
        result = givens_decompose(A)
        assert np.all(result.R[3:] == 0)
        np.testing.assert_allclose(orthogonal_factor(result) @ result.R, A, atol=1e-12)

    def test_apply_transpose_matches_q(self):
        """Replaying rotations equals multiplying by Q'."""
        A = well_conditioned(4)
        b = np.arange(4.0)
        result = givens_decompose(A)
        np.testing.assert_allclose(
            apply_transpose(result, b), orthogonal_factor(result).T @ b, atol=1e-12
        )

    def test_zero_entries_skipped(self):
        """Already-triangular input needs no rotations."""
        result = givens_decompose(np.triu(well_conditioned(4)))
        assert result.rotations == []

    def test_solve_known_system(self):
        x = givens_solve(givens_decompose(A_KNOWN), B_KNOWN)
        np.testing.assert_allclose(x, X_KNOWN, rtol=1e-12)

    def test_zero_diagonal_is_singular(self):
        result = givens_decompose(np.array([[0.0, 1.0], [0.0, 1.0]]))
        with pytest.raises(SingularMatrixError):
            givens_solve(result, np.array([1.0, 1.0]))


class TestSolverStrategies:
    """Test the common solve() contract of every strategy."""

    @pytest.mark.parametrize("name", ALL_SOLVERS)
    def test_known_system(self, name):
        solver = get_solver(name)
        X = solver.solve(DenseMatrix.from_array(A_KNOWN), DenseMatrix.column(B_KNOWN))
        assert X.shape == (3, 1)
        np.testing.assert_allclose(X.to_numpy()[:, 0], X_KNOWN, rtol=1e-10)

    @pytest.mark.parametrize("name", ALL_SOLVERS)
    def test_singular_system(self, name):
        """Rank-deficient systems raise, no coefficients are returned."""
        A = DenseMatrix.from_array([[1.0, 2.0], [2.0, 4.0]])
        B = DenseMatrix.column([1.0, 2.0])
        with pytest.raises(SingularMatrixError):
            get_solver(name).solve(A, B)

    @pytest.mark.parametrize("name", ALL_SOLVERS)
    def test_non_square_rejected(self, name):
        with pytest.raises(DimensionMismatchError):
            get_solver(name).solve(DenseMatrix(3, 2), DenseMatrix(3, 1))

    @pytest.mark.parametrize("name", ALL_SOLVERS)
    def test_rhs_rows_mismatch(self, name):
        with pytest.raises(DimensionMismatchError):
            get_solver(name).solve(DenseMatrix.from_array(A_KNOWN), DenseMatrix(2, 1))

    @pytest.mark.parametrize("name", ALL_SOLVERS)
    def test_inputs_not_modified(self, name):
        A = DenseMatrix.from_array(A_KNOWN)
        B = DenseMatrix.column(B_KNOWN)
        get_solver(name).solve(A, B)
        np.testing.assert_array_equal(A.to_numpy(), A_KNOWN)
        np.testing.assert_array_equal(B.to_numpy()[:, 0], B_KNOWN)

    def test_integer_input_promoted(self):
        """Integer matrices are solved in floating point."""
        A = DenseMatrix.from_array([[2, 0], [0, 4]])
        B = DenseMatrix.column([1, 1])
        X = get_solver('lu').solve(A, B)
        assert X.dtype == np.float64
        np.testing.assert_allclose(X.to_numpy()[:, 0], [0.5, 0.25])

    def test_lu_vs_qr_consistency(self):
        """LU and QR agree on a well-conditioned system."""
        A = DenseMatrix.from_array(well_conditioned(8, seed=7))
        B = DenseMatrix.from_array(np.random.default_rng(8).normal(size=(8, 2)))

        lu = get_solver('lu').solve(A, B).to_numpy()
        qr = get_solver('qr').solve(A, B).to_numpy()
        ref = get_solver('lapack').solve(A, B).to_numpy()

        np.testing.assert_allclose(lu, qr, rtol=1e-10, atol=1e-12)
        np.testing.assert_allclose(lu, ref, rtol=1e-10, atol=1e-12)


class TestConditioning:
    """Test the pivot-ratio warning of the LU solver."""

    def test_pivot_ratio(self):
        assert pivot_ratio(np.array([2.0, -4.0, 1.0])) == 0.25

    def test_nearly_singular_warns(self):
        A = DenseMatrix.from_array([[1.0, 1.0], [1.0, 1.0 + 1e-14]])
        B = DenseMatrix.column([2.0, 2.0])
        with pytest.warns(IllConditionedWarning, match="solver='qr'") as record:
            LUSolver().solve(A, B)
        assert record[0].filename == __file__

    def test_well_conditioned_silent(self):
        A = DenseMatrix.from_array(well_conditioned(4))
        B = DenseMatrix.column(np.ones(4))
        with warnings.catch_warnings():
            warnings.simplefilter("error", IllConditionedWarning)
            LUSolver().solve(A, B)

    def test_check_can_be_disabled(self):
        A = DenseMatrix.from_array([[1.0, 1.0], [1.0, 1.0 + 1e-14]])
        B = DenseMatrix.column([2.0, 2.0])
        with warnings.catch_warnings():
            warnings.simplefilter("error", IllConditionedWarning)
            LUSolver(check_conditioning=False).solve(A, B)


class TestSolverSelection:
    """Test get_solver and diagnostics."""

    def test_names(self):
        assert isinstance(get_solver('lu'), LUSolver)
        assert isinstance(get_solver('qr'), GivensQRSolver)
        assert isinstance(get_solver('givens'), GivensQRSolver)
        assert isinstance(get_solver('lapack'), LapackLUSolver)

    def test_default_is_lu(self):
        assert get_solver().name == 'lu'

    def test_instance_passthrough(self):
        solver = GivensQRSolver()
        assert get_solver(solver) is solver

    def test_unknown_solver(self):
        with pytest.raises(ValueError, match="Unknown solver"):
            get_solver('cholesky')

    def test_list_solvers(self):
        solvers = list_available_solvers()
        assert isinstance(solvers, list)
        assert set(solvers) == {'lu', 'qr', 'lapack'}

    def test_solver_info(self):
        info = get_solver('lapack').get_solver_info()
        assert info['solver'] == 'lapack'
        assert 'SciPy' in info['library']

    def test_print_solver_info(self, capsys):
        print_solver_info()
        captured = capsys.readouterr()
        assert 'Solver Status' in captured.out
        assert 'givens' in captured.out.lower()
