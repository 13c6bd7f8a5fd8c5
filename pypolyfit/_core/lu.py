"""
Gaussian elimination with partial pivoting.

Combined L/U storage: multipliers below the diagonal (unit diagonal of
L implied), U on and above it.
"""

import numpy as np
from dataclasses import dataclass

from ..exceptions import SingularMatrixError
from .triangular import back_substitution, forward_substitution_unit


@dataclass
class LUDecomposition:
    """Result of LU decomposition with partial pivoting."""
    lu: np.ndarray     # L below the diagonal, U on/above
    perm: np.ndarray   # perm[k] = original row now at position k

    @property
    def pivots(self) -> np.ndarray:
        """Diagonal of U."""
        return np.diag(self.lu).copy()


def lu_decompose(A: np.ndarray) -> LUDecomposition:
    """
    Factor a square matrix as P A = L U.

    Parameters
    ----------
    A : ndarray, shape (n, n)
        Matrix to factor (not modified)

    Returns
    -------
    result : LUDecomposition

    Raises
    ------
    SingularMatrixError
        If the largest pivot candidate of some column is exactly zero
    """
    lu = np.array(A, copy=True)
    n = lu.shape[0]
    perm = np.arange(n)

    for k in range(n):
        # argmax returns the first maximum, so ties keep the upper row
        p = k + int(np.argmax(np.abs(lu[k:, k])))
        if lu[p, k] == 0:
            raise SingularMatrixError(
                f"No non-zero pivot in column {k}: matrix is singular"
            )
        if p != k:
            lu[[k, p]] = lu[[p, k]]
            perm[[k, p]] = perm[[p, k]]

        lu[k + 1:, k] = lu[k + 1:, k] / lu[k, k]
        lu[k + 1:, k + 1:] -= np.outer(lu[k + 1:, k], lu[k, k + 1:])

    return LUDecomposition(lu=lu, perm=perm)


def lu_solve(decomposition: LUDecomposition, B: np.ndarray) -> np.ndarray:
    """
    Solve A X = B from a factorisation of A.

    B may hold several right-hand-side columns.
    """
    lu = decomposition.lu
    Y = forward_substitution_unit(lu, np.asarray(B)[decomposition.perm])
    return back_substitution(lu, Y)
