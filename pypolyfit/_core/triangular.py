"""
Substitution on triangular factors.
"""

import numpy as np

from ..exceptions import SingularMatrixError


def forward_substitution_unit(L: np.ndarray, B: np.ndarray) -> np.ndarray:
    """
    Solve L Y = B for unit lower-triangular L.

    Only the strict lower triangle of L is read, so the combined L/U
    storage of an LU factorisation can be passed directly.
    """
    Y = np.array(B, copy=True)
    n = L.shape[0]
    for i in range(1, n):
        Y[i] -= L[i, :i] @ Y[:i]
    return Y


def back_substitution(U: np.ndarray, Y: np.ndarray) -> np.ndarray:
    """
    Solve U X = Y for upper-triangular U (top n x n block).

    Raises
    ------
    SingularMatrixError
        If a diagonal entry of U is exactly zero
    """
    n = U.shape[1]
    X = np.array(Y[:n], copy=True)
    for i in range(n - 1, -1, -1):
        if U[i, i] == 0:
            raise SingularMatrixError(
                f"Zero diagonal entry at position {i}: system is rank-deficient"
            )
        X[i] = (X[i] - U[i, i + 1:n] @ X[i + 1:]) / U[i, i]
    return X
