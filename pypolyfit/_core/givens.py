"""
QR decomposition by Givens rotations.

Q is never formed during a solve: the recorded rotations are replayed on
the right-hand side to produce Q'B directly.
"""

import numpy as np
from typing import List, Tuple
from dataclasses import dataclass

from .triangular import back_substitution


@dataclass
class GivensDecomposition:
    """Result of Givens QR decomposition."""
    R: np.ndarray                                    # Upper triangular factor
    rotations: List[Tuple[int, int, float, float]]   # (k, i, c, s) in order applied


def _rotate_rows(M: np.ndarray, k: int, i: int, c, s) -> None:
    """Apply the plane rotation [[c, s], [-s, c]] to rows k and i of M in place."""
    row_k = np.copy(M[k])
    row_i = np.copy(M[i])
    M[k] = c * row_k + s * row_i
    M[i] = -s * row_k + c * row_i


def givens_decompose(A: np.ndarray) -> GivensDecomposition:
    """
    Reduce A to upper triangular R with planar rotations.

    Columns are processed left to right; each non-zero entry below the
    diagonal of column k is zeroed by rotating its row against row k.

    Parameters
    ----------
    A : ndarray, shape (m, n), m >= n
        Matrix to decompose (not modified)

    Returns
    -------
    result : GivensDecomposition
        R and the rotation sequence, so that A = Q R with
        Q' = G_last ... G_first
    """
    R = np.array(A, copy=True)
    m, n = R.shape
    rotations = []

    for k in range(n):
        for i in range(k + 1, m):
            b = R[i, k]
            if b == 0:
                continue
            a = R[k, k]
            r = np.hypot(a, b)
            c = a / r
            s = b / r
            _rotate_rows(R, k, i, c, s)
            R[i, k] = 0
            rotations.append((k, i, c, s))

    return GivensDecomposition(R=R, rotations=rotations)


def apply_transpose(decomposition: GivensDecomposition, B: np.ndarray) -> np.ndarray:
    """Compute Q'B by replaying the rotations on a copy of B."""
    QtB = np.array(B, copy=True)
    for k, i, c, s in decomposition.rotations:
        _rotate_rows(QtB, k, i, c, s)
    return QtB


def orthogonal_factor(decomposition: GivensDecomposition) -> np.ndarray:
    """Materialise the orthogonal factor Q (m x m)."""
    m = decomposition.R.shape[0]
    Qt = apply_transpose(decomposition, np.eye(m, dtype=decomposition.R.dtype))
    return Qt.T.copy()


def givens_solve(decomposition: GivensDecomposition, B: np.ndarray) -> np.ndarray:
    """
    Solve R X = Q'B by back substitution.

    Raises
    ------
    SingularMatrixError
        If a diagonal entry of R is exactly zero
    """
    return back_substitution(decomposition.R, apply_transpose(decomposition, B))
