"""
Design matrices for the curve and surface bases.
"""

import numpy as np

from ..matrix import DenseMatrix


SURFACE_TERMS = ('1', 'x', 'y', 'xy', 'x^2', 'y^2')


def vandermonde(x: np.ndarray, degree: int, dtype=np.float64) -> DenseMatrix:
    """
    N x (degree + 1) Vandermonde matrix, V[i, j] = x[i] ** j.

    Columns are filled with a running power rather than by exponentiation.
    """
    x = np.asarray(x, dtype=dtype)
    V = DenseMatrix(len(x), degree + 1, dtype=dtype)
    data = V._data
    power = np.ones_like(x)
    for j in range(degree + 1):
        data[:, j] = power
        power = power * x
    return V


def surface_design_matrix(x: np.ndarray, y: np.ndarray, dtype=np.float64) -> DenseMatrix:
    """
    N x 6 design matrix with columns [1, x, y, xy, x^2, y^2].

    Expects coordinates already recentred on the local origin.
    """
    x = np.asarray(x, dtype=dtype)
    y = np.asarray(y, dtype=dtype)
    D = DenseMatrix(len(x), len(SURFACE_TERMS), dtype=dtype)
    D._data[:] = np.column_stack([np.ones_like(x), x, y, x * y, x * x, y * y])
    return D
