"""
Abstract base class for linear solvers.

Defines the interface all solver strategies must implement.
"""

from abc import ABC, abstractmethod
import numpy as np
from typing import Tuple

from ..exceptions import DimensionMismatchError
from ..matrix import DenseMatrix


class SolverBase(ABC):
    """
    Strategy for solving a square system A X = B.

    Subclasses implement `_solve_arrays`; `solve` validates shapes, picks
    a working dtype and wraps the result. Inputs are never modified.
    """

    name = "base"

    def solve(self, A: DenseMatrix, B: DenseMatrix) -> DenseMatrix:
        """
        Solve A X = B.

        Parameters
        ----------
        A : DenseMatrix, shape (n, n)
            Coefficient matrix
        B : DenseMatrix, shape (n, m)
            Right-hand side column(s)

        Returns
        -------
        X : DenseMatrix, shape (n, m)

        Raises
        ------
        DimensionMismatchError
            If A is not square or B.rows != A.rows
        SingularMatrixError
            If the system has no unique solution
        """
        a, b = self._working_arrays(A, B)
        return DenseMatrix._wrap(self._solve_arrays(a, b))

    @staticmethod
    def _working_arrays(A: DenseMatrix, B: DenseMatrix) -> Tuple[np.ndarray, np.ndarray]:
        if A.rows != A.cols:
            raise DimensionMismatchError(
                f"Coefficient matrix must be square, got {A.shape}"
            )
        if B.rows != A.rows:
            raise DimensionMismatchError(
                f"Right-hand side has {B.rows} rows, expected {A.rows}"
            )
        dtype = np.result_type(A.dtype, B.dtype)
        if dtype.kind in 'biu':
            dtype = np.dtype(np.float64)
        return A.to_numpy().astype(dtype, copy=False), B.to_numpy().astype(dtype, copy=False)

    @abstractmethod
    def _solve_arrays(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        """Solve on private ndarray copies; may modify them."""
        pass

    @abstractmethod
    def get_solver_info(self) -> dict:
        """Get solver information."""
        pass

    def __repr__(self):
        return f"{type(self).__name__}(name={self.name!r})"
