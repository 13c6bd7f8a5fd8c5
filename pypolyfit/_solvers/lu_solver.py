"""
LU solver: Gaussian elimination with partial pivoting.

Fast, but conditioning of the normal equations is squared relative to
the design matrix; prefer the Givens QR solver for high degrees.
"""

import numpy as np

from .base import SolverBase
from .conditioning import check_pivots
from .._core.lu import lu_decompose, lu_solve


class LUSolver(SolverBase):
    """
    Partial-pivot LU solver.

    Raises SingularMatrixError on an exactly-zero pivot and warns with
    IllConditionedWarning when the pivots span too many orders of magnitude.
    """

    name = "lu"

    def __init__(self, check_conditioning: bool = True):
        self.check_conditioning = check_conditioning

    def _solve_arrays(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        decomposition = lu_decompose(a)
        if self.check_conditioning:
            # check_pivots -> _solve_arrays -> solve -> caller of solve
            check_pivots(decomposition.pivots, stacklevel=4)
        return lu_solve(decomposition, b)

    def get_solver_info(self) -> dict:
        """Get solver information."""
        return {
            'solver': self.name,
            'method': 'Gaussian elimination with partial pivoting',
            'library': f'NumPy {np.__version__}',
        }
