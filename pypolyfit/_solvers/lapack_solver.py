"""
LU solver using SciPy (LAPACK getrf/getrs).

Independent reference implementation for cross-checking the pure NumPy
solvers.
"""

import warnings
import numpy as np
from scipy.linalg import LinAlgWarning, lu_factor, lu_solve

from .base import SolverBase
from ..exceptions import SingularMatrixError


class LapackLUSolver(SolverBase):
    """
    LU solver backed by LAPACK.

    Always computes in float32 or float64, the precisions LAPACK supports.
    """

    name = "lapack"

    def _solve_arrays(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        if a.dtype not in (np.float32, np.float64):
            a = a.astype(np.float64)
            b = b.astype(np.float64)

        # LAPACK only warns on an exact zero pivot; report it as an error
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', LinAlgWarning)
            lu, piv = lu_factor(a, check_finite=True)

        zero = np.flatnonzero(np.diag(lu) == 0)
        if zero.size:
            raise SingularMatrixError(
                f"No non-zero pivot in column {zero[0]}: matrix is singular"
            )

        return lu_solve((lu, piv), b)

    def get_solver_info(self) -> dict:
        """Get solver information."""
        import scipy
        return {
            'solver': self.name,
            'method': 'LAPACK getrf/getrs',
            'library': f'NumPy {np.__version__}, SciPy {scipy.__version__}',
        }
