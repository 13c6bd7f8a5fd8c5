"""
Givens QR solver.

Orthogonal rotations do not amplify rounding errors, which makes this the
safer choice for ill-conditioned Vandermonde systems.
"""

import numpy as np

from .base import SolverBase
from .._core.givens import givens_decompose, givens_solve


class GivensQRSolver(SolverBase):
    """QR solver based on Givens rotations."""

    name = "givens_qr"

    def _solve_arrays(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        return givens_solve(givens_decompose(a), b)

    def get_solver_info(self) -> dict:
        """Get solver information."""
        return {
            'solver': self.name,
            'method': 'QR decomposition by Givens rotations',
            'library': f'NumPy {np.__version__}',
        }
