"""
Least squares through the normal equations.

Shared by the curve and surface engines; the solver strategy does the
actual linear algebra.
"""

from typing import Tuple

from ..matrix import DenseMatrix


def normal_equations(design: DenseMatrix, rhs: DenseMatrix) -> Tuple[DenseMatrix, DenseMatrix]:
    """Form (A'A, A'b) for the over-determined system A c = b."""
    design_t = design.transpose()
    return design_t @ design, design_t @ rhs


def solve_normal_equations(
    design: DenseMatrix,
    rhs: DenseMatrix,
    solver=None,
) -> DenseMatrix:
    """
    Least-squares coefficients of design @ c = rhs.

    Parameters
    ----------
    design : DenseMatrix, shape (n, p)
        Design matrix
    rhs : DenseMatrix, shape (n, 1)
        Observed responses
    solver : str or SolverBase, optional
        Linear solver strategy (default: LU)

    Returns
    -------
    coef : DenseMatrix, shape (p, 1)
    """
    from .._solvers import get_solver
    solver = get_solver(solver)

    ata, atb = normal_equations(design, rhs)
    return solver.solve(ata, atb)
