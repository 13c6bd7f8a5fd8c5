"""
Solver selection and management.

Provides a single interface over the LU, Givens QR and LAPACK solvers.
"""

from typing import Union

from .base import SolverBase
from .conditioning import ILL_CONDITIONED_PIVOT_RATIO, check_pivots, pivot_ratio
from .lu_solver import LUSolver
from .givens_solver import GivensQRSolver
from .lapack_solver import LapackLUSolver


DEFAULT_SOLVER = 'lu'

_SOLVERS = {
    'lu': LUSolver,
    'qr': GivensQRSolver,
    'givens': GivensQRSolver,
    'lapack': LapackLUSolver,
}


def get_solver(solver: Union[str, SolverBase, None] = None) -> SolverBase:
    """
    Get linear solver.

    Parameters
    ----------
    solver : str, SolverBase or None
        Solver selection:
        - None: default ('lu')
        - 'lu': Gaussian elimination with partial pivoting
        - 'qr' or 'givens': Givens QR decomposition
        - 'lapack': SciPy/LAPACK LU (reference)
        - a SolverBase instance: returned unchanged

    Returns
    -------
    SolverBase
        Solver instance

    Examples
    --------
    >>> solver = get_solver('qr')
    >>> solver.name
    'givens_qr'
    """
    if solver is None:
        solver = DEFAULT_SOLVER

    if isinstance(solver, SolverBase):
        return solver

    try:
        return _SOLVERS[solver]()
    except (KeyError, TypeError):
        raise ValueError(
            f"Unknown solver: {solver!r}\n"
            f"Valid options: 'lu', 'qr', 'givens', 'lapack'"
        ) from None


def list_available_solvers() -> list:
    """List names of available solvers."""
    return ['lu', 'qr', 'lapack']


def print_solver_info():
    """Print detailed solver information (diagnostic)."""
    print("pypolyfit Solver Status")
    print("=" * 50)
    print("\nAvailable Solvers:")
    for key in list_available_solvers():
        info = get_solver(key).get_solver_info()
        print(f"  {key:<8} {info['method']:<45} ({info['library']})")

    print(f"\nDefault Solver: {DEFAULT_SOLVER}")
    print(f"Ill-conditioning threshold (pivot ratio): {ILL_CONDITIONED_PIVOT_RATIO:.0e}")
    print("  Note: use 'qr' for high degrees or widely spread x values")


# Export main interface
__all__ = [
    'get_solver',
    'list_available_solvers',
    'print_solver_info',
    'SolverBase',
    'LUSolver',
    'GivensQRSolver',
    'LapackLUSolver',
    'DEFAULT_SOLVER',
    'ILL_CONDITIONED_PIVOT_RATIO',
    'check_pivots',
    'pivot_ratio',
]


if __name__ == "__main__":
    print_solver_info()
