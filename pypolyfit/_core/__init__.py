"""
Core algorithms (solver-agnostic).
"""

from .lu import LUDecomposition, lu_decompose, lu_solve
from .givens import (
    GivensDecomposition,
    givens_decompose,
    givens_solve,
    apply_transpose,
    orthogonal_factor,
)
from .design import SURFACE_TERMS, vandermonde, surface_design_matrix
from .normal import normal_equations, solve_normal_equations
from .rank import aliased_columns

__all__ = [
    "LUDecomposition",
    "lu_decompose",
    "lu_solve",
    "GivensDecomposition",
    "givens_decompose",
    "givens_solve",
    "apply_transpose",
    "orthogonal_factor",
    "SURFACE_TERMS",
    "vandermonde",
    "surface_design_matrix",
    "normal_equations",
    "solve_normal_equations",
    "aliased_columns",
]
