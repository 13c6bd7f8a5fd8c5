"""
pypolyfit: least-squares polynomial curves and quadratic surfaces.

Copyright (C) 2024 SGCX
Licensed under GPL-3.0
"""

__version__ = "1.0.0"

# Import main user-facing API
from .curve import polyfit, polyfit_qr, polyval, PolynomialFit, fit_polynomial
from .surface import (
    polyfit3d,
    polyval3d,
    recenter,
    RecenteredSamples,
    SurfaceFit,
    fit_surface,
)
from .matrix import DenseMatrix, multiply
from .exceptions import (
    PolyFitError,
    LengthMismatchError,
    InvalidDimensionError,
    IndexOutOfRangeError,
    DimensionMismatchError,
    SingularMatrixError,
    IllConditionedWarning,
    AliasedTermsWarning,
)

# Import solver utilities (for advanced users)
from ._solvers import get_solver, list_available_solvers, SolverBase

__all__ = [
    'polyfit',
    'polyfit_qr',
    'polyval',
    'PolynomialFit',
    'fit_polynomial',
    'polyfit3d',
    'polyval3d',
    'recenter',
    'RecenteredSamples',
    'SurfaceFit',
    'fit_surface',
    'DenseMatrix',
    'multiply',
    'PolyFitError',
    'LengthMismatchError',
    'InvalidDimensionError',
    'IndexOutOfRangeError',
    'DimensionMismatchError',
    'SingularMatrixError',
    'IllConditionedWarning',
    'AliasedTermsWarning',
    'get_solver',
    'list_available_solvers',
    'SolverBase',
]
