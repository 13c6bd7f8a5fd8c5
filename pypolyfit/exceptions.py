"""
Errors and warnings raised by pypolyfit.

Every error is raised at the point of violation and propagates to the
caller; a failed fit never returns partial coefficients.
"""

import numpy as np


class PolyFitError(Exception):
    """Base class for all pypolyfit errors."""


class LengthMismatchError(PolyFitError, ValueError):
    """Sample sequences of one fit call have different lengths."""


class InvalidDimensionError(PolyFitError, ValueError):
    """Matrix shape with a non-positive row or column count."""


class IndexOutOfRangeError(PolyFitError, IndexError):
    """Matrix element access outside the matrix bounds."""


class DimensionMismatchError(PolyFitError, ValueError):
    """Operand shapes incompatible with the requested operation."""


class SingularMatrixError(PolyFitError, np.linalg.LinAlgError):
    """Zero pivot or zero diagonal of R: the system has no unique solution."""


class IllConditionedWarning(UserWarning):
    """Solve completed, but the system is close to singular."""


class AliasedTermsWarning(UserWarning):
    """Some basis terms are linear combinations of earlier terms."""
