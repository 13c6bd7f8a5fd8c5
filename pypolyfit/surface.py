"""
Quadratic surface fitting.

Model: z = c0 + c1 x + c2 y + c3 xy + c4 x^2 + c5 y^2, with x and y measured
from the first sample (the local origin). Solved through the normal
equations with the Givens QR solver.
"""

import warnings
import numpy as np
import pandas as pd
from typing import Optional, Tuple
from dataclasses import dataclass

from ._core.design import SURFACE_TERMS, surface_design_matrix
from ._core.normal import solve_normal_equations
from ._core.rank import aliased_columns
from ._solvers import GivensQRSolver
from ._utils import check_samples
from .exceptions import AliasedTermsWarning, InvalidDimensionError, SingularMatrixError
from .matrix import DenseMatrix


@dataclass
class RecenteredSamples:
    """Coordinates expressed relative to the local origin."""
    x: np.ndarray
    y: np.ndarray
    origin: Tuple[float, float]   # (x, y) of the first sample in the caller's frame


def recenter(x, y) -> RecenteredSamples:
    """
    Translate samples so the first one sits at the origin.

    Returns new arrays; the inputs are not modified.

    Raises
    ------
    InvalidDimensionError
        If there are no samples
    """
    x = np.asarray(x)
    y = np.asarray(y)
    if x.size == 0:
        raise InvalidDimensionError("Need at least one sample")
    x0, y0 = x[0], y[0]
    return RecenteredSamples(x=x - x0, y=y - y0, origin=(x0, y0))


def polyval3d(coeffs, design: DenseMatrix) -> np.ndarray:
    """
    Evaluate the surface on every row of a design matrix.

    Each value is row(i) @ coeffs, with coeffs as a 6 x 1 column.
    """
    coeff_column = DenseMatrix.column(coeffs)
    return np.array([(design.row(i) @ coeff_column)[0, 0] for i in range(design.rows)])


def _fit3d(x, y, z, singular_ok, dtype):
    """Fit on validated arrays; returns everything SurfaceFit needs."""
    local = recenter(x, y)
    design = surface_design_matrix(local.x, local.y, dtype=dtype)

    aliased = aliased_columns(design.to_numpy())
    if np.any(aliased):
        names = [SURFACE_TERMS[j] for j in np.flatnonzero(aliased)]
        if not singular_ok:
            raise SingularMatrixError(
                f"Singular fit: terms {names} are linear combinations of lower-order terms"
            )
        warnings.warn(
            f"Samples do not determine terms {names}; their coefficients are set to 0.",
            AliasedTermsWarning,
            stacklevel=3,
        )

    active = DenseMatrix.from_array(design.to_numpy()[:, ~aliased])
    solution = solve_normal_equations(
        active, DenseMatrix.column(z, dtype=dtype), solver=GivensQRSolver()
    )

    coefficients = np.zeros(len(SURFACE_TERMS), dtype=solution.dtype)
    coefficients[~aliased] = solution.to_numpy()[:, 0]
    fitted = polyval3d(coefficients, design)
    return coefficients, fitted, design, local, aliased


def polyfit3d(x, y, z, singular_ok: bool = True, dtype=np.float64) -> Tuple[np.ndarray, np.ndarray]:
    """
    Least-squares quadratic surface through (x, y, z) samples.

    Parameters
    ----------
    x, y, z : array-like, shape (n,)
        Sample coordinates
    singular_ok : bool, default=True
        Allow samples that do not determine every term. Undetermined
        (aliased) terms get coefficient 0 and an AliasedTermsWarning is
        issued; if False, SingularMatrixError is raised instead.
    dtype : numpy dtype, default=float64
        Working precision

    Returns
    -------
    coefficients : ndarray, shape (6,)
        Coefficients of [1, x, y, xy, x^2, y^2] in the recentred frame
    fitted : ndarray, shape (n,)
        Fitted z at the sample points

    Raises
    ------
    LengthMismatchError
        If x, y and z differ in length
    InvalidDimensionError
        If there are no samples
    SingularMatrixError
        If the normal equations are singular
    """
    x, y, z = check_samples(dtype=dtype, x=x, y=y, z=z)
    coefficients, fitted, _, _, _ = _fit3d(x, y, z, singular_ok, dtype)
    return coefficients, fitted


class SurfaceFit:
    """
    Fit a quadratic surface by least squares.

    Examples
    --------
    >>> model = fit_surface(x=[0, 1, 0, 1, 2, 2], y=[0, 0, 1, 1, 0, 2],
    ...                     z=[1.0, 2.0, 0.5, 1.7, 4.2, 3.3])
    >>> model.coef              # Named coefficients (local frame)
    >>> model.predict([0.5], [0.5])
    """

    def __init__(
        self,
        x,
        y,
        z,
        data: Optional[pd.DataFrame] = None,
        singular_ok: bool = True,
        dtype=np.float64,
    ):
        """
        Fit quadratic surface.

        Parameters
        ----------
        x, y, z : str or array
            Sample coordinates
            - If string: column name in data
            - If array: numeric values
        data : DataFrame, optional
            Dataset containing the columns
        singular_ok : bool
            Allow undetermined (aliased) terms
        dtype : numpy dtype
            Working precision
        """
        columns = []
        for values, label in ((x, 'x'), (y, 'y'), (z, 'z')):
            if isinstance(values, str):
                if data is None:
                    raise ValueError(f"Must provide data when {label} is a string")
                values = data[values].values
            columns.append(values)

        self.x_values, self.y_values, self.z_values = check_samples(
            dtype=dtype, x=columns[0], y=columns[1], z=columns[2]
        )
        self.n_obs = len(self.z_values)

        (self.coefficients, self.fitted_values, self.design_matrix,
         self.recentered, self.aliased) = _fit3d(
            self.x_values, self.y_values, self.z_values, singular_ok, dtype
        )
        self.origin = self.recentered.origin

        self.residuals = self.z_values - self.fitted_values
        rss = np.sum(self.residuals**2)
        tss = np.sum((self.z_values - np.mean(self.z_values))**2)
        self.r_squared = 1 - (rss / tss) if tss > 0 else 0.0
        self.rank = int(np.sum(~self.aliased))

    @property
    def coef(self):
        """Named coefficients (pandas Series)."""
        return pd.Series(self.coefficients, index=list(SURFACE_TERMS))

    def predict(self, x_new, y_new) -> np.ndarray:
        """
        Evaluate the surface at new points.

        Points are given in the caller's frame and shifted by the stored
        origin, not by their own first element.
        """
        x_new = np.atleast_1d(np.asarray(x_new, dtype=self.x_values.dtype)) - self.origin[0]
        y_new = np.atleast_1d(np.asarray(y_new, dtype=self.y_values.dtype)) - self.origin[1]
        design = surface_design_matrix(x_new, y_new, dtype=self.x_values.dtype)
        return polyval3d(self.coefficients, design)

    def summary(self):
        """Print summary of fit results."""
        print()
        print("="*60)
        print("QUADRATIC SURFACE FIT RESULTS")
        print("="*60)
        print(f"Number of observations: {self.n_obs}")
        print(f"Local origin:           ({self.origin[0]:.4f}, {self.origin[1]:.4f})")
        print(f"Rank:                   {self.rank} of {len(SURFACE_TERMS)}")
        print()
        print(f"{'Term':<10} {'Estimate':>14}")
        print("-"*60)
        for name, value, dropped in zip(SURFACE_TERMS, self.coefficients, self.aliased):
            note = ' (aliased)' if dropped else ''
            print(f"{name:<10} {value:>14.6f}{note}")
        print("-"*60)
        print(f"R-squared: {self.r_squared:.4f}")
        print("Solver: givens_qr")
        print("="*60)
        print()

    def __repr__(self):
        return f"SurfaceFit(n={self.n_obs}, rank={self.rank}, R²={self.r_squared:.3f})"


def fit_surface(x, y, z, data=None, **kwargs):
    """
    Fit quadratic surface (convenience function).

    Returns
    -------
    SurfaceFit
        Fitted model object
    """
    return SurfaceFit(x=x, y=y, z=z, data=data, **kwargs)
