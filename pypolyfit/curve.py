"""
Polynomial curve fitting with an R-style result object.

polyfit / polyval are the plain functional interface; PolynomialFit adds
fit statistics on top of the same computation.
"""

import warnings
import numpy as np
import pandas as pd
from typing import Optional, Union
from scipy import stats

from ._core.design import vandermonde
from ._core.normal import normal_equations
from ._solvers import get_solver
from ._utils import check_samples
from .exceptions import SingularMatrixError
from .matrix import DenseMatrix


def _term_names(degree: int) -> list:
    return ['1', 'x'][:degree + 1] + [f'x^{j}' for j in range(2, degree + 1)]


def polyfit(x, y, degree: int, solver='lu', dtype=np.float64) -> np.ndarray:
    """
    Least-squares polynomial coefficients.

    Parameters
    ----------
    x, y : array-like, shape (n,)
        Sample coordinates
    degree : int
        Polynomial degree (0 fits a constant)
    solver : str or SolverBase, default='lu'
        Linear solver for the normal equations: 'lu', 'qr', 'lapack'
    dtype : numpy dtype, default=float64
        Working precision

    Returns
    -------
    coef : ndarray, shape (degree + 1,)
        Coefficients, lowest power first

    Raises
    ------
    LengthMismatchError
        If len(x) != len(y)
    InvalidDimensionError
        If x is empty or degree is negative
    SingularMatrixError
        If the normal equations are singular (e.g. all x identical)

    Examples
    --------
    >>> coef = polyfit([0, 1, 2], [1, 3, 5], 1)       # ~ [1, 2]
    >>> coef = polyfit(x, y, 6, solver='qr')          # high degree: use QR
    """
    x, y = check_samples(dtype=dtype, x=x, y=y)
    coef, _ = _fit(x, y, degree, get_solver(solver), dtype)
    return coef


def polyfit_qr(x, y, degree: int, dtype=np.float64) -> np.ndarray:
    """polyfit using the Givens QR solver."""
    x, y = check_samples(dtype=dtype, x=x, y=y)
    coef, _ = _fit(x, y, degree, get_solver('qr'), dtype)
    return coef


def _fit(x, y, degree, solver, dtype, stacklevel=3):
    """
    Fit on validated arrays.

    Returns the coefficients and (V'V)^-1, both from one solve against
    [V'y | I]. Solver warnings are re-issued `stacklevel` frames up,
    counted from here.
    """
    V = vandermonde(x, degree, dtype=dtype)

    # V has full column rank iff x holds at least degree + 1 distinct values
    n_distinct = np.unique(x).size
    if n_distinct < degree + 1:
        raise SingularMatrixError(
            f"Singular fit: {n_distinct} distinct x value(s) cannot determine "
            f"a degree {degree} polynomial"
        )

    VtV, Vty = normal_equations(V, DenseMatrix.column(y, dtype=dtype))
    rhs = DenseMatrix.from_array(
        np.hstack([Vty.to_numpy(), np.eye(VtV.rows, dtype=VtV.dtype)])
    )
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        solution = solver.solve(VtV, rhs).to_numpy()
    for w in caught:
        warnings.warn(w.message, w.category, stacklevel=stacklevel)

    return solution[:, 0], solution[:, 1:]


def polyval(coeffs, x) -> np.ndarray:
    """
    Evaluate a polynomial given lowest-power-first coefficients.

    Powers of x are accumulated iteratively instead of exponentiated.
    """
    coeffs = np.asarray(coeffs)
    x = np.asarray(x)
    dtype = np.result_type(coeffs, x)
    if dtype.kind in 'biu':
        dtype = np.dtype(np.float64)
    y = np.zeros(x.shape, dtype=dtype)
    power = np.ones(x.shape, dtype=dtype)
    for c in coeffs:
        y += c * power
        power *= x
    return y


class PolynomialFit:
    """
    Fit a polynomial curve by least squares (like R's lm(y ~ poly(x, raw=TRUE))).

    Examples
    --------
    >>> import pandas as pd
    >>> from pypolyfit import fit_polynomial
    >>>
    >>> data = pd.DataFrame({'t': [0, 1, 2, 3], 'h': [1.0, 2.1, 4.9, 10.2]})
    >>> model = fit_polynomial(x='t', y='h', degree=2, data=data)
    >>>
    >>> model.summary()       # Coefficient table
    >>> model.coef            # Named coefficients
    >>> model.predict([4, 5]) # Extrapolate
    """

    def __init__(
        self,
        x: Union[str, np.ndarray],
        y: Union[str, np.ndarray],
        degree: int,
        data: Optional[pd.DataFrame] = None,
        solver: str = 'lu',
        dtype=np.float64,
    ):
        """
        Fit polynomial model.

        Parameters
        ----------
        x : str or array
            Predictor samples
            - If string: column name in data
            - If array: numeric values
        y : str or array
            Response samples (same rules as x)
        degree : int
            Polynomial degree
        data : DataFrame, optional
            Dataset containing x and y columns
        solver : str or SolverBase
            Linear solver: 'lu', 'qr', 'lapack'
        dtype : numpy dtype
            Working precision
        """
        # Parse inputs
        self.x_values, self.x_name = self._resolve(x, data, 'x')
        self.y_values, self.y_name = self._resolve(y, data, 'y')
        self.x_values, self.y_values = check_samples(
            dtype=dtype, x=self.x_values, y=self.y_values
        )

        # Store metadata
        self.degree = degree
        self.n_obs = len(self.y_values)
        self.n_coef = degree + 1
        self.var_names = _term_names(degree)

        # Fit model using solver
        self.solver = get_solver(solver)
        self.coefficients, self._normal_inverse = _fit(
            self.x_values, self.y_values, degree, self.solver, dtype
        )

        # Compute statistical inference
        self._compute_statistics()

    @staticmethod
    def _resolve(values, data, label):
        if isinstance(values, str):
            if data is None:
                raise ValueError(f"Must provide data when {label} is a string")
            return data[values].values, values
        return values, label

    def _compute_statistics(self):
        """Compute standard errors, t-stats, p-values, etc."""
        self.fitted_values = polyval(self.coefficients, self.x_values)
        self.residuals = self.y_values - self.fitted_values
        self.df_residual = self.n_obs - self.n_coef

        # Residual standard error
        rss = np.sum(self.residuals**2)
        if self.df_residual > 0:
            self.sigma = np.sqrt(rss / self.df_residual)
        else:
            self.sigma = np.nan

        # Var(β) = σ² (V'V)⁻¹, inverse from the fit's own solve
        self.vcov = self._normal_inverse * (self.sigma ** 2)

        # Standard errors
        self.std_errors = np.sqrt(np.abs(np.diag(self.vcov)))

        # t-statistics and two-tailed p-values
        if self.df_residual > 0:
            with np.errstate(divide='ignore', invalid='ignore'):
                self.t_values = self.coefficients / self.std_errors
            self.pvalues = 2 * (1 - stats.t.cdf(np.abs(self.t_values), self.df_residual))
        else:
            self.t_values = np.full(self.n_coef, np.nan)
            self.pvalues = np.full(self.n_coef, np.nan)

        # R-squared
        tss = np.sum((self.y_values - np.mean(self.y_values))**2)
        self.r_squared = 1 - (rss / tss) if tss > 0 else 0.0

        # Adjusted R-squared
        if self.df_residual > 0:
            self.adj_r_squared = 1 - (1 - self.r_squared) * (self.n_obs - 1) / self.df_residual
        else:
            self.adj_r_squared = np.nan

    @property
    def coef(self):
        """Named coefficients (pandas Series)."""
        return pd.Series(self.coefficients, index=self.var_names)

    def conf_int(self, alpha: float = 0.05):
        """
        Confidence intervals for coefficients.

        Parameters
        ----------
        alpha : float
            Significance level (default: 0.05 for 95% CI)

        Returns
        -------
        DataFrame
            Confidence intervals with columns 'lower' and 'upper'
        """
        if self.df_residual > 0:
            t_crit = stats.t.ppf(1 - alpha/2, self.df_residual)
        else:
            t_crit = np.nan
        lower = self.coefficients - t_crit * self.std_errors
        upper = self.coefficients + t_crit * self.std_errors

        return pd.DataFrame({
            'lower': lower,
            'upper': upper
        }, index=self.var_names)

    def summary(self):
        """Print summary of fit results (like R's summary.lm)."""
        print()
        print("="*80)
        print(f"POLYNOMIAL FIT RESULTS (degree {self.degree})")
        print("="*80)
        print()

        print(f"Dependent variable: {self.y_name}")
        print(f"Predictor:          {self.x_name}")
        print(f"Number of observations: {self.n_obs}")
        print(f"Degrees of freedom: {self.df_residual} (residual)")
        print()

        # Coefficients table
        print("Coefficients:")
        print("-"*80)
        print(f"{'Term':<20} {'Estimate':>12} {'Std. Error':>12} {'t value':>10} {'Pr(>|t|)':>12}")
        print("-"*80)

        for i, name in enumerate(self.var_names):
            p = self.pvalues[i]
            if np.isnan(p):
                sig = ''
                p_str = 'NA'
            else:
                if p < 0.001:
                    sig = ' ***'
                elif p < 0.01:
                    sig = ' **'
                elif p < 0.05:
                    sig = ' *'
                elif p < 0.1:
                    sig = ' .'
                else:
                    sig = ''

                p_str = f"{p:.4f}" if p >= 0.0001 else "<.0001"

            print(f"{name:<20} {self.coefficients[i]:>12.4f} {self.std_errors[i]:>12.4f} "
                  f"{self.t_values[i]:>10.3f} {p_str:>12}{sig}")

        print("-"*80)
        print("Signif. codes:  0 '***' 0.001 '**' 0.01 '*' 0.05 '.' 0.1 ' ' 1")
        print()

        print(f"Residual standard error: {self.sigma:.4f} on {self.df_residual} degrees of freedom")
        print(f"Multiple R-squared:      {self.r_squared:.4f}")
        print(f"Adjusted R-squared:      {self.adj_r_squared:.4f}")
        print()
        print(f"Solver: {self.solver.name}")
        print("="*80)
        print()

    def predict(self, x_new) -> np.ndarray:
        """
        Evaluate the fitted polynomial.

        Parameters
        ----------
        x_new : array-like or pandas Series
            Query points

        Returns
        -------
        array
            Predicted values
        """
        return polyval(self.coefficients, np.asarray(x_new, dtype=self.x_values.dtype))

    def __repr__(self):
        return f"PolynomialFit(degree={self.degree}, n={self.n_obs}, R²={self.r_squared:.3f})"


def fit_polynomial(x, y, degree, data=None, **kwargs):
    """
    Fit polynomial curve (convenience function).

    Parameters
    ----------
    x, y : str or array
        Predictor and response
    degree : int
        Polynomial degree
    data : DataFrame, optional
        Dataset
    **kwargs
        Additional arguments passed to PolynomialFit

    Returns
    -------
    PolynomialFit
        Fitted model object

    Examples
    --------
    >>> model = fit_polynomial([0, 1, 2, 3], [1, 2, 5, 10], degree=2, solver='qr')
    >>> model.coef
    """
    return PolynomialFit(x=x, y=y, degree=degree, data=data, **kwargs)
