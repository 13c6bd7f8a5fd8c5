"""
Conditioning check for elimination-based solvers.

Uses the pivots already produced by the factorisation, so no extra
decomposition is needed.
"""

import warnings
import numpy as np

from ..exceptions import IllConditionedWarning


# Smallest acceptable |pivot| relative to the largest one
ILL_CONDITIONED_PIVOT_RATIO = 1e-12


def pivot_ratio(pivots: np.ndarray) -> float:
    """Ratio of smallest to largest pivot magnitude (1.0 is ideal)."""
    magnitudes = np.abs(np.asarray(pivots, dtype=np.float64))
    largest = magnitudes.max()
    if largest == 0:
        return 0.0
    return float(magnitudes.min() / largest)


def check_pivots(pivots: np.ndarray, threshold: float = ILL_CONDITIONED_PIVOT_RATIO,
                 stacklevel: int = 2) -> float:
    """
    Warn if the pivots indicate a nearly singular system.

    `stacklevel` is passed to warnings.warn, counted from this function.

    Warns
    -----
    IllConditionedWarning
        If the pivot ratio falls below `threshold`
    """
    ratio = pivot_ratio(pivots)
    if ratio < threshold:
        warnings.warn(
            f"Nearly singular system (pivot ratio {ratio:.3e} < {threshold:.0e}). "
            f"Results may be inaccurate; consider solver='qr'.",
            IllConditionedWarning,
            stacklevel=stacklevel,
        )
    return ratio
