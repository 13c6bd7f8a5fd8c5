"""
Detection of aliased basis columns.

A column is aliased when it lies in the span of the columns before it.
Scanning in basis order keeps the lowest-order terms, like R's limited
column pivoting in lm().
"""

import numpy as np
from typing import Optional


def aliased_columns(design: np.ndarray, tol: Optional[float] = None) -> np.ndarray:
    """
    Boolean mask of columns that add no rank to the preceding ones.

    Parameters
    ----------
    design : ndarray, shape (n, p)
        Design matrix
    tol : float, optional
        Singular value threshold passed to numpy.linalg.matrix_rank
        (default: numpy's S.max() * max(M, N) * eps)

    Returns
    -------
    aliased : ndarray of bool, shape (p,)
    """
    design = np.asarray(design, dtype=np.float64)
    p = design.shape[1]
    aliased = np.zeros(p, dtype=bool)
    kept = []
    rank = 0

    for j in range(p):
        trial = design[:, kept + [j]]
        trial_rank = np.linalg.matrix_rank(trial, tol=tol)
        if trial_rank > rank:
            kept.append(j)
            rank = trial_rank
        else:
            aliased[j] = True

    return aliased
