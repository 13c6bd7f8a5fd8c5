"""
Utility functions.
"""

import numpy as np

from .exceptions import LengthMismatchError


def check_vector(y, name='y', dtype=np.float64):
    """Validate vector input."""
    y = np.asarray(y, dtype=dtype)
    if y.ndim != 1:
        raise ValueError(f"{name} must be 1-dimensional")
    if not np.all(np.isfinite(y)):
        raise ValueError(f"{name} contains NaN or Inf")
    return y


def check_same_length(**vectors):
    """Raise LengthMismatchError unless all named sequences have equal length."""
    lengths = {name: len(values) for name, values in vectors.items()}
    if len(set(lengths.values())) > 1:
        detail = ", ".join(f"len({name})={n}" for name, n in lengths.items())
        raise LengthMismatchError(f"Sample sequences differ in length: {detail}")


def check_samples(dtype=np.float64, **vectors):
    """
    Validate parallel sample sequences of one fit call.

    Lengths are compared before any conversion so a mismatch is reported
    without touching the data.
    """
    check_same_length(**vectors)
    return tuple(check_vector(values, name=name, dtype=dtype)
                 for name, values in vectors.items())
