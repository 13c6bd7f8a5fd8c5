"""
Dense matrix container.

Only the operations the fitting engines need: construction, element
access, transpose, multiplication and row extraction.
"""

import operator

import numpy as np

from .exceptions import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidDimensionError,
)


class DenseMatrix:
    """
    Rectangular matrix of a single numeric dtype.

    The shape is fixed at construction. Each instance owns its storage;
    transpose, multiply and row extraction always return fresh matrices.

    Parameters
    ----------
    rows, cols : int
        Matrix shape, both must be positive
    dtype : numpy dtype, default=float64
        Scalar type of the entries

    Examples
    --------
    >>> a = DenseMatrix(2, 3)
    >>> a[0, 1] = 4.0
    >>> (a.T @ a).shape
    (3, 3)
    """

    def __init__(self, rows: int, cols: int, dtype=np.float64):
        rows = operator.index(rows)
        cols = operator.index(cols)
        if rows <= 0 or cols <= 0:
            raise InvalidDimensionError(
                f"Matrix shape must be positive, got ({rows}, {cols})"
            )
        self._data = np.zeros((rows, cols), dtype=dtype)

    @classmethod
    def _wrap(cls, data: np.ndarray) -> "DenseMatrix":
        """Adopt a freshly allocated 2-D array without copying."""
        matrix = cls.__new__(cls)
        matrix._data = data
        return matrix

    @classmethod
    def from_array(cls, values, dtype=None) -> "DenseMatrix":
        """Copy a 2-D array-like into a new matrix."""
        data = np.array(values, dtype=dtype, copy=True)
        if data.ndim != 2 or data.shape[0] == 0 or data.shape[1] == 0:
            raise InvalidDimensionError(
                f"Expected a non-empty 2-D array, got shape {data.shape}"
            )
        return cls._wrap(data)

    @classmethod
    def column(cls, values, dtype=None) -> "DenseMatrix":
        """Build an N x 1 matrix from a 1-D sequence."""
        data = np.array(values, dtype=dtype, copy=True)
        if data.ndim != 1 or data.shape[0] == 0:
            raise InvalidDimensionError(
                f"Expected a non-empty 1-D sequence, got shape {data.shape}"
            )
        return cls._wrap(data.reshape(-1, 1))

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> tuple:
        return self._data.shape

    @property
    def dtype(self):
        return self._data.dtype

    def _check_index(self, index):
        try:
            r, c = index
            r = operator.index(r)
            c = operator.index(c)
        except (TypeError, ValueError):
            raise TypeError(
                f"Matrix index must be a pair of integers, got {index!r}"
            ) from None
        if not (0 <= r < self.rows and 0 <= c < self.cols):
            raise IndexOutOfRangeError(
                f"Index ({r}, {c}) out of range for shape {self.shape}"
            )
        return r, c

    def __getitem__(self, index):
        r, c = self._check_index(index)
        return self._data[r, c]

    def __setitem__(self, index, value):
        r, c = self._check_index(index)
        self._data[r, c] = value

    def transpose(self) -> "DenseMatrix":
        """New matrix with rows and columns swapped."""
        return DenseMatrix._wrap(self._data.T.copy())

    @property
    def T(self) -> "DenseMatrix":
        return self.transpose()

    def row(self, i: int) -> "DenseMatrix":
        """1 x cols copy of row i."""
        i, _ = self._check_index((i, 0))
        return DenseMatrix._wrap(self._data[i:i + 1, :].copy())

    def __matmul__(self, other):
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        return multiply(self, other)

    def copy(self) -> "DenseMatrix":
        return DenseMatrix._wrap(self._data.copy())

    def to_numpy(self) -> np.ndarray:
        """Copy of the entries as a 2-D ndarray."""
        return self._data.copy()

    def __eq__(self, other):
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.all(self._data == other._data))

    __hash__ = None

    def __repr__(self):
        return f"DenseMatrix(rows={self.rows}, cols={self.cols}, dtype={self.dtype})"


def multiply(a: DenseMatrix, b: DenseMatrix) -> DenseMatrix:
    """
    Matrix product a @ b.

    Raises
    ------
    DimensionMismatchError
        If a.cols != b.rows
    """
    if a.cols != b.rows:
        raise DimensionMismatchError(
            f"Cannot multiply {a.shape} by {b.shape}: "
            f"{a.cols} columns vs {b.rows} rows"
        )
    return DenseMatrix._wrap(a._data @ b._data)
