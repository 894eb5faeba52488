# errors.py

from numpy.linalg import LinAlgError


class SizeMismatchError(ValueError):
    """Raised when an array length does not match the expected number of elements."""


class MismatchedDimensionError(ValueError):
    """Raised when matrix sizes or transform dimensions are incompatible."""


class MatrixIndexError(IndexError):
    """Raised when a row or column index lies outside the matrix."""


class NonInvertibleMatrixError(LinAlgError):
    """
    Raised when a matrix is singular or too ill-conditioned to be inverted.

    Attributes:
        matrix: the offending matrix, when known.
    """

    def __init__(self, message: str, matrix=None):
        super().__init__(message)
        self.matrix = matrix


class InternalInconsistencyError(AssertionError):
    """Raised on programmer errors such as an unknown hardcoded authority code."""
