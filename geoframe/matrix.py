# matrix.py

import logging
from typing import Iterable, Optional, Tuple, Union

import numpy as np
from numpy import asarray as np_asarray
from numpy import array2string as np_array2string
from numpy import ascontiguousarray as np_ascontiguousarray
from numpy import eye as np_eye
from numpy import float64 as np_float64
from numpy import isfinite as np_isfinite
from numpy import zeros as np_zeros
from numpy.linalg import cond as np_cond
from numpy.linalg import lstsq as np_lstsq
from numpy.linalg import solve as np_solve
from numpy.linalg import LinAlgError

from geoframe import kernels
from geoframe.constants import DEFAULT_TOLERANCE, SINGULARITY_THRESHOLD
from geoframe.errors import (
    MatrixIndexError,
    MismatchedDimensionError,
    NonInvertibleMatrixError,
    SizeMismatchError,
)

logger = logging.getLogger(__name__)

MatrixLike = Union["_MatrixBase", np.ndarray]


def _as_array(value: MatrixLike) -> np.ndarray:
    if isinstance(value, _MatrixBase):
        return value._data
    array = np_asarray(value, dtype=np_float64)
    if array.ndim != 2:
        raise ValueError(f"Expected a 2-D matrix, got shape {array.shape}")
    return array


class _MatrixBase:
    """
    Read-only operations shared by the published `Matrix` and the mutable
    `MatrixBuilder`. Elements are stored in a C-contiguous float64 array.
    """

    __slots__ = ("_data",)

    def __init__(self, num_row: int, num_col: int, elements: Optional[Iterable[float]] = None):
        """
        Create a matrix of the given size.

        Args:
            num_row: number of rows, strictly positive.
            num_col: number of columns, strictly positive.
            elements: flat row-major values. If None, ones are put on the main
                diagonal and zeros elsewhere.

        Raises:
            SizeMismatchError: if `elements` does not hold `num_row * num_col` values.
        """
        if num_row <= 0 or num_col <= 0:
            raise ValueError(
                f"Matrix size must be strictly positive, got {num_row}x{num_col}")
        if elements is None:
            data = np_eye(num_row, num_col, dtype=np_float64)
        else:
            flat = np_asarray(elements, dtype=np_float64).ravel()
            if flat.size != num_row * num_col:
                raise SizeMismatchError(
                    f"Expected {num_row * num_col} elements for a {num_row}x{num_col} matrix, got {flat.size}")
            data = flat.reshape(num_row, num_col).copy()
        self._data = data
        self._seal()

    def _seal(self) -> None:
        pass

    @classmethod
    def _from_unchecked(cls, data: np.ndarray):
        """Wrap an array owned by the caller without validating it."""
        instance = object.__new__(cls)
        instance._data = np_ascontiguousarray(data, dtype=np_float64)
        instance._seal()
        return instance

    @classmethod
    def identity(cls, size: int):
        """
        Create a square identity matrix.

        Args:
            size: number of rows and columns.

        Returns:
            A new matrix with ones on the diagonal.
        """
        return cls(size, size)

    @classmethod
    def zeros(cls, num_row: int, num_col: int):
        """Create a matrix filled with zeros."""
        if num_row <= 0 or num_col <= 0:
            raise ValueError(
                f"Matrix size must be strictly positive, got {num_row}x{num_col}")
        return cls._from_unchecked(np_zeros((num_row, num_col), dtype=np_float64))

    @classmethod
    def from_array(cls, array: Union[np.ndarray, Iterable[Iterable[float]]]):
        """
        Create a matrix from a 2-D array. The values are copied.

        Args:
            array: 2-D array-like of numbers.

        Returns:
            A new matrix of the same shape.
        """
        data = np_asarray(array, dtype=np_float64)
        if data.ndim != 2 or data.size == 0:
            raise ValueError(f"Expected a non-empty 2-D array, got shape {data.shape}")
        return cls._from_unchecked(data.copy())

    @property
    def num_row(self) -> int:
        return self._data.shape[0]

    @property
    def num_col(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self._data.shape

    def _check_index(self, row: int, col: int) -> None:
        if not (0 <= row < self.num_row and 0 <= col < self.num_col):
            raise MatrixIndexError(
                f"Indices ({row}, {col}) are out of bounds for a {self.num_row}x{self.num_col} matrix")

    def get_element(self, row: int, col: int) -> float:
        """
        Get a single element.

        Raises:
            MatrixIndexError: if the row or column is outside the matrix.
        """
        self._check_index(row, col)
        return float(self._data[row, col])

    def get_elements(self) -> np.ndarray:
        """
        Get a copy of all elements in row-major order.

        Returns:
            A 1-D array of length `num_row * num_col`.
        """
        return self._data.ravel().copy()

    def to_array(self) -> np.ndarray:
        """Get a writable copy of the elements as a 2-D array."""
        return self._data.copy()

    def is_affine(self) -> bool:
        """True if the matrix is square and its last row is [0, ..., 0, 1]."""
        rows, cols = self._data.shape
        if rows != cols:
            return False
        last = self._data[-1]
        return bool(last[-1] == 1.0 and not last[:-1].any())

    def is_identity(self) -> bool:
        """True if the matrix is square with ones on the diagonal and zeros elsewhere."""
        rows, cols = self._data.shape
        if rows != cols:
            return False
        return bool((self._data == np_eye(rows)).all())

    def multiply(self, other: MatrixLike) -> "Matrix":
        """
        Compute `self × other`.

        Raises:
            MismatchedDimensionError: if the number of columns of this matrix
                is not the number of rows of `other`.
        """
        b = _as_array(other)
        if self.num_col != b.shape[0]:
            raise MismatchedDimensionError(
                f"Cannot multiply a {self.num_row}x{self.num_col} matrix by a {b.shape[0]}x{b.shape[1]} matrix")
        return Matrix._from_unchecked(self._data @ b)

    def solve(self, other: MatrixLike) -> "Matrix":
        """
        Find `X` such that `self × X = other`.

        Square systems are solved exactly; systems with more rows than
        columns are solved in the least-squares sense.

        Raises:
            MismatchedDimensionError: if `other` does not have as many rows as this matrix.
            NonInvertibleMatrixError: if this matrix is singular or its condition
                number exceeds `SINGULARITY_THRESHOLD`.
        """
        a = self._data
        b = _as_array(other)
        if b.shape[0] != a.shape[0]:
            raise MismatchedDimensionError(
                f"Cannot solve a {a.shape[0]}x{a.shape[1]} system for a {b.shape[0]}x{b.shape[1]} matrix")
        rows, cols = a.shape
        if rows < cols or not np_isfinite(a).all():
            self._fail_inverse("matrix has no unique solution")
        condition = np_cond(a)
        if not np_isfinite(condition) or condition > SINGULARITY_THRESHOLD:
            self._fail_inverse(f"condition number is {condition:g}")
        try:
            if rows == cols:
                x = np_solve(a, b)
            else:
                x = np_lstsq(a, b, rcond=None)[0]
        except LinAlgError as e:
            raise NonInvertibleMatrixError(str(e), matrix=self._frozen()) from e
        return Matrix._from_unchecked(x)

    def inverse(self) -> "Matrix":
        """
        Compute the inverse of this matrix, `solve(identity(num_row))`.

        Raises:
            NonInvertibleMatrixError: if the matrix is singular.
        """
        return self.solve(np_eye(self.num_row, dtype=np_float64))

    def _fail_inverse(self, reason: str) -> None:
        logger.debug("Non-invertible %dx%d matrix: %s", self.num_row, self.num_col, reason)
        raise NonInvertibleMatrixError(
            f"Non-invertible {self.num_row}x{self.num_col} matrix: {reason}", matrix=self._frozen())

    def _frozen(self) -> "Matrix":
        return Matrix._from_unchecked(self._data.copy())

    def equals(self, other: MatrixLike, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        """
        Compare element-wise with a tolerance.

        NaN equals NaN, infinities of the same sign are equal and finite
        values are equal if `|a - b| <= tolerance`. Matrices of different
        shapes are never equal.
        """
        b = _as_array(other)
        if b.shape != self._data.shape:
            return False
        return bool(kernels.equals_with_tolerance(self._data, b, float(tolerance)))

    def __matmul__(self, other: MatrixLike) -> "Matrix":
        if isinstance(other, (_MatrixBase, np.ndarray)):
            return self.multiply(other)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _MatrixBase):
            return NotImplemented
        return self.equals(other, 0.0)

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        mat = np_array2string(self._data, precision=6, separator=', ')
        return f"{cls}(\n{mat}\n)"

    def __str__(self) -> str:
        return self.__repr__()

    def __copy__(self):
        return self.__class__._from_unchecked(self._data.copy())

    def __deepcopy__(self, memo):
        return self.__copy__()

    def __reduce__(self):
        return (self.__class__.from_array, (self._data.copy(),))


class Matrix(_MatrixBase):
    """
    A dense matrix of float64 values, immutable once created.

    Matrices are shared freely between transforms and threads. Use
    `to_builder()` for a mutable copy.
    """

    __slots__ = ()

    def _seal(self) -> None:
        self._data.flags.writeable = False

    def to_builder(self) -> "MatrixBuilder":
        """Get a mutable copy of this matrix."""
        return MatrixBuilder._from_unchecked(self._data.copy())

    def __hash__(self) -> int:
        # adding zero folds -0.0 into 0.0, which compare equal
        return hash((self._data.shape, (self._data + 0.0).tobytes()))


class MatrixBuilder(_MatrixBase):
    """
    A mutable matrix used while assembling coefficients, before they are
    published as a `Matrix`. Builders are not thread-safe.
    """

    __slots__ = ()

    __hash__ = None

    def set_element(self, row: int, col: int, value: float) -> None:
        """
        Set a single element.

        Raises:
            MatrixIndexError: if the row or column is outside the matrix.
        """
        self._check_index(row, col)
        self._data[row, col] = value

    def set_elements(self, elements: Iterable[float]) -> None:
        """
        Replace all elements from a flat row-major sequence.

        Raises:
            SizeMismatchError: if the sequence length is not `num_row * num_col`.
        """
        flat = np_asarray(elements, dtype=np_float64).ravel()
        if flat.size != self._data.size:
            raise SizeMismatchError(
                f"Expected {self._data.size} elements, got {flat.size}")
        self._data[...] = flat.reshape(self._data.shape)

    def transpose(self) -> None:
        """Transpose in place. A non-square builder swaps its number of rows and columns."""
        if self.num_row == self.num_col:
            self._data[...] = self._data.T.copy()
        else:
            self._data = np_ascontiguousarray(self._data.T)

    def normalize_columns(self) -> None:
        """
        Divide each column by its Euclidean norm so that columns become unit
        vectors. Columns whose norm is zero are left unchanged.
        """
        kernels.normalize_columns(self._data)

    def build(self) -> Matrix:
        """Publish a frozen copy of the current state."""
        return Matrix._from_unchecked(self._data.copy())
