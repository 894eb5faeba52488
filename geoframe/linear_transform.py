# linear_transform.py

import logging
from typing import Optional, Sequence, Tuple

import numpy as np
from numpy import eye as np_eye
from numpy import float64 as np_float64
from numpy import zeros as np_zeros

from geoframe import kernels
from geoframe.base_transform import AbstractMathTransform, MathTransform1D, MathTransform2D, TransformKind
from geoframe.errors import NonInvertibleMatrixError
from geoframe.matrix import Matrix, MatrixBuilder

logger = logging.getLogger(__name__)


class LinearTransform(AbstractMathTransform):
    """
    A transform fully described by a homogeneous matrix of size
    (target_dimensions + 1) x (source_dimensions + 1).
    """

    __slots__ = ()

    def get_matrix(self) -> Matrix:
        raise NotImplementedError

    def is_identity(self) -> bool:
        return self.get_matrix().is_identity()

    def inverse(self) -> "LinearTransform":
        """
        Get the inverse transform.

        Raises:
            NonInvertibleMatrixError: if the matrix can not be inverted.
        """
        return create(self.get_matrix().inverse())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LinearTransform) or self.__class__ is not other.__class__:
            return False
        return self.get_matrix() == other.get_matrix()

    def __hash__(self) -> int:
        return hash(self.get_matrix())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.get_matrix()!r})"


class IdentityTransform(LinearTransform):
    """The identity transform in any number of dimensions."""

    __slots__ = ("_dimension",)

    kind = TransformKind.IDENTITY

    def __init__(self, dimension: int):
        self._dimension = dimension

    @property
    def source_dimensions(self) -> int:
        return self._dimension

    @property
    def target_dimensions(self) -> int:
        return self._dimension

    def _transform_array(self, src: np.ndarray, dst: np.ndarray) -> None:
        if dst is not src:
            dst[...] = src

    def _derivative(self, point: np.ndarray) -> np.ndarray:
        return np_eye(self._dimension, dtype=np_float64)

    def get_matrix(self) -> Matrix:
        return Matrix.identity(self._dimension + 1)

    def is_identity(self) -> bool:
        return True

    def inverse(self) -> "IdentityTransform":
        return self


class IdentityTransform1D(IdentityTransform, MathTransform1D):
    __slots__ = ()

    def __init__(self):
        super().__init__(1)


class IdentityTransform2D(IdentityTransform, MathTransform2D):
    __slots__ = ()

    def __init__(self):
        super().__init__(2)


def identity_transform(dimension: int) -> IdentityTransform:
    if dimension == 1:
        return IdentityTransform1D()
    if dimension == 2:
        return IdentityTransform2D()
    return IdentityTransform(dimension)


class LinearTransform1D(LinearTransform, MathTransform1D):
    """The 1-D transform y = x * scale + offset."""

    __slots__ = ("scale", "offset")

    kind = TransformKind.LINEAR_1D

    def __init__(self, scale: float, offset: float):
        self.scale = float(scale)
        self.offset = float(offset)

    @property
    def source_dimensions(self) -> int:
        return 1

    @property
    def target_dimensions(self) -> int:
        return 1

    def _transform_array(self, src: np.ndarray, dst: np.ndarray) -> None:
        dst[:, 0] = src[:, 0] * self.scale + self.offset

    def _derivative(self, point: np.ndarray) -> np.ndarray:
        return np.array([[self.scale]], dtype=np_float64)

    def get_matrix(self) -> Matrix:
        return Matrix(2, 2, [self.scale, self.offset, 0.0, 1.0])

    def inverse(self) -> LinearTransform:
        if self.scale == 0.0:
            raise NonInvertibleMatrixError("Scale factor is zero", matrix=self.get_matrix())
        return linear_1d(1.0 / self.scale, -self.offset / self.scale)


def linear_1d(scale: float, offset: float) -> LinearTransform:
    if scale == 1.0 and offset == 0.0:
        return IdentityTransform1D()
    return LinearTransform1D(scale, offset)


class AffineTransform2D(LinearTransform, MathTransform2D):
    """
    A 2-D affine transform stored as six coefficients:

        x' = m00*x + m01*y + m02
        y' = m10*x + m11*y + m12
    """

    __slots__ = ("m00", "m10", "m01", "m11", "m02", "m12")

    kind = TransformKind.AFFINE_2D

    def __init__(self, m00: float, m10: float, m01: float, m11: float, m02: float, m12: float):
        self.m00 = float(m00)
        self.m10 = float(m10)
        self.m01 = float(m01)
        self.m11 = float(m11)
        self.m02 = float(m02)
        self.m12 = float(m12)

    @property
    def source_dimensions(self) -> int:
        return 2

    @property
    def target_dimensions(self) -> int:
        return 2

    def _transform_array(self, src: np.ndarray, dst: np.ndarray) -> None:
        x = src[:, 0].copy()
        y = src[:, 1].copy()
        dst[:, 0] = self.m00 * x + self.m01 * y + self.m02
        dst[:, 1] = self.m10 * x + self.m11 * y + self.m12

    def _derivative(self, point: np.ndarray) -> np.ndarray:
        return np.array([[self.m00, self.m01],
                         [self.m10, self.m11]], dtype=np_float64)

    def get_matrix(self) -> Matrix:
        return Matrix(3, 3, [self.m00, self.m01, self.m02,
                             self.m10, self.m11, self.m12,
                             0.0, 0.0, 1.0])

    @property
    def determinant(self) -> float:
        return self.m00 * self.m11 - self.m01 * self.m10


class CopyTransform(LinearTransform):
    """
    Copies, reorders or drops ordinates without arithmetic. Target ordinate
    `i` is source ordinate `indices[i]`.
    """

    __slots__ = ("_source_dimensions", "indices")

    kind = TransformKind.COPY

    def __init__(self, source_dimensions: int, indices: Sequence[int]):
        self._source_dimensions = source_dimensions
        self.indices: Tuple[int, ...] = tuple(int(i) for i in indices)

    @classmethod
    def create(cls, matrix: Matrix) -> Optional["CopyTransform"]:
        """
        Create a copy transform if the matrix only selects ordinates.

        Returns:
            None if the last row is not [0, ..., 0, 1], if there is a
            translation term, or if any row does not contain exactly one
            coefficient equal to 1 with zeros elsewhere.
        """
        m = matrix._data
        tgt_dim = m.shape[0] - 1
        src_dim = m.shape[1] - 1
        if m[tgt_dim, src_dim] != 1.0 or m[tgt_dim, :src_dim].any():
            return None
        indices = []
        for row in m[:tgt_dim]:
            if row[src_dim] != 0.0:
                return None
            nonzero = np.flatnonzero(row[:src_dim])
            if len(nonzero) != 1 or row[nonzero[0]] != 1.0:
                return None
            indices.append(int(nonzero[0]))
        return cls(src_dim, indices)

    @property
    def source_dimensions(self) -> int:
        return self._source_dimensions

    @property
    def target_dimensions(self) -> int:
        return len(self.indices)

    def _transform_array(self, src: np.ndarray, dst: np.ndarray) -> None:
        dst[...] = src[:, list(self.indices)]

    def _derivative(self, point: np.ndarray) -> np.ndarray:
        out = np_zeros((len(self.indices), self._source_dimensions), dtype=np_float64)
        out[np.arange(len(self.indices)), list(self.indices)] = 1.0
        return out

    def get_matrix(self) -> Matrix:
        m = np_zeros((len(self.indices) + 1, self._source_dimensions + 1), dtype=np_float64)
        m[:-1, :-1] = self._derivative(None)
        m[-1, -1] = 1.0
        return Matrix._from_unchecked(m)

    def is_identity(self) -> bool:
        return self.indices == tuple(range(self._source_dimensions))

    def inverse(self) -> LinearTransform:
        """
        Get the inverse permutation.

        Raises:
            NonInvertibleMatrixError: if some source ordinates are dropped or duplicated.
        """
        if sorted(self.indices) != list(range(self._source_dimensions)):
            raise NonInvertibleMatrixError(
                f"Ordinate selection {self.indices} is not a permutation", matrix=self.get_matrix())
        inverse = [0] * self._source_dimensions
        for target, source in enumerate(self.indices):
            inverse[source] = target
        return CopyTransform(self._source_dimensions, inverse)


class ProjectiveTransform(LinearTransform):
    """A general homogeneous transform, including non-affine (perspective) ones."""

    __slots__ = ("_matrix",)

    kind = TransformKind.PROJECTIVE

    def __init__(self, matrix: Matrix):
        self._matrix = matrix if isinstance(matrix, Matrix) else Matrix.from_array(matrix)

    @property
    def source_dimensions(self) -> int:
        return self._matrix.num_col - 1

    @property
    def target_dimensions(self) -> int:
        return self._matrix.num_row - 1

    def _transform_array(self, src: np.ndarray, dst: np.ndarray) -> None:
        kernels.projective_transform(self._matrix._data, src, dst)

    def _derivative(self, point: np.ndarray) -> np.ndarray:
        return kernels.projective_derivative(self._matrix._data, point)

    def get_matrix(self) -> Matrix:
        return self._matrix


class ProjectiveTransform2D(ProjectiveTransform, MathTransform2D):
    __slots__ = ()


def create(matrix: Matrix) -> LinearTransform:
    """
    Create the cheapest linear transform for the given homogeneous matrix.

    Args:
        matrix: a (target_dimensions + 1) x (source_dimensions + 1) matrix.

    Returns:
        An identity, 1-D linear, 2-D affine, copy or projective transform.
    """
    if isinstance(matrix, MatrixBuilder):
        matrix = matrix.build()
    elif not isinstance(matrix, Matrix):
        matrix = Matrix.from_array(matrix)
    if matrix.num_row < 2 or matrix.num_col < 2:
        raise ValueError(
            f"A homogeneous matrix needs at least 2 rows and 2 columns, got {matrix.num_row}x{matrix.num_col}")
    src_dim = matrix.num_col - 1
    tgt_dim = matrix.num_row - 1
    if src_dim == tgt_dim:
        if matrix.is_identity():
            return identity_transform(src_dim)
        if matrix.is_affine():
            if src_dim == 1:
                return LinearTransform1D(matrix.get_element(0, 0), matrix.get_element(0, 1))
            if src_dim == 2:
                m = matrix._data
                return AffineTransform2D(m[0, 0], m[1, 0], m[0, 1], m[1, 1], m[0, 2], m[1, 2])
        elif src_dim == 2:
            logger.debug("Non-affine 3x3 matrix, using a 2-D projective transform")
            return ProjectiveTransform2D(matrix)
    candidate = CopyTransform.create(matrix)
    if candidate is not None:
        logger.debug("Matrix %dx%d reduces to ordinate copy %s",
                     matrix.num_row, matrix.num_col, candidate.indices)
        return candidate
    return ProjectiveTransform(matrix)
