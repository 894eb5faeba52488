# base_transform.py

from enum import Enum
from typing import ClassVar, Optional, Tuple, Union, Iterable

import numpy as np
from numpy import asarray as np_asarray
from numpy import empty as np_empty
from numpy import float64 as np_float64

from geoframe.errors import MismatchedDimensionError
from geoframe.matrix import Matrix


class TransformKind(Enum):
    IDENTITY = 0
    LINEAR_1D = 1
    AFFINE_2D = 2
    COPY = 3
    PROJECTIVE = 4
    CONCATENATED = 5


class AbstractMathTransform:
    """
    A function from `source_dimensions`-D points to `target_dimensions`-D points.

    Concrete variants only need to provide the dimensions, `_transform_array`
    and `_derivative`. Instances are immutable once created and may be shared
    between threads.
    """

    __slots__ = ()

    kind: ClassVar[TransformKind]

    @property
    def source_dimensions(self) -> int:
        raise NotImplementedError

    @property
    def target_dimensions(self) -> int:
        raise NotImplementedError

    def _transform_array(self, src: np.ndarray, dst: np.ndarray) -> None:
        """Transform every row of `src` into `dst`. `dst` may be `src`."""
        raise NotImplementedError

    def _derivative(self, point: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def _check_point(self, point: Union[np.ndarray, Iterable[float]]) -> np.ndarray:
        point = np_asarray(point, dtype=np_float64)
        if point.shape != (self.source_dimensions,):
            raise MismatchedDimensionError(
                f"Expected a point of dimension {self.source_dimensions}, got shape {point.shape}")
        return point

    def transform(self, points: Union[np.ndarray, Iterable[float]], dst: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Transform a single point or an array of points.

        Args:
            points: a point of shape (source_dimensions,) or an array of
                shape (n, source_dimensions).
            dst: optional output array of shape (target_dimensions,) or
                (n, target_dimensions). May be the same array as `points`.

        Returns:
            The transformed coordinates, `dst` if it was given.

        Raises:
            MismatchedDimensionError: if an array does not have the expected dimension.
            TypeError: if `dst` is not a numpy array.
        """
        src = np_asarray(points, dtype=np_float64)
        single = src.ndim == 1
        src2 = src.reshape(1, -1) if single else src
        if src2.ndim != 2 or src2.shape[1] != self.source_dimensions:
            raise MismatchedDimensionError(
                f"Expected points of dimension {self.source_dimensions}, got shape {src.shape}")
        expected = (src2.shape[0], self.target_dimensions)
        if dst is None:
            out = np_empty(expected, dtype=np_float64)
        elif not isinstance(dst, np.ndarray):
            raise TypeError(f"Destination must be a numpy array, got {type(dst).__name__}")
        else:
            out = dst.reshape(1, -1) if dst.ndim == 1 else dst
            if out.shape != expected:
                raise MismatchedDimensionError(
                    f"Expected a destination of shape {expected}, got {dst.shape}")
        self._transform_array(src2, out)
        if dst is not None:
            return dst
        return out[0] if single else out

    def derivative(self, point: Union[np.ndarray, Iterable[float]]) -> Matrix:
        """
        Get the Jacobian matrix at the given point.

        Returns:
            A matrix of shape (target_dimensions, source_dimensions).
        """
        return Matrix._from_unchecked(self._derivative(self._check_point(point)))

    def transform_and_derivative(self, point: Union[np.ndarray, Iterable[float]]) -> Tuple[np.ndarray, Matrix]:
        """
        Transform one point and compute the Jacobian at that point in a single pass.

        Returns:
            A (transformed point, derivative matrix) tuple.
        """
        point = self._check_point(point)
        derivative = Matrix._from_unchecked(self._derivative(point))
        return self.transform(point), derivative

    def get_matrix(self) -> Optional[Matrix]:
        """Get the homogeneous coefficient matrix, or None if this transform is not linear."""
        return None

    def is_identity(self) -> bool:
        return False

    def inverse(self) -> "AbstractMathTransform":
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.source_dimensions}D -> {self.target_dimensions}D)"


class MathTransform1D:
    """Operations available on transforms from 1-D to 1-D."""

    __slots__ = ()

    def transform_value(self, value: float) -> float:
        """Transform a single ordinate value."""
        return float(self.transform(np.array([value], dtype=np_float64))[0])

    def derivative_value(self, value: float) -> float:
        """Get the derivative at the given ordinate value."""
        return self.derivative(np.array([value], dtype=np_float64)).get_element(0, 0)


class MathTransform2D:
    """Operations available on transforms from 2-D to 2-D."""

    __slots__ = ()

    def transform_xy(self, x: float, y: float) -> Tuple[float, float]:
        """Transform a single (x, y) coordinate."""
        out = self.transform(np.array([x, y], dtype=np_float64))
        return float(out[0]), float(out[1])

    def derivative_xy(self, x: float, y: float) -> Matrix:
        """Get the 2x2 Jacobian at the given (x, y) coordinate."""
        return self.derivative(np.array([x, y], dtype=np_float64))
