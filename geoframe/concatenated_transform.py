# concatenated_transform.py

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np
from numpy import asarray as np_asarray
from numpy import eye as np_eye
from numpy import float64 as np_float64

from geoframe.base_transform import AbstractMathTransform, MathTransform1D, MathTransform2D, TransformKind
from geoframe.errors import MismatchedDimensionError
from geoframe.matrix import Matrix

logger = logging.getLogger(__name__)


def _steps_of(transform) -> List:
    if getattr(transform, "kind", None) is TransformKind.CONCATENATED:
        return list(transform.steps)
    return [transform]


class ConcatenatedTransform(AbstractMathTransform):
    """
    A chain of transforms applied in order: the output of step `i` is the
    input of step `i + 1`. The steps never contain another concatenation.
    """

    __slots__ = ("steps",)

    kind = TransformKind.CONCATENATED

    def __init__(self, steps: Sequence):
        self.steps: Tuple = tuple(steps)

    @staticmethod
    def create(tr1, tr2) -> "ConcatenatedTransform":
        """
        Concatenate two transforms, splicing the steps of any concatenation.

        Raises:
            MismatchedDimensionError: if the target dimension of `tr1` is not the
                source dimension of `tr2`.
        """
        if tr1.target_dimensions != tr2.source_dimensions:
            raise MismatchedDimensionError(
                f"Cannot concatenate a transform with {tr1.target_dimensions} target dimensions "
                f"to a transform with {tr2.source_dimensions} source dimensions")
        return _new_concatenation(_steps_of(tr1) + _steps_of(tr2))

    @property
    def source_dimensions(self) -> int:
        return self.steps[0].source_dimensions

    @property
    def target_dimensions(self) -> int:
        return self.steps[-1].target_dimensions

    def _transform_array(self, src: np.ndarray, dst: np.ndarray) -> None:
        current = src
        for step in self.steps:
            current = step.transform(current)
        dst[...] = current

    def derivative(self, point) -> Matrix:
        return self.transform_and_derivative(point)[1]

    def transform_and_derivative(self, point) -> Tuple[np.ndarray, Matrix]:
        """
        Walk the chain once, applying the chain rule. Each step's derivative is
        taken at that step's input before the point is moved forward.
        """
        current = self._check_point(point)
        jacobian = np_eye(self.source_dimensions, dtype=np_float64)
        for step in self.steps:
            if isinstance(step, AbstractMathTransform):
                current, d = step.transform_and_derivative(current)
            else:
                d = step.derivative(current)
                current = np_asarray(step.transform(current), dtype=np_float64)
            jacobian = np_asarray(d._data if isinstance(d, Matrix) else d, dtype=np_float64) @ jacobian
        return current, Matrix._from_unchecked(jacobian)

    def get_matrix(self) -> Optional[Matrix]:
        """Product of the step matrices, or None if any step is not linear."""
        product = None
        for step in self.steps:
            m = step.get_matrix() if isinstance(step, AbstractMathTransform) else None
            if m is None:
                return None
            product = m if product is None else m.multiply(product)
        return product

    def is_identity(self) -> bool:
        return all(isinstance(s, AbstractMathTransform) and s.is_identity() for s in self.steps)

    def inverse(self) -> "ConcatenatedTransform":
        """
        Get the chain of step inverses in reverse order.

        Raises:
            NonInvertibleMatrixError: if any step can not be inverted.
        """
        return _new_concatenation([step.inverse() for step in reversed(self.steps)])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConcatenatedTransform):
            return False
        return self.steps == other.steps

    def __hash__(self) -> int:
        return hash(self.steps)

    def __repr__(self) -> str:
        inner = ",\n  ".join(repr(s) for s in self.steps)
        return f"{self.__class__.__name__}(\n  {inner}\n)"


class ConcatenatedTransform1D(ConcatenatedTransform, MathTransform1D):
    __slots__ = ()


class ConcatenatedTransform2D(ConcatenatedTransform, MathTransform2D):
    __slots__ = ()


def _new_concatenation(steps: List) -> ConcatenatedTransform:
    src_dim = steps[0].source_dimensions
    tgt_dim = steps[-1].target_dimensions
    if src_dim == tgt_dim == 1:
        cls = ConcatenatedTransform1D
    elif src_dim == tgt_dim == 2:
        cls = ConcatenatedTransform2D
    else:
        cls = ConcatenatedTransform
    logger.debug("Concatenated %d steps into a %dD -> %dD chain", len(steps), src_dim, tgt_dim)
    return cls(steps)
