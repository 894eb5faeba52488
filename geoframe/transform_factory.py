# transform_factory.py

import logging
from typing import List, Optional, Tuple, Union

import numpy as np
from numpy import asarray as np_asarray
from numpy import float64 as np_float64

from geoframe import linear_transform
from geoframe.base_transform import AbstractMathTransform, TransformKind
from geoframe.concatenated_transform import ConcatenatedTransform
from geoframe.linear_transform import LinearTransform
from geoframe.matrix import Matrix, MatrixBuilder

logger = logging.getLogger(__name__)


def identity(dimension: int) -> LinearTransform:
    """
    Create an identity transform.

    Args:
        dimension: number of source and target dimensions, at least 1.

    Returns:
        An identity transform. For 1 and 2 dimensions the result also offers
        the 1-D or 2-D specific operations.
    """
    if dimension < 1:
        raise ValueError(f"Dimension must be strictly positive, got {dimension}")
    return linear_transform.identity_transform(dimension)


def linear(scale_or_matrix: Union[float, Matrix, MatrixBuilder, np.ndarray], offset: Optional[float] = None) -> LinearTransform:
    """
    Create a linear transform.

    Called as `linear(scale, offset)`, creates the 1-D transform
    `y = x * scale + offset`. Called as `linear(matrix)`, creates the
    cheapest transform able to represent the homogeneous matrix: identity,
    1-D linear, 2-D affine, ordinate copy or projective.

    Args:
        scale_or_matrix: the scale factor, or a homogeneous matrix of size
            (target_dimensions + 1) x (source_dimensions + 1).
        offset: the offset, required with a scale factor.

    Returns:
        A linear transform.
    """
    if offset is not None:
        return linear_transform.linear_1d(float(scale_or_matrix), float(offset))
    if isinstance(scale_or_matrix, (int, float)):
        raise TypeError("linear(scale, offset) requires an offset")
    transform = linear_transform.create(scale_or_matrix)
    logger.debug("linear() created %s", transform.__class__.__name__)
    return transform


def concatenate(tr1, tr2, tr3=None):
    """
    Concatenate two or three transforms.

    The steps of any argument which is itself a concatenation are spliced
    into the result, so `get_steps` always returns a flat sequence.
    `concatenate(a, b, c)` is `concatenate(concatenate(a, b), c)`.

    Raises:
        MismatchedDimensionError: if the target dimension of one transform is
            not the source dimension of the next.
    """
    if tr1 is None or tr2 is None:
        raise ValueError("Transforms to concatenate must not be None")
    result = ConcatenatedTransform.create(tr1, tr2)
    if tr3 is not None:
        result = ConcatenatedTransform.create(result, tr3)
    return result


def get_steps(transform) -> List:
    """
    Get the elementary steps of a transform.

    Returns:
        An empty list for None, the flattened steps of a concatenation, or a
        single element list otherwise.
    """
    if transform is None:
        return []
    if getattr(transform, "kind", None) is TransformKind.CONCATENATED:
        return list(transform.steps)
    return [transform]


def get_matrix(transform) -> Optional[Matrix]:
    """
    Get the homogeneous matrix of a linear transform.

    Objects which are not geoframe transforms but expose a 2-D `matrix`
    array, such as homogeneous frame transforms, are accepted too.

    Returns:
        The matrix, or None if the transform is not linear.
    """
    if isinstance(transform, AbstractMathTransform):
        return transform.get_matrix()
    external = getattr(transform, "matrix", None)
    if isinstance(external, np.ndarray) and external.ndim == 2:
        return Matrix.from_array(external)
    return None


def derivative_and_transform(transform, src: Union[np.ndarray, List[float]], dst: Optional[np.ndarray] = None) -> Tuple[Matrix, np.ndarray]:
    """
    Compute the derivative at a point and transform that point.

    Geoframe transforms compute both in a single pass. Other objects are
    asked for the derivative first, since writing the transformed point may
    overwrite `src` when `dst` is the same buffer.

    Args:
        transform: the transform to apply.
        src: the source point.
        dst: optional buffer receiving the transformed point. May be `src`.

    Returns:
        A (derivative matrix, transformed point) tuple.
    """
    if isinstance(transform, AbstractMathTransform):
        point, derivative = transform.transform_and_derivative(src)
        if dst is not None:
            dst[...] = point
            point = dst
        return derivative, point
    derivative = transform.derivative(src)
    if not isinstance(derivative, Matrix):
        derivative = Matrix.from_array(derivative)
    if dst is not None:
        transform.transform(src, dst)
        return derivative, dst
    return derivative, np_asarray(transform.transform(src), dtype=np_float64)
