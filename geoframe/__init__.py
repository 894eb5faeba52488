"""
Geoframe: matrices, composable coordinate transforms and axis directions for
describing coordinate reference systems.
"""

import logging

__version__ = version = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

# exposing the public API of the package
from geoframe.errors import (
    InternalInconsistencyError,
    MatrixIndexError,
    MismatchedDimensionError,
    NonInvertibleMatrixError,
    SizeMismatchError,
)
from geoframe.matrix import Matrix, MatrixBuilder
from geoframe.base_transform import AbstractMathTransform, MathTransform1D, MathTransform2D, TransformKind
from geoframe.transform_factory import (
    concatenate,
    derivative_and_transform,
    get_matrix,
    get_steps,
    identity,
    linear,
)
from geoframe.direction import AxisDirection
from geoframe.direction_along_meridian import DirectionAlongMeridian
from geoframe.coordinate_systems import (
    CoordinateSystem,
    CoordinateSystemAxis,
    angle,
    parse_axis_direction,
    swap_axes,
)
from geoframe.datum import Ellipsoid, PrimeMeridian
from geoframe.standard_definitions import GeodeticObject

__all__ = [
    "InternalInconsistencyError",
    "MatrixIndexError",
    "MismatchedDimensionError",
    "NonInvertibleMatrixError",
    "SizeMismatchError",
    "Matrix",
    "MatrixBuilder",
    "AbstractMathTransform",
    "MathTransform1D",
    "MathTransform2D",
    "TransformKind",
    "concatenate",
    "derivative_and_transform",
    "get_matrix",
    "get_steps",
    "identity",
    "linear",
    "AxisDirection",
    "DirectionAlongMeridian",
    "CoordinateSystem",
    "CoordinateSystemAxis",
    "angle",
    "parse_axis_direction",
    "swap_axes",
    "Ellipsoid",
    "PrimeMeridian",
    "GeodeticObject",
]
