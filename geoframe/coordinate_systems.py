# coordinate_systems.py

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from geoframe import direction as directions
from geoframe.constants import COMPASS_DIRECTION_COUNT
from geoframe.direction import AxisDirection
from geoframe.direction_along_meridian import DirectionAlongMeridian
from geoframe.matrix import Matrix, MatrixBuilder


@dataclass(frozen=True, slots=True)
class CoordinateSystemAxis:
    """
    One axis of a coordinate system.

    Attributes:
        name: axis name, e.g. "Geodetic latitude".
        abbreviation: short label, e.g. "φ".
        direction: the axis direction.
        unit: unit symbol of the axis values.
    """
    name: str
    abbreviation: str
    direction: AxisDirection
    unit: str = "m"


@dataclass(frozen=True, slots=True)
class CoordinateSystem:
    """An ordered, non-empty sequence of axes."""
    name: str
    axes: Tuple[CoordinateSystemAxis, ...]

    def __post_init__(self):
        object.__setattr__(self, "axes", tuple(self.axes))
        if not self.axes:
            raise ValueError("A coordinate system needs at least one axis")

    @property
    def dimension(self) -> int:
        return len(self.axes)

    def get_axis(self, index: int) -> CoordinateSystemAxis:
        return self.axes[index]


def parse_axis_direction(name: str) -> AxisDirection:
    """
    Get the axis direction for a name such as "north-east", "NE" or
    "South along 90 deg East".

    Raises:
        ValueError: if the name is not a known direction.
    """
    name = name.strip()
    # before the lenient lookup, which ignores the decimal point of meridians
    meridian = DirectionAlongMeridian.parse(name)
    if meridian is not None:
        return meridian.direction
    candidate = directions.value_of(name)
    if candidate is not None:
        return candidate
    raise ValueError(f"Unknown axis direction: {name!r}")


def compass_angle(source: AxisDirection, target: AxisDirection) -> Optional[int]:
    """
    Number of compass steps of 22.5° from `target` to `source`.

    Returns:
        A value in [-8, 8], or None if either direction is not a compass direction.
    """
    base = AxisDirection.NORTH.ordinal
    src = source.ordinal - base
    tgt = target.ordinal - base
    if not (0 <= src < COMPASS_DIRECTION_COUNT and 0 <= tgt < COMPASS_DIRECTION_COUNT):
        return None
    steps = src - tgt
    half = COMPASS_DIRECTION_COUNT // 2
    if steps < -half:
        steps += COMPASS_DIRECTION_COUNT
    elif steps > half:
        steps -= COMPASS_DIRECTION_COUNT
    return steps


def angle(source: AxisDirection, target: AxisDirection) -> float:
    """
    Angle in degrees from `target` to `source`, positive when right-handed.

    Works for compass directions and for directions along the same kind of
    meridian. Returns NaN otherwise.
    """
    steps = compass_angle(source, target)
    if steps is not None:
        return steps * (360.0 / COMPASS_DIRECTION_COUNT)
    src = DirectionAlongMeridian.from_direction(source)
    if src is not None:
        tgt = DirectionAlongMeridian.from_direction(target)
        if tgt is not None:
            return src.angle(tgt)
    return math.nan


def swap_axes(source: CoordinateSystem, target: CoordinateSystem) -> Matrix:
    """
    Build the affine matrix converting coordinates from one axis order to
    another, e.g. (λ,φ) to (φ,λ). Axes in opposite directions get a -1 factor.

    Raises:
        ValueError: if a target axis has no colinear axis in the source.
    """
    src_dim = source.dimension
    tgt_dim = target.dimension
    builder = MatrixBuilder.zeros(tgt_dim + 1, src_dim + 1)
    for j, axis in enumerate(target.axes):
        i = directions.index_of(source, axis.direction)
        if i < 0:
            raise ValueError(
                f"No axis of {source.name!r} is colinear with {axis.direction.name}")
        factor = 1.0 if source.axes[i].direction is axis.direction else -1.0
        builder.set_element(j, i, factor)
    builder.set_element(tgt_dim, src_dim, 1.0)
    return builder.build()
