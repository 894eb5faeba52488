# direction_along_meridian.py

import math
import re
from functools import total_ordering
from typing import Optional

from numpy import format_float_positional as np_format_float_positional

from geoframe import direction as directions
from geoframe.constants import LONGITUDE_MAX, LONGITUDE_MIN
from geoframe.direction import AxisDirection

# EPSG database spelling, e.g. "South along 90 deg East" or "North along 45°W"
_EPSG = re.compile(
    r"(\S+)\s+along\s+([\-\d.]+)(?:\s+deg|\s*°)\s*(\S+)?",
    re.IGNORECASE,
)

_BASE_DIRECTIONS = (
    AxisDirection.NORTH,
    AxisDirection.SOUTH,
    AxisDirection.EAST,
    AxisDirection.WEST,
)


def _normalize(angle: float) -> float:
    """Bring an angle in degrees into the (-180, 180] range."""
    return angle - 360.0 * math.ceil((angle - 180.0) / 360.0)


@total_ordering
class DirectionAlongMeridian:
    """
    A direction such as "South along 90°E", used by polar coordinate systems.

    Attributes:
        base_direction: NORTH or SOUTH.
        meridian: longitude of the reference meridian in degrees, in [-180, 180].
            Negative values are west of Greenwich.
    """

    __slots__ = ("base_direction", "meridian", "_direction")

    def __init__(self, base_direction: AxisDirection, meridian: float):
        meridian = float(meridian)
        if not (LONGITUDE_MIN <= meridian <= LONGITUDE_MAX):
            raise ValueError(f"Meridian must be in [{LONGITUDE_MIN}, {LONGITUDE_MAX}], got {meridian}")
        self.base_direction = base_direction
        self.meridian = meridian
        self._direction: Optional[AxisDirection] = None

    @classmethod
    def parse(cls, name: str) -> Optional["DirectionAlongMeridian"]:
        """
        Parse a name like "South along 90 deg East" or "North along 45°W".

        Returns:
            The parsed direction, or None if the name does not follow that
            pattern, the base direction is not North or South, the sign word is
            not East or West, or the meridian is outside [-180, 180].
        """
        m = _EPSG.fullmatch(name)
        if m is None:
            return None
        base = directions.find(m.group(1), _BASE_DIRECTIONS)
        if base is None or directions.absolute(base) is not AxisDirection.NORTH:
            return None
        try:
            meridian = float(m.group(2))
        except ValueError:
            return None
        if not (LONGITUDE_MIN <= meridian <= LONGITUDE_MAX):
            return None
        sign_word = m.group(3)
        if sign_word is not None:
            sign = directions.find(sign_word, _BASE_DIRECTIONS)
            if sign is None:
                return None
            positive = directions.absolute(sign)
            if positive is not AxisDirection.EAST:
                return None
            if sign is not positive:
                meridian = -meridian
        # 0°W and 180°W are the same meridians as 0° and 180°
        if meridian == 0.0:
            meridian = 0.0
        elif meridian == LONGITUDE_MIN:
            meridian = LONGITUDE_MAX
        return cls(base, meridian)

    @classmethod
    def from_direction(cls, direction: AxisDirection) -> Optional["DirectionAlongMeridian"]:
        """Parse the name of an axis direction, remembering that direction."""
        candidate = cls.parse(direction.name)
        if candidate is not None:
            candidate._direction = direction
        return candidate

    @property
    def direction(self) -> AxisDirection:
        """The axis direction named after `str(self)`, created if it does not exist yet."""
        if self._direction is None:
            # exact name only, lenient matching would merge 1.5°E with 15°E
            self._direction = AxisDirection.for_name(str(self), can_create=True)
        return self._direction

    def angle(self, other: "DirectionAlongMeridian") -> float:
        """
        Signed angle in degrees from `other` to this direction.

        A positive angle is a rotation in the right-handed direction. For
        South-based directions the meridian difference changes sign.

        Returns:
            An angle in (-180, 180], or NaN if the base directions differ.
        """
        if self.base_direction is not other.base_direction:
            return math.nan
        angle = _normalize(self.meridian - other.meridian)
        if directions.is_opposite(self.base_direction):
            angle = -angle
            if angle == -180.0:
                angle = 180.0
        return angle

    def compare_to(self, other: "DirectionAlongMeridian") -> int:
        """
        Order by base direction, then by meridian with the sign used by the EPSG
        database: the direction with the larger right-handed angle comes first.
        """
        if self.base_direction is not other.base_direction:
            return -1 if self.base_direction.ordinal < other.base_direction.ordinal else 1
        angle = self.angle(other)
        if angle < 0:
            return 1
        if angle > 0:
            return -1
        return 0

    def __lt__(self, other: "DirectionAlongMeridian") -> bool:
        if not isinstance(other, DirectionAlongMeridian):
            return NotImplemented
        return self.compare_to(other) < 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DirectionAlongMeridian):
            return False
        return self.base_direction is other.base_direction and self.meridian == other.meridian

    def __hash__(self) -> int:
        return hash((self.base_direction, self.meridian))

    def __str__(self) -> str:
        base = self.base_direction.name.capitalize()
        md = abs(self.meridian)
        if md == int(md):
            text = str(int(md))
        else:
            text = np_format_float_positional(md, trim="-")
        name = f"{base} along {text}°"
        if md != 0 and md != LONGITUDE_MAX:
            name += "W" if self.meridian < 0 else "E"
        return name

    def __repr__(self) -> str:
        return f"DirectionAlongMeridian({self.base_direction.name}, {self.meridian})"
