# direction.py

import logging
import re
import threading
from functools import total_ordering
from typing import Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)


@total_ordering
class AxisDirection:
    """
    An axis direction such as NORTH, UP or FUTURE.

    Values are interned: there is exactly one instance per name, so they can
    be compared with `is`. The canonical directions are created at import
    time in a fixed order which defines their `ordinal`. Directions along a
    meridian ("South along 90°E") are added on demand after them.
    """

    __slots__ = ("name", "ordinal")

    _values: List["AxisDirection"] = []
    _by_name: Dict[str, "AxisDirection"] = {}
    _lock = threading.Lock()

    def __init__(self, name: str, ordinal: int):
        self.name = name
        self.ordinal = ordinal

    @classmethod
    def _register(cls, name: str) -> "AxisDirection":
        value = cls(name, len(cls._values))
        cls._values.append(value)
        cls._by_name[name] = value
        return value

    @classmethod
    def values(cls) -> Tuple["AxisDirection", ...]:
        """All known directions in ordinal order, including the ones created on demand."""
        with cls._lock:
            return tuple(cls._values)

    @classmethod
    def for_name(cls, name: str, can_create: bool = False) -> Optional["AxisDirection"]:
        """
        Get the direction of the given name.

        Args:
            name: the exact direction name.
            can_create: whether to register a new direction if none exists.

        Returns:
            The direction, or None if unknown and `can_create` is False.
        """
        value = cls._by_name.get(name)
        if value is not None or not can_create:
            return value
        with cls._lock:
            value = cls._by_name.get(name)
            if value is None:
                value = cls._register(name)
                logger.debug("Registered axis direction %r with ordinal %d", name, value.ordinal)
        return value

    def __lt__(self, other: "AxisDirection") -> bool:
        if not isinstance(other, AxisDirection):
            return NotImplemented
        return self.ordinal < other.ordinal

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return hash(self.name)

    def __reduce__(self):
        return (AxisDirection.for_name, (self.name, True))

    def __repr__(self) -> str:
        return f"AxisDirection.{self.name}" if self.name.isidentifier() else f"AxisDirection({self.name!r})"

    def __str__(self) -> str:
        return self.name


_CANONICAL_NAMES = (
    "OTHER",
    "NORTH", "NORTH_NORTH_EAST", "NORTH_EAST", "EAST_NORTH_EAST",
    "EAST", "EAST_SOUTH_EAST", "SOUTH_EAST", "SOUTH_SOUTH_EAST",
    "SOUTH", "SOUTH_SOUTH_WEST", "SOUTH_WEST", "WEST_SOUTH_WEST",
    "WEST", "WEST_NORTH_WEST", "NORTH_WEST", "NORTH_NORTH_WEST",
    "UP", "DOWN",
    "GEOCENTRIC_X", "GEOCENTRIC_Y", "GEOCENTRIC_Z",
    "FUTURE", "PAST",
    "COLUMN_POSITIVE", "COLUMN_NEGATIVE", "ROW_POSITIVE", "ROW_NEGATIVE",
    "DISPLAY_RIGHT", "DISPLAY_LEFT", "DISPLAY_UP", "DISPLAY_DOWN",
)

for _name in _CANONICAL_NAMES:
    setattr(AxisDirection, _name, AxisDirection._register(_name))

OTHER = AxisDirection.OTHER
NORTH = AxisDirection.NORTH
SOUTH = AxisDirection.SOUTH
EAST = AxisDirection.EAST
WEST = AxisDirection.WEST
UP = AxisDirection.UP
DOWN = AxisDirection.DOWN
GEOCENTRIC_X = AxisDirection.GEOCENTRIC_X
GEOCENTRIC_Y = AxisDirection.GEOCENTRIC_Y
GEOCENTRIC_Z = AxisDirection.GEOCENTRIC_Z
FUTURE = AxisDirection.FUTURE
PAST = AxisDirection.PAST
COLUMN_POSITIVE = AxisDirection.COLUMN_POSITIVE
ROW_NEGATIVE = AxisDirection.ROW_NEGATIVE
DISPLAY_DOWN = AxisDirection.DISPLAY_DOWN


def _build_opposites() -> Tuple[Optional[AxisDirection], ...]:
    table: List[Optional[AxisDirection]] = [None] * len(_CANONICAL_NAMES)

    def put(a: AxisDirection, b: AxisDirection) -> None:
        table[a.ordinal] = b
        table[b.ordinal] = a

    d = AxisDirection
    put(d.OTHER, d.OTHER)
    put(d.NORTH, d.SOUTH)
    put(d.NORTH_NORTH_EAST, d.SOUTH_SOUTH_WEST)
    put(d.NORTH_EAST, d.SOUTH_WEST)
    put(d.EAST_NORTH_EAST, d.WEST_SOUTH_WEST)
    put(d.EAST, d.WEST)
    put(d.EAST_SOUTH_EAST, d.WEST_NORTH_WEST)
    put(d.SOUTH_EAST, d.NORTH_WEST)
    put(d.SOUTH_SOUTH_EAST, d.NORTH_NORTH_WEST)
    put(d.UP, d.DOWN)
    put(d.FUTURE, d.PAST)
    put(d.COLUMN_POSITIVE, d.COLUMN_NEGATIVE)
    put(d.ROW_POSITIVE, d.ROW_NEGATIVE)
    put(d.DISPLAY_RIGHT, d.DISPLAY_LEFT)
    put(d.DISPLAY_UP, d.DISPLAY_DOWN)
    return tuple(table)


# frozen after import, safe to read from any thread
_OPPOSITES = _build_opposites()


def opposite(direction: AxisDirection) -> AxisDirection:
    """
    Get the opposite of a direction, e.g. SOUTH for NORTH.

    Returns:
        The opposite direction, or `direction` itself if it has none.
    """
    if direction is not None and direction.ordinal < len(_OPPOSITES):
        found = _OPPOSITES[direction.ordinal]
        if found is not None:
            return found
    return direction


def absolute(direction: AxisDirection) -> AxisDirection:
    """
    Get the "positive" member of an antonym pair, e.g. NORTH for SOUTH.
    Directions without opposite are returned unchanged.
    """
    found = opposite(direction)
    if found is not None and found.ordinal < direction.ordinal:
        return found
    return direction


def is_opposite(direction: AxisDirection) -> bool:
    """True if the direction is the "negative" member of an antonym pair (SOUTH, WEST, DOWN, ...)."""
    if direction is None:
        return False
    return opposite(direction).ordinal < direction.ordinal


def is_spatial_or_custom(direction: AxisDirection, include_image_axes: bool) -> bool:
    """
    True if the direction is spatial (compass, vertical or geocentric) or is
    not one of the predefined directions. Temporal directions are never
    accepted; grid and display directions only with `include_image_axes`.
    """
    if direction is None:
        return False
    ordinal = direction.ordinal
    upper = PAST if include_image_axes else DISPLAY_DOWN
    return ordinal < FUTURE.ordinal or ordinal > upper.ordinal


def is_grid(direction: AxisDirection) -> bool:
    """True for COLUMN_POSITIVE, COLUMN_NEGATIVE, ROW_POSITIVE and ROW_NEGATIVE."""
    if direction is None:
        return False
    return COLUMN_POSITIVE.ordinal <= direction.ordinal <= ROW_NEGATIVE.ordinal


def index_of(cs, direction: AxisDirection) -> int:
    """
    Find the axis of a coordinate system which is colinear with a direction.

    An axis with exactly the given direction is preferred, even if an axis
    with the opposite direction comes first.

    Args:
        cs: an object with an `axes` sequence whose items have a `direction`.
        direction: the direction to look for.

    Returns:
        The index of the matching axis, of the first opposite axis if there
        is no exact match, or -1.
    """
    fallback = -1
    if cs is None:
        return fallback
    reverse = opposite(direction)
    for i, axis in enumerate(cs.axes):
        d = axis.direction
        if d is direction:
            return i
        if fallback < 0 and d is reverse:
            fallback = i
    return fallback


_WORDS = re.compile(r"[^\W_]+")


def _filtered(text: str) -> str:
    return "".join(c for c in text if c.isalnum()).casefold()


def _is_acronym_for_words(acronym: str, words: str) -> bool:
    """
    True if `acronym` is made of the leading characters of each word, in
    order and with at least one character per word. "NE" and "NoE" both
    match "NORTH_EAST".
    """
    acronym = acronym.strip().casefold()
    if not acronym or not acronym.isalnum():
        return False
    parts = [w.casefold() for w in _WORDS.findall(words)]
    if not parts:
        return False

    def match(i: int, w: int) -> bool:
        if w == len(parts):
            return i == len(acronym)
        word = parts[w]
        k = 1
        while i + k <= len(acronym) and k <= len(word) and acronym[i + k - 1] == word[k - 1]:
            if match(i + k, w + 1):
                return True
            k += 1
        return False

    return match(0, 0)


def find(name: str, candidates: Iterable[AxisDirection]) -> Optional[AxisDirection]:
    """
    Search a direction by name, ignoring case and any character which is
    not a letter or digit. Acronyms such as "NE" are also recognized.

    Returns:
        The first matching candidate, or None.
    """
    filtered = _filtered(name)
    for candidate in candidates:
        identifier = candidate.name
        if filtered == _filtered(identifier) or _is_acronym_for_words(name, identifier):
            return candidate
    return None


_GEOCENTRE = re.compile(r"geocentre\s*>\s*(.*)", re.IGNORECASE)
_EQUATOR_DEGREES = re.compile(r"(\d{1,6})\s*(?:°|d)E", re.IGNORECASE)


def _parse_geocentric(name: str) -> Optional[AxisDirection]:
    m = _GEOCENTRE.fullmatch(name)
    if m is None:
        return None
    rest = m.group(1)
    if "/" not in rest:
        return GEOCENTRIC_Z if rest.strip().casefold() == "north pole" else None
    where, longitude = rest.split("/", 1)
    if where.strip().casefold() != "equator":
        return None
    longitude = longitude.strip()
    if longitude.upper() == "PM":
        return GEOCENTRIC_X
    m = _EQUATOR_DEGREES.fullmatch(longitude)
    if m is not None:
        degrees = int(m.group(1))
        if degrees == 0:
            return GEOCENTRIC_X
        if degrees == 90:
            return GEOCENTRIC_Y
    return None


def value_of(name: str) -> Optional[AxisDirection]:
    """
    Search a direction by name among all known directions, then try the
    EPSG geocentric phrasings "Geocentre > equator/PM", "Geocentre >
    equator/0°E", "Geocentre > equator/90°E" and "Geocentre > north pole".

    Returns:
        The direction, or None if the name is not recognized.
    """
    name = name.replace("_", " ").strip()
    candidate = find(name, AxisDirection.values())
    if candidate is None:
        candidate = _parse_geocentric(name)
    return candidate
