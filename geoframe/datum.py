# datum.py

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

# keys of the property maps given to the factory methods
NAME_KEY = "name"
ALIAS_KEY = "alias"
IDENTIFIER_KEY = "identifier"
AUTHORITY_KEY = "authority"


@dataclass(frozen=True, slots=True)
class Ellipsoid:
    """
    A reference ellipsoid. Use `create_flattened_sphere` when the inverse
    flattening is the defining parameter and `create_ellipsoid` when the
    semi-minor axis is.
    """
    name: str
    semi_major_axis: float
    semi_minor_axis: float
    inverse_flattening: float
    ivf_definitive: bool
    alias: Optional[str] = None
    identifier: Optional[str] = None
    authority: Optional[str] = None
    unit: str = "m"

    @classmethod
    def create_flattened_sphere(cls, properties: Mapping[str, Any], semi_major_axis: float,
                                inverse_flattening: float, unit: str = "m") -> "Ellipsoid":
        """
        Create an ellipsoid from its semi-major axis and inverse flattening.
        An infinite inverse flattening gives a sphere.
        """
        if not (semi_major_axis > 0) or not (inverse_flattening > 0):
            raise ValueError(
                f"Axis length and inverse flattening must be positive, got {semi_major_axis}, {inverse_flattening}")
        semi_minor_axis = semi_major_axis * (1.0 - 1.0 / inverse_flattening)
        return cls._from_properties(properties, semi_major_axis, semi_minor_axis,
                                    inverse_flattening, True, unit)

    @classmethod
    def create_ellipsoid(cls, properties: Mapping[str, Any], semi_major_axis: float,
                         semi_minor_axis: float, unit: str = "m") -> "Ellipsoid":
        """Create an ellipsoid from its semi-major and semi-minor axes."""
        if not (semi_major_axis > 0) or not (semi_minor_axis > 0):
            raise ValueError(
                f"Axis lengths must be positive, got {semi_major_axis}, {semi_minor_axis}")
        if semi_major_axis == semi_minor_axis:
            inverse_flattening = math.inf
        else:
            inverse_flattening = semi_major_axis / (semi_major_axis - semi_minor_axis)
        return cls._from_properties(properties, semi_major_axis, semi_minor_axis,
                                    inverse_flattening, False, unit)

    @classmethod
    def _from_properties(cls, properties, semi_major_axis, semi_minor_axis,
                         inverse_flattening, ivf_definitive, unit) -> "Ellipsoid":
        return cls(
            name=properties[NAME_KEY],
            semi_major_axis=float(semi_major_axis),
            semi_minor_axis=float(semi_minor_axis),
            inverse_flattening=float(inverse_flattening),
            ivf_definitive=ivf_definitive,
            alias=properties.get(ALIAS_KEY),
            identifier=properties.get(IDENTIFIER_KEY),
            authority=properties.get(AUTHORITY_KEY),
            unit=unit,
        )

    @property
    def is_sphere(self) -> bool:
        return self.semi_major_axis == self.semi_minor_axis


@dataclass(frozen=True, slots=True)
class PrimeMeridian:
    """A prime meridian, given by its longitude relative to Greenwich."""
    name: str
    greenwich_longitude: float
    angular_unit: str = "deg"
    identifier: Optional[str] = None
    authority: Optional[str] = None
