# standard_definitions.py

import logging
from enum import Enum
from functools import lru_cache
from typing import Union

from geoframe.datum import (
    ALIAS_KEY,
    AUTHORITY_KEY,
    IDENTIFIER_KEY,
    NAME_KEY,
    Ellipsoid,
    PrimeMeridian,
)
from geoframe.errors import InternalInconsistencyError

logger = logging.getLogger(__name__)

EPSG = "EPSG"

# EPSG code of the Greenwich prime meridian
GREENWICH = "8901"


@lru_cache(maxsize=None)
def prime_meridian() -> PrimeMeridian:
    """Get the Greenwich prime meridian."""
    return PrimeMeridian(name="Greenwich", greenwich_longitude=0.0, angular_unit="deg",
                         identifier=GREENWICH, authority=EPSG)


def create_ellipsoid(code: Union[int, str]) -> Ellipsoid:
    """
    Create one of the hardcoded ellipsoids, for use when no EPSG database
    is available.

    Args:
        code: EPSG code, one of 7030, 7043, 7019, 7022, 7008 or 7048, as an
            integer or a string such as "7030".

    Raises:
        InternalInconsistencyError: for any other code.
    """
    try:
        number = int(code)
    except (TypeError, ValueError):
        raise InternalInconsistencyError(f"No hardcoded ellipsoid for code {code!r}") from None
    return _hardcoded_ellipsoid(number)


@lru_cache(maxsize=None)
def _hardcoded_ellipsoid(code: int) -> Ellipsoid:
    alias = None
    ivf_definitive = True
    if code == 7030:
        name, alias, semi_major_axis, other = "WGS 84", "WGS84", 6378137.0, 298.257223563
    elif code == 7043:
        name, alias, semi_major_axis, other = "WGS 72", "NWL 10D", 6378135.0, 298.26
    elif code == 7019:
        name, alias, semi_major_axis, other = "GRS 1980", "International 1979", 6378137.0, 298.257222101
    elif code == 7022:
        name, alias, semi_major_axis, other = "International 1924", "Hayford 1909", 6378388.0, 297.0
    elif code == 7008:
        name, semi_major_axis, other = "Clarke 1866", 6378206.4, 6356583.8
        ivf_definitive = False
    elif code == 7048:
        name, semi_major_axis, other = "GRS 1980 Authalic Sphere", 6371007.0, 6371007.0
        ivf_definitive = False
    else:
        raise InternalInconsistencyError(f"No hardcoded ellipsoid for code {code}")
    logger.debug("Using hardcoded definition of ellipsoid %s (EPSG:%d)", name, code)
    properties = {
        NAME_KEY: name,
        ALIAS_KEY: alias,
        IDENTIFIER_KEY: str(code),
        AUTHORITY_KEY: EPSG,
    }
    if ivf_definitive:
        return Ellipsoid.create_flattened_sphere(properties, semi_major_axis, other)
    return Ellipsoid.create_ellipsoid(properties, semi_major_axis, other)


class GeodeticObject(Enum):
    """Frequently used geodetic datums and the EPSG code of their ellipsoid."""
    WGS84 = ("World Geodetic System 1984", 7030)
    WGS72 = ("World Geodetic System 1972", 7043)
    ETRS89 = ("European Terrestrial Reference System 1989", 7019)
    NAD83 = ("North American Datum 1983", 7019)
    NAD27 = ("North American Datum 1927", 7008)
    ED50 = ("European Datum 1950", 7022)
    SPHERE = ("Not specified (based on GRS 1980 Authalic Sphere)", 7048)

    def __init__(self, datum_name: str, ellipsoid_code: int):
        self.datum_name = datum_name
        self.ellipsoid_code = ellipsoid_code

    def ellipsoid(self) -> Ellipsoid:
        return create_ellipsoid(self.ellipsoid_code)

    def prime_meridian(self) -> PrimeMeridian:
        return prime_meridian()
