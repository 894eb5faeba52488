# constants.py

from typing import Final
from numpy import finfo as np_finfo
from numpy import float64 as np_float64

# tolerance used when no explicit tolerance is given to Matrix.equals
DEFAULT_TOLERANCE: Final[float] = 0.0

# 2-norm condition number above which a matrix is reported as non-invertible
SINGULARITY_THRESHOLD: Final[float] = 1.0 / float(np_finfo(np_float64).eps)

# number of compass directions from NORTH to NORTH_NORTH_WEST
COMPASS_DIRECTION_COUNT: Final[int] = 16

LONGITUDE_MIN: Final[float] = -180.0
LONGITUDE_MAX: Final[float] = 180.0
