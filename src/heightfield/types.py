"""Core types shared by the generators and the post-processing pipeline."""

from enum import Enum, IntEnum
from typing import NamedTuple


class Point2D(NamedTuple):
    """Immutable point in grid-index space (x = column, y = row)."""

    x: float
    y: float


class Easing(str, Enum):
    """Named easing curves that reshape a [0, 1] parameter."""

    LINEAR = "linear"
    EASE_IN = "ease_in"
    EASE_OUT = "ease_out"
    EASE_IN_OUT = "ease_in_out"
    IN_EASE_OUT = "in_ease_out"


class DistanceType(str, Enum):
    """Metrics available to the Worley generator."""

    EUCLIDEAN = "euclidean"
    EUCLIDEAN_SQUARED = "euclidean_squared"
    MANHATTAN = "manhattan"
    CHEBYSHEV = "chebyshev"
    QUADRATIC = "quadratic"


class Distribution(str, Enum):
    """Seed point distribution strategies."""

    RANDOM = "random"
    POISSON_DISK = "poisson_disk"


class DistanceTransform(str, Enum):
    """Named transformations from seed distance to relative height."""

    NEGATE = "negate"
    NEGATE_SQRT = "negate_sqrt"
    STEPPED_CONES = "stepped_cones"


class Generator(str, Enum):
    """Built-in heightmap generators."""

    DIAMOND_SQUARE = "diamond_square"
    WORLEY = "worley"
    PERLIN = "perlin"
    SIMPLEX = "simplex"
    CORNER = "corner"
    PERLIN_DIAMOND = "perlin_diamond"
    SIMPLEX_CORNER = "simplex_corner"


class Optimization(IntEnum):
    """Level-of-detail strategies for rendering hosts.

    None of these change generation; they are carried through so a host can
    read the requested strategy back from the options.
    """

    NONE = 0
    GEOMIPMAP = 1
    GEOCLIPMAP = 2
    POLYGON_REDUCTION = 3
