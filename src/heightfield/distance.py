"""2D distance metrics for cellular noise.

Each metric takes the absolute coordinate differences (dx, dy) so it can be
applied to scalars or to whole numpy arrays of differences at once.
"""

from typing import Any, Callable

import numpy as np
from numpy.typing import NDArray

from .types import DistanceType, Point2D

Metric = Callable[[Any, Any], Any]


def euclidean(dx: NDArray[np.float64], dy: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.sqrt(dx * dx + dy * dy)


def euclidean_squared(dx: NDArray[np.float64], dy: NDArray[np.float64]) -> NDArray[np.float64]:
    return dx * dx + dy * dy


def manhattan(dx: NDArray[np.float64], dy: NDArray[np.float64]) -> NDArray[np.float64]:
    return dx + dy


def chebyshev(dx: NDArray[np.float64], dy: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.maximum(dx, dy)


def quadratic(dx: NDArray[np.float64], dy: NDArray[np.float64]) -> NDArray[np.float64]:
    """Quadratic-form distance dx^2 + dx*dy + dy^2."""
    return dx * dx + dx * dy + dy * dy


_METRICS: dict[DistanceType, Metric] = {
    DistanceType.EUCLIDEAN: euclidean,
    DistanceType.EUCLIDEAN_SQUARED: euclidean_squared,
    DistanceType.MANHATTAN: manhattan,
    DistanceType.CHEBYSHEV: chebyshev,
    DistanceType.QUADRATIC: quadratic,
}


def metric(kind: DistanceType | str) -> Metric:
    """Look up a metric by enum member or name."""
    return _METRICS[DistanceType(kind)]


def distance(
    a: Point2D | tuple[float, float],
    b: Point2D | tuple[float, float],
    kind: DistanceType | str = DistanceType.EUCLIDEAN,
) -> float:
    """Distance between two points under the given metric."""
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    return float(metric(kind)(dx, dy))
