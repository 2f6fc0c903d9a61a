"""Worley (cellular / Voronoi) noise generator.

Seed points are scattered over the grid and every vertex gets a height
derived from its distance to the closest seed.
"""

import logging
from typing import Any, Callable, Sequence

import numpy as np
from numpy.typing import NDArray

from .config import GenerationOptions
from .distance import metric
from .distribution import resolve_distribution
from .exceptions import InvalidConfigurationError
from .grid import Grid
from .postprocess import clamp
from .types import DistanceTransform, DistanceType, Easing, Point2D

logger = logging.getLogger(__name__)


def negate(d: NDArray[np.float64]) -> NDArray[np.float64]:
    """Closer to a seed means higher."""
    return -d


def negate_sqrt(d: NDArray[np.float64]) -> NDArray[np.float64]:
    """Sharp, stalagmite-like peaks at the seeds."""
    return -np.sqrt(d)


def stepped_cones(d: NDArray[np.float64]) -> NDArray[np.float64]:
    return 0.5 + np.cos((0.5 * d - 1) * np.pi) - d


_TRANSFORMS: dict[DistanceTransform, Callable[[Any], Any]] = {
    DistanceTransform.NEGATE: negate,
    DistanceTransform.NEGATE_SQRT: negate_sqrt,
    DistanceTransform.STEPPED_CONES: stepped_cones,
}


def resolve_transform(
    transform: DistanceTransform | Callable[[Any], Any],
) -> Callable[[Any], Any]:
    """Return the callable for a named distance transformation."""
    if isinstance(transform, DistanceTransform):
        return _TRANSFORMS[transform]
    return transform


def distance_to_nearest(
    width: int,
    height: int,
    points: Sequence[Point2D],
    kind: DistanceType = DistanceType.EUCLIDEAN,
) -> NDArray[np.float64]:
    """Distance from every vertex to its closest seed point.

    A brute-force scan over all seeds, vectorized one row at a time. Seed
    counts are small next to vertex counts, so no spatial index is used.

    Args:
        width: Number of vertex columns.
        height: Number of vertex rows.
        points: Seed points in grid-index space.
        kind: Distance metric.

    Returns:
        (height, width) array of distances.
    """
    seeds = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if len(seeds) == 0:
        raise InvalidConfigurationError("Worley noise needs at least one seed point")

    measure = metric(kind)
    xs = np.arange(width, dtype=np.float64)
    dx = np.abs(xs[:, np.newaxis] - seeds[np.newaxis, :, 0])

    nearest = np.empty((height, width), dtype=np.float64)
    for row in range(height):
        dy = np.abs(row - seeds[np.newaxis, :, 1])
        nearest[row] = measure(dx, dy).min(axis=1)

    return nearest


def worley(
    grid: Grid,
    options: GenerationOptions,
    rng: np.random.Generator,
) -> None:
    """Overwrite the grid with Worley noise.

    The raw heights are stretched into [min_height, max_height] linearly,
    whatever the ``stretch`` and ``easing`` options say; those apply later
    in the post-processing pipeline.

    Args:
        grid: Heightfield to overwrite.
        options: Generation options; reads the ``worley_*`` and
            ``distance_type`` fields.
        rng: Random number generator for the seed distribution.
    """
    grid.check_shape(options)

    distribute = resolve_distribution(options.worley_distribution, rng)
    points = distribute(options.x_segments, options.y_segments, options.worley_points)
    logger.debug(f"Worley noise with {len(points)} seeds ({options.distance_type.value})")

    transform = resolve_transform(options.worley_distance_transformation)
    nearest = distance_to_nearest(grid.width, grid.height, points, options.distance_type)
    grid.values[:] = transform(nearest)

    clamp(grid, options.model_copy(update={"stretch": True, "easing": Easing.LINEAR}))
