"""Seed point distributions for cellular noise.

Provides uniform random scattering and Poisson-disk (blue noise) sampling.
Both return points in grid-index space, within the ``width`` x ``height``
domain.
"""

import logging
import math
from collections import defaultdict
from functools import partial
from typing import Any, Callable

import numpy as np

from .exceptions import InvalidConfigurationError
from .types import Distribution, Point2D

logger = logging.getLogger(__name__)

DistributionFunction = Callable[..., list[Point2D]]

_Cell = tuple[int, int]


def _check_domain(width: float, height: float) -> None:
    if width <= 0 or height <= 0:
        raise InvalidConfigurationError(
            f"Cannot distribute points in a {width}x{height} domain"
        )


def random_points(
    width: int,
    height: int,
    num_points: int | None = None,
    rng: np.random.Generator | None = None,
) -> list[Point2D]:
    """Scatter points uniformly over the domain.

    Args:
        width: Domain width.
        height: Domain height.
        num_points: Number of points. Defaults to
            ``floor(sqrt(width * height * 0.025))``, at least 1.
        rng: Random number generator.

    Returns:
        List of points with x in [0, width] and y in [0, height].

    Raises:
        InvalidConfigurationError: If the domain has zero area.
    """
    _check_domain(width, height)
    rng = rng if rng is not None else np.random.default_rng()
    if not num_points:
        num_points = max(1, math.floor(math.sqrt(width * height * 0.025)))

    coords = rng.random((num_points, 2)) * (width, height)
    return [Point2D(float(x), float(y)) for x, y in coords]


def poisson_disks(
    width: int,
    height: int,
    num_points: int | None = None,
    rng: np.random.Generator | None = None,
) -> list[Point2D]:
    """Sample points with a guaranteed minimum spacing.

    Dart throwing with an active list: a random active point is removed and
    up to ``num_points`` candidates are thrown in the annulus
    [min_dist, 2 * min_dist) around it. Candidates inside the domain (with a
    one-unit margin) and at least ``min_dist`` from every accepted point are
    kept. Sampling stops once ``num_points`` are accepted, the active list
    drains, or ``num_points ** 2`` points have been removed; in the last two
    cases fewer points are returned.

    Args:
        width: Domain width.
        height: Domain height.
        num_points: Target number of points. Defaults to
            ``floor(sqrt(width * height * 0.2))``, at least 1.
        rng: Random number generator.

    Returns:
        List of accepted points, the first one being the initial seed.

    Raises:
        InvalidConfigurationError: If the domain has zero area.
    """
    _check_domain(width, height)
    rng = rng if rng is not None else np.random.default_rng()
    if not num_points:
        num_points = max(1, math.floor(math.sqrt(width * height * 0.2)))

    min_dist = min(math.sqrt((width + height) * 2.5), num_points * 0.67)
    cell_size = max(2.0, min_dist / math.sqrt(2))
    # With the cell size floored at 2, neighbours can sit more than one cell away
    reach = math.ceil(min_dist / cell_size)

    background: dict[_Cell, list[Point2D]] = defaultdict(list)

    first = Point2D(float(rng.random() * width), float(rng.random() * height))
    active = [first]
    samples = [first]
    background[_cell_of(first, cell_size)].append(first)

    removals = 0
    while active and len(samples) < num_points:
        point = active.pop(int(rng.integers(len(active))))
        for _ in range(num_points):
            candidate = _random_point_around(point, min_dist, rng)
            if not _in_rectangle(candidate, width, height):
                continue
            if _in_neighborhood(background, candidate, min_dist, cell_size, reach):
                continue
            active.append(candidate)
            samples.append(candidate)
            background[_cell_of(candidate, cell_size)].append(candidate)
            if len(samples) >= num_points:
                break

        removals += 1
        if removals > num_points * num_points:
            logger.debug(
                f"Poisson-disk sampling stopped after {removals} removals "
                f"with {len(samples)}/{num_points} points"
            )
            break

    return samples


def _cell_of(point: Point2D, cell_size: float) -> _Cell:
    return math.floor(point.x / cell_size), math.floor(point.y / cell_size)


def _in_rectangle(point: Point2D, width: float, height: float) -> bool:
    return 0 <= point.x <= width + 1 and 0 <= point.y <= height + 1


def _in_neighborhood(
    background: dict[_Cell, list[Point2D]],
    point: Point2D,
    min_dist: float,
    cell_size: float,
    reach: int,
) -> bool:
    """Whether any accepted point lies closer than min_dist to ``point``."""
    gx, gy = _cell_of(point, cell_size)
    for x in range(gx - reach, gx + reach + 1):
        for y in range(gy - reach, gy + reach + 1):
            for other in background.get((x, y), ()):
                if math.hypot(point.x - other.x, point.y - other.y) < min_dist:
                    return True
    return False


def _random_point_around(
    point: Point2D,
    min_dist: float,
    rng: np.random.Generator,
) -> Point2D:
    radius = min_dist * (rng.random() + 1)
    angle = 2 * math.pi * rng.random()
    return Point2D(
        point.x + radius * math.cos(angle),
        point.y + radius * math.sin(angle),
    )


_DISTRIBUTIONS: dict[Distribution, DistributionFunction] = {
    Distribution.RANDOM: random_points,
    Distribution.POISSON_DISK: poisson_disks,
}


def resolve_distribution(
    distribution: Distribution | Callable[..., Any],
    rng: np.random.Generator | None = None,
) -> DistributionFunction:
    """Return a ``(width, height, num_points)`` callable for a distribution.

    Named variants get ``rng`` bound in; custom callables are returned as is.
    """
    if isinstance(distribution, Distribution):
        return partial(_DISTRIBUTIONS[distribution], rng=rng)
    return distribution
