"""Diamond-Square midpoint displacement.

Works on a square scratch map whose side is a power of two plus one, then
adds the overlapping part into the target grid. The scratch map is indexed
``[x, y]``.
"""

import logging

import numpy as np
from numpy.typing import NDArray

from .config import GenerationOptions
from .easing import EasingFunction, resolve_easing
from .grid import Grid

logger = logging.getLogger(__name__)


def scratch_segments(x_segments: int, y_segments: int) -> int:
    """Smallest power of two covering both grid dimensions (at least 2)."""
    segments = 2
    while segments < max(x_segments, y_segments):
        segments *= 2
    return segments


def _displacement(
    shape: tuple[int, ...],
    amplitude: float,
    easing: EasingFunction,
    rng: np.random.Generator,
) -> NDArray[np.float64]:
    """Random offsets in [-amplitude, amplitude) shaped by the easing curve."""
    return easing(rng.random(shape)) * amplitude * 2 - amplitude


def diamond_square_map(
    segments: int,
    height_range: float,
    easing: EasingFunction,
    rng: np.random.Generator,
) -> NDArray[np.float64]:
    """Build a (segments + 1) x (segments + 1) midpoint-displacement map.

    The amplitude starts at ``height_range`` and halves before every level.
    Diamond-step neighbours wrap around modulo ``segments``, and index 0 is
    copied to index ``segments`` on both axes after each level, so opposite
    edges are always equal.

    Args:
        segments: Power-of-two side length.
        height_range: Initial displacement amplitude.
        easing: Curve applied to each uniform draw.
        rng: Random number generator.

    Returns:
        Scratch map indexed [x, y].
    """
    heightmap = np.zeros((segments + 1, segments + 1), dtype=np.float64)
    amplitude = height_range

    size = segments
    while size >= 2:
        half = size // 2
        amplitude /= 2

        # Square step: cell centres from their four corners
        corners = np.arange(0, segments, size)
        x, y = np.meshgrid(corners, corners, indexing="ij")
        avg = (
            heightmap[x, y]
            + heightmap[x + size, y]
            + heightmap[x, y + size]
            + heightmap[x + size, y + size]
        ) * 0.25
        heightmap[x + half, y + half] = avg + _displacement(x.shape, amplitude, easing, rng)

        # Diamond step: edge midpoints from the centres and corners around them
        on_grid = np.arange(0, segments, size)
        off_grid = np.arange(half, segments, size)
        for xs, ys in ((off_grid, on_grid), (on_grid, off_grid)):
            x, y = np.meshgrid(xs, ys, indexing="ij")
            avg = (
                heightmap[(x - half) % segments, y]
                + heightmap[(x + half) % segments, y]
                + heightmap[x, (y + half) % segments]
                + heightmap[x, (y - half) % segments]
            ) * 0.25
            heightmap[x, y] = avg + _displacement(x.shape, amplitude, easing, rng)

        heightmap[segments, :] = heightmap[0, :]
        heightmap[:, segments] = heightmap[:, 0]

        size = half

    return heightmap


def diamond_square(
    grid: Grid,
    options: GenerationOptions,
    rng: np.random.Generator,
) -> None:
    """Add Diamond-Square terrain to the grid.

    Each scratch value is clamped to [min_height, max_height] before it is
    added, so a later stretch sees the clamped values.

    Args:
        grid: Heightfield to add into.
        options: Generation options.
        rng: Random number generator.
    """
    grid.check_shape(options)

    segments = scratch_segments(options.x_segments, options.y_segments)
    logger.debug(f"Diamond-Square on a {segments + 1}x{segments + 1} scratch map")

    heightmap = diamond_square_map(
        segments, options.height_range, resolve_easing(options.easing), rng
    )

    overlap = heightmap[: options.cols, : options.rows].T
    grid.values += np.clip(overlap, options.min_height, options.max_height)
