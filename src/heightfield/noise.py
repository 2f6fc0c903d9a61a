"""Noise-based generators: Perlin, Simplex and Corner.

These generators add into the grid rather than overwrite it, so they can be
layered with multi-pass composition.
"""

import numpy as np
from numpy.typing import NDArray
from opensimplex import OpenSimplex

from .config import GenerationOptions
from .easing import resolve_easing
from .grid import Grid

# Gradient directions for 2D Perlin noise
_GRADIENTS = np.array(
    [[1, 1], [-1, 1], [1, -1], [-1, -1], [1, 0], [-1, 0], [0, 1], [0, -1]],
    dtype=np.float64,
)


def _fade(t: NDArray[np.float64]) -> NDArray[np.float64]:
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(t, a, b):
    return a + t * (b - a)


def _gradient_dot(
    hashes: NDArray[np.intp],
    x: NDArray[np.float64],
    y: NDArray[np.float64],
) -> NDArray[np.float64]:
    g = _GRADIENTS[hashes % len(_GRADIENTS)]
    return g[..., 0] * x + g[..., 1] * y


def permutation_table(rng: np.random.Generator) -> NDArray[np.intp]:
    """Shuffled 0..255 repeated twice, so lookups never need wrapping."""
    perm = rng.permutation(256)
    return np.concatenate([perm, perm]).astype(np.intp)


def perlin_noise_2d(
    x: NDArray[np.float64],
    y: NDArray[np.float64],
    perm: NDArray[np.intp],
) -> NDArray[np.float64]:
    """Classic gradient noise sampled at arrays of coordinates.

    Args:
        x: X coordinates (any shape).
        y: Y coordinates, same shape as ``x``.
        perm: Table from ``permutation_table``.

    Returns:
        Noise values, roughly in [-1, 1] and exactly 0 on lattice points.
    """
    x0 = np.floor(x)
    y0 = np.floor(y)
    xi = x0.astype(np.intp) & 255
    yi = y0.astype(np.intp) & 255
    xf = x - x0
    yf = y - y0
    u = _fade(xf)
    v = _fade(yf)

    aa = perm[perm[xi] + yi]
    ab = perm[perm[xi] + yi + 1]
    ba = perm[perm[xi + 1] + yi]
    bb = perm[perm[xi + 1] + yi + 1]

    bottom = _lerp(u, _gradient_dot(aa, xf, yf), _gradient_dot(ba, xf - 1, yf))
    top = _lerp(u, _gradient_dot(ab, xf, yf - 1), _gradient_dot(bb, xf - 1, yf - 1))
    return _lerp(v, bottom, top)


def _noise_divisor(options: GenerationOptions) -> float:
    return (min(options.x_segments, options.y_segments) + 1) / options.frequency


def _add_noise(grid: Grid, noise: NDArray[np.float64], options: GenerationOptions) -> None:
    """Ease noise in [-1, 1], scale it to half the height range and add it."""
    easing = resolve_easing(options.easing)
    shaped = easing((np.clip(noise, -1.0, 1.0) + 1) / 2) * 2 - 1
    grid.values += np.clip(
        shaped * options.height_range / 2, options.min_height, options.max_height
    )


def perlin(grid: Grid, options: GenerationOptions, rng: np.random.Generator) -> None:
    """Add Perlin noise; ``options.frequency`` sets how many features fit."""
    grid.check_shape(options)
    divisor = _noise_divisor(options)
    rows, cols = np.mgrid[0 : options.rows, 0 : options.cols].astype(np.float64)
    noise = perlin_noise_2d(cols / divisor, rows / divisor, permutation_table(rng))
    _add_noise(grid, noise, options)


def simplex(grid: Grid, options: GenerationOptions, rng: np.random.Generator) -> None:
    """Add OpenSimplex noise, with features twice as wide as ``perlin``."""
    grid.check_shape(options)
    divisor = _noise_divisor(options) * 2
    generator = OpenSimplex(seed=int(rng.integers(0, 2**31 - 1)))
    xs = np.arange(options.cols, dtype=np.float64) / divisor
    ys = np.arange(options.rows, dtype=np.float64) / divisor
    # noise2array returns shape (len(ys), len(xs))
    _add_noise(grid, generator.noise2array(xs, ys), options)


def corner(grid: Grid, options: GenerationOptions, rng: np.random.Generator) -> None:
    """Add terrain built by walking the grid and perturbing earlier neighbours.

    Each vertex takes half of the vertex above it, half of the vertex to its
    left, or the mean of both, plus an eased disturbance in
    [-max_variation / 2, max_variation / 2). The result looks closer to
    random noise than to realistic terrain.
    """
    grid.check_shape(options)
    values = grid.values
    easing = resolve_easing(options.easing)
    max_variation = (
        options.max_variation
        if options.max_variation is not None
        else options.height_range / 2
    )

    for row in range(options.rows):
        for col in range(options.cols):
            below = values[row - 1, col] if row > 0 else values[row, col]
            left = values[row, col - 1] if col > 0 else values[row, col]
            r = rng.random()
            neighbours = below if r < 0.2 else (left if r < 0.4 else below + left)
            disturbance = easing(rng.random()) * max_variation - max_variation / 2
            values[row, col] += np.clip(
                neighbours * 0.5 + disturbance, options.min_height, options.max_height
            )
