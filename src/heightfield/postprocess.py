"""Heightfield post-processing: turbulence, steps, smoothing, clamping.

All functions modify the grid in place. ``normalize`` chains them in the
fixed order used after every generator.
"""

import logging

import numpy as np
from scipy import ndimage

from .config import GenerationOptions
from .easing import resolve_easing
from .grid import Grid

logger = logging.getLogger(__name__)


def turbulence(grid: Grid, options: GenerationOptions) -> None:
    """Fold the field around the middle of the height range.

    Values near the midline become valleys and values near either bound
    become peaks, which produces sharp ridged relief.
    """
    values = grid.values
    values[:] = options.min_height + np.abs(
        (values - options.min_height) * 2 - options.height_range
    )


def step(grid: Grid, levels: int) -> None:
    """Quantize the field into ``levels`` flat bands.

    The observed range is split into equal-width bands and every vertex takes
    the mean elevation of its band. A band with no vertices never appears in
    the output.

    Args:
        grid: Heightfield to modify.
        levels: Number of bands; values below 2 leave the grid untouched.
    """
    values = grid.values
    lo, hi = float(values.min()), float(values.max())
    if levels < 2 or hi == lo:
        return

    bands = np.minimum(((values - lo) / (hi - lo) * levels).astype(np.intp), levels - 1)
    sums = np.bincount(bands.ravel(), weights=values.ravel(), minlength=levels)
    counts = np.bincount(bands.ravel(), minlength=levels)

    # Band midpoints stand in for empty bands
    means = lo + (hi - lo) * (np.arange(levels) + 0.5) / levels
    np.divide(sums, counts, out=means, where=counts > 0)

    values[:] = means[bands]


def smooth(grid: Grid, weight: float = 0.0) -> None:
    """Average every vertex with its in-bounds 8-neighbourhood.

    Args:
        grid: Heightfield to modify.
        weight: How strongly the original value is kept; the result is
            ``(neighbourhood_mean + value * weight) / (1 + weight)``.
    """
    values = grid.values
    kernel = np.ones((3, 3), dtype=np.float64)

    totals = ndimage.convolve(values, kernel, mode="constant", cval=0.0)
    counts = ndimage.convolve(np.ones_like(values), kernel, mode="constant", cval=0.0)
    mean = totals / counts

    values[:] = (mean + values * weight) / (1.0 + weight)


def clamp(grid: Grid, options: GenerationOptions) -> None:
    """Fit the field into [min_height, max_height].

    With ``options.stretch`` the observed range is remapped onto the target
    range through ``options.easing``, so the extremes land exactly on the
    bounds. A constant field cannot be stretched and is set to the midpoint
    of the target range. Without ``stretch`` out-of-range values are
    truncated.
    """
    values = grid.values
    if not options.stretch:
        np.clip(values, options.min_height, options.max_height, out=values)
        return

    lo, hi = float(values.min()), float(values.max())
    if hi == lo:
        logger.debug("Constant heightfield, setting it to the middle of the range")
        values[:] = (options.min_height + options.max_height) / 2
        return

    easing = resolve_easing(options.easing)
    values[:] = easing((values - lo) / (hi - lo)) * options.height_range + options.min_height


def normalize(grid: Grid, options: GenerationOptions) -> Grid:
    """Run the post-processing pipeline on a freshly generated grid.

    Order: turbulence, steps with smoothing, clamp/stretch, after-hook.

    Args:
        grid: Heightfield to modify in place.
        options: Generation options.

    Returns:
        The same grid, for chaining.
    """
    grid.check_shape(options)

    if options.turbulent:
        turbulence(grid, options)

    if options.steps > 1:
        step(grid, options.steps)
        smooth(grid)

    clamp(grid, options)

    if options.after is not None:
        options.after(grid, options)

    return grid
