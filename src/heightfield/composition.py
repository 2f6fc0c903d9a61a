"""Multi-pass composition of generators into one heightfield."""

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

import numpy as np

from .config import GenerationOptions
from .diamond_square import diamond_square
from .grid import Grid
from .noise import corner, perlin, simplex

logger = logging.getLogger(__name__)

GeneratorFunction = Callable[[Grid, GenerationOptions, np.random.Generator], None]

# Fraction of the half-range removed from each side per unit of granularity
GRANULARITY = 0.1


@dataclass(frozen=True)
class Pass:
    """One generator invocation in a multi-pass composition.

    ``granularity`` scales how far the height band shrinks before this pass
    runs; negative values widen it instead. It is ignored for the first
    pass.
    """

    method: GeneratorFunction
    granularity: float = 1.0


def multi_pass(
    grid: Grid,
    options: GenerationOptions,
    passes: Sequence[Pass],
    rng: np.random.Generator,
) -> None:
    """Run several generators into the same grid.

    Before every pass after the first, the band [min_height, max_height] is
    narrowed symmetrically by ``(max - min) * 0.5 * GRANULARITY *
    granularity``, starting from the previous pass's band. Each pass gets
    its own copy of the options, so ``options`` itself is never modified.

    Args:
        grid: Heightfield shared by all passes.
        options: Options holding the full requested height band.
        passes: Generators to run, in order.
        rng: Random number generator shared by all passes.
    """
    band = options
    for i, current in enumerate(passes):
        if i > 0:
            move = band.height_range * 0.5 * GRANULARITY * current.granularity
            band = band.with_band(band.min_height + move, band.max_height - move)
        logger.debug(
            f"Pass {i}: {getattr(current.method, '__name__', current.method)} "
            f"in [{band.min_height:.2f}, {band.max_height:.2f}]"
        )
        current.method(grid, band, rng)


def perlin_diamond(grid: Grid, options: GenerationOptions, rng: np.random.Generator) -> None:
    """Perlin noise with a wider Diamond-Square pass layered on top."""
    multi_pass(
        grid,
        options,
        [Pass(perlin), Pass(diamond_square, granularity=-2)],
        rng,
    )


def simplex_corner(grid: Grid, options: GenerationOptions, rng: np.random.Generator) -> None:
    """Simplex noise with a narrower Corner pass layered on top."""
    multi_pass(
        grid,
        options,
        [Pass(simplex), Pass(corner, granularity=2)],
        rng,
    )
