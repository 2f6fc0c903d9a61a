"""Main heightfield generation orchestration."""

import logging
from pathlib import Path

import numpy as np

from .composition import GeneratorFunction, perlin_diamond, simplex_corner
from .config import GenerationOptions
from .diamond_square import diamond_square
from .grid import Grid
from .imaging import from_pixels
from .noise import corner, perlin, simplex
from .persistence import save_heightfield
from .postprocess import normalize
from .types import Generator
from .worley import worley

logger = logging.getLogger(__name__)

GENERATORS: dict[Generator, GeneratorFunction] = {
    Generator.DIAMOND_SQUARE: diamond_square,
    Generator.WORLEY: worley,
    Generator.PERLIN: perlin,
    Generator.SIMPLEX: simplex,
    Generator.CORNER: corner,
    Generator.PERLIN_DIAMOND: perlin_diamond,
    Generator.SIMPLEX_CORNER: simplex_corner,
}


def apply_heightmap(
    grid: Grid,
    options: GenerationOptions,
    rng: np.random.Generator,
) -> bool:
    """Fill the grid from ``options.heightmap``.

    Accepts a built-in generator name, a custom ``(grid, options)``
    callable, or a pixel array. Only the built-ins draw from ``rng``.
    Anything else is logged and the grid is left untouched.

    Args:
        grid: Empty heightfield to fill.
        options: Generation options.
        rng: Random number generator for the built-in generators.

    Returns:
        True if the grid was filled.
    """
    heightmap = options.heightmap

    if isinstance(heightmap, Generator):
        GENERATORS[heightmap](grid, options, rng)
    elif isinstance(heightmap, np.ndarray):
        grid.values[:] = from_pixels(heightmap, options).values
    elif callable(heightmap):
        heightmap(grid, options)
    else:
        logger.warning(f"An invalid value was passed for heightmap: {heightmap!r}")
        return False

    return True


def generate(options: GenerationOptions, rng: np.random.Generator | None = None) -> Grid:
    """Generate a complete heightfield.

    Creates a zeroed grid, runs the configured heightmap source, then the
    post-processing pipeline (turbulence, steps, clamp/stretch, after-hook).

    Args:
        options: Generation options.
        rng: Random number generator. Defaults to one seeded with
            ``options.seed``.

    Returns:
        The finished grid.
    """
    if rng is None:
        rng = np.random.default_rng(options.seed)

    logger.info(
        f"Generating {options.cols}x{options.rows} heightfield "
        f"with {_describe(options.heightmap)} (seed {options.seed})"
    )

    grid = Grid.zeros(options)
    apply_heightmap(grid, options, rng)
    normalize(grid, options)

    _log_heightfield_stats(grid)
    return grid


def generate_and_save(
    options: GenerationOptions,
    save_path: Path,
    rng: np.random.Generator | None = None,
) -> Grid:
    """Generate a heightfield and save it to an .npz file.

    Args:
        options: Generation options.
        save_path: Where to save the heightfield.
        rng: Optional random number generator.

    Returns:
        The finished grid.
    """
    grid = generate(options, rng)

    save_path.parent.mkdir(parents=True, exist_ok=True)
    save_heightfield(save_path, grid, options)

    return grid


def _describe(heightmap: object) -> str:
    if isinstance(heightmap, Generator):
        return heightmap.value
    if isinstance(heightmap, np.ndarray):
        return f"{heightmap.shape[1]}x{heightmap.shape[0]} pixel buffer"
    return getattr(heightmap, "__name__", repr(heightmap))


def _log_heightfield_stats(grid: Grid) -> None:
    """Log heightfield generation statistics."""
    values = grid.values
    logger.info(
        f"Heightfield stats ({values.size:,} vertices): "
        f"min {values.min():.2f}, max {values.max():.2f}, "
        f"mean {values.mean():.2f}, std {values.std():.2f}"
    )
