"""Conversion between grayscale pixel buffers and heightfields.

Pixel intensity [0, 255] (averaged over RGB) maps linearly onto the height
range: ``elevation = (R + G + B) / 765 * (max_height - min_height)``.
Export writes ``round((z - min_height) / (max_height - min_height) * 255)``
into every colour channel with full alpha.
"""

import logging
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from .config import GenerationOptions
from .grid import Grid

logger = logging.getLogger(__name__)


def from_pixels(pixels: NDArray, options: GenerationOptions) -> Grid:
    """Build a heightfield from a (rows, cols, channels) pixel array.

    Buffers of a different size are resampled to the grid with bilinear
    interpolation. Channels past the third (alpha) are ignored.

    Args:
        pixels: Pixel array with at least 3 channels, values in [0, 255].
        options: Generation options giving grid size and height range.

    Returns:
        New grid of elevations.

    Raises:
        ValueError: If the array isn't (rows, cols, >=3).
    """
    if pixels.ndim != 3 or pixels.shape[2] < 3:
        raise ValueError(f"Expected a (rows, cols, >=3) pixel array, got {pixels.shape}")

    rgb = pixels[..., :3]
    if rgb.shape[:2] != (options.rows, options.cols):
        logger.debug(
            f"Resampling {rgb.shape[1]}x{rgb.shape[0]} pixels to "
            f"{options.cols}x{options.rows} vertices"
        )
        image = Image.fromarray(np.clip(rgb, 0, 255).astype(np.uint8))
        image = image.resize((options.cols, options.rows), Image.Resampling.BILINEAR)
        rgb = np.asarray(image)

    intensity = rgb.astype(np.float64).sum(axis=2) / 765
    return Grid(intensity * options.height_range)


def to_pixels(grid: Grid, options: GenerationOptions) -> NDArray[np.uint8]:
    """Render a heightfield as an RGBA grayscale pixel array."""
    scaled = np.rint((grid.values - options.min_height) / options.height_range * 255)
    gray = np.clip(scaled, 0, 255).astype(np.uint8)

    rgba = np.empty((grid.height, grid.width, 4), dtype=np.uint8)
    rgba[..., :3] = gray[..., np.newaxis]
    rgba[..., 3] = 255
    return rgba


def load_image(path: Path, options: GenerationOptions) -> Grid:
    """Read an image file into a heightfield sized for ``options``.

    Raises:
        FileNotFoundError: If the file doesn't exist.
    """
    if not path.exists():
        raise FileNotFoundError(f"Heightmap image not found: {path}")

    with Image.open(path) as img:
        pixels = np.asarray(img.convert("RGB"))

    logger.info(f"Loaded heightmap image {path}: {pixels.shape[1]}x{pixels.shape[0]}")
    return from_pixels(pixels, options)


def save_image(path: Path, grid: Grid, options: GenerationOptions) -> None:
    """Write a heightfield to an image file (PNG recommended)."""
    Image.fromarray(to_pixels(grid, options)).save(path)
    logger.info(f"Saved heightmap image to {path}")
