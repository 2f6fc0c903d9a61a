"""Procedural terrain heightmap generation.

This package implements heightfield generators (Diamond-Square, Worley,
Perlin, Simplex, Corner), multi-pass composition, and the post-processing
pipeline that clamps, eases, steps and smooths the result.
"""

from .composition import Pass, multi_pass, perlin_diamond, simplex_corner
from .config import GenerationOptions, load_options
from .diamond_square import diamond_square
from .distance import distance, metric
from .distribution import poisson_disks, random_points
from .exceptions import GridShapeError, HeightfieldError, InvalidConfigurationError
from .generator import GENERATORS, apply_heightmap, generate, generate_and_save
from .grid import Grid
from .imaging import from_pixels, load_image, save_image, to_pixels
from .noise import corner, perlin, simplex
from .persistence import load_heightfield, save_heightfield
from .postprocess import clamp, normalize, smooth, step, turbulence
from .types import (
    DistanceTransform,
    DistanceType,
    Distribution,
    Easing,
    Generator,
    Optimization,
    Point2D,
)
from .worley import worley

__all__ = [
    # Types
    "DistanceTransform",
    "DistanceType",
    "Distribution",
    "Easing",
    "Generator",
    "Optimization",
    "Point2D",
    "Grid",
    "GenerationOptions",
    "load_options",
    # Generators
    "GENERATORS",
    "corner",
    "diamond_square",
    "perlin",
    "simplex",
    "worley",
    "Pass",
    "multi_pass",
    "perlin_diamond",
    "simplex_corner",
    # Points and metrics
    "distance",
    "metric",
    "poisson_disks",
    "random_points",
    # Pipeline
    "apply_heightmap",
    "generate",
    "generate_and_save",
    "normalize",
    "clamp",
    "smooth",
    "step",
    "turbulence",
    # I/O
    "from_pixels",
    "to_pixels",
    "load_image",
    "save_image",
    "load_heightfield",
    "save_heightfield",
    # Exceptions
    "HeightfieldError",
    "InvalidConfigurationError",
    "GridShapeError",
]
