"""Generation options and TOML loading."""

import tomllib
from pathlib import Path
from typing import Any, Callable

import numpy as np
from pydantic import BaseModel, Field, model_validator

from .types import (
    DistanceTransform,
    DistanceType,
    Distribution,
    Easing,
    Generator,
    Optimization,
)


class GenerationOptions(BaseModel, frozen=True, arbitrary_types_allowed=True):
    """Complete heightfield generation configuration.

    Strategy fields accept either a named built-in variant or a custom
    callable with the matching signature.
    """

    x_segments: int = Field(default=63, ge=1, description="Grid columns minus one")
    y_segments: int = Field(default=63, ge=1, description="Grid rows minus one")
    max_height: float = Field(default=100.0, description="Highest allowed elevation")
    min_height: float = Field(default=-100.0, description="Lowest allowed elevation")

    heightmap: Generator | Callable[..., Any] | np.ndarray = Field(
        default=Generator.DIAMOND_SQUARE,
        description="Generator to run, or an (rows, cols, channels) pixel array",
    )
    easing: Easing | Callable[[Any], Any] = Field(
        default=Easing.LINEAR, description="Curve applied to random parameters"
    )
    frequency: float = Field(
        default=2.5, gt=0, description="Feature frequency for noise generators"
    )
    steps: int = Field(default=1, ge=1, description="Number of flat elevation bands")
    stretch: bool = Field(
        default=True, description="Stretch the field to fill the height range"
    )
    turbulent: bool = Field(default=False, description="Fold the field into ridges")
    after: Callable[..., Any] | None = Field(
        default=None, description="Finishing hook run as after(grid, options)"
    )

    distance_type: DistanceType = Field(
        default=DistanceType.EUCLIDEAN, description="Worley distance metric"
    )
    worley_points: int | None = Field(
        default=None, ge=1, description="Worley seed count (None = derived from area)"
    )
    worley_distribution: Distribution | Callable[..., Any] = Field(
        default=Distribution.RANDOM, description="Worley seed distribution"
    )
    worley_distance_transformation: DistanceTransform | Callable[[Any], Any] = Field(
        default=DistanceTransform.NEGATE,
        description="Maps seed distance to relative height",
    )

    max_variation: float | None = Field(
        default=None,
        description="Corner generator disturbance range (None = half the height range)",
    )
    seed: int | None = Field(default=None, description="Random seed for reproducibility")
    optimization: Optimization = Field(
        default=Optimization.NONE, description="Level-of-detail hint for rendering hosts"
    )

    @model_validator(mode="after")
    def _check_height_range(self) -> "GenerationOptions":
        if self.max_height <= self.min_height:
            raise ValueError(
                f"max_height ({self.max_height}) must exceed min_height ({self.min_height})"
            )
        return self

    @property
    def rows(self) -> int:
        """Number of vertex rows in the grid."""
        return self.y_segments + 1

    @property
    def cols(self) -> int:
        """Number of vertex columns in the grid."""
        return self.x_segments + 1

    @property
    def height_range(self) -> float:
        return self.max_height - self.min_height

    def with_band(self, min_height: float, max_height: float) -> "GenerationOptions":
        """Return a copy restricted to a different height band.

        The copy skips validation so composition passes may invert or widen
        the band.
        """
        return self.model_copy(update={"min_height": min_height, "max_height": max_height})


def load_options(config_path: Path, **overrides: Any) -> GenerationOptions:
    """Load generation options from a TOML file.

    Options may sit at the top level or under a ``[generation]`` table.

    Args:
        config_path: Path to the TOML config file.
        **overrides: Values that replace entries from the file.

    Returns:
        Parsed GenerationOptions.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    data = dict(data.get("generation", data))
    data.update(overrides)
    return GenerationOptions.model_validate(data)
