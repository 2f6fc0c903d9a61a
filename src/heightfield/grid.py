"""Row-major vertex grid holding one elevation per vertex."""

import numpy as np
from numpy.typing import NDArray

from .config import GenerationOptions
from .exceptions import GridShapeError


class Grid:
    """A (rows x cols) heightfield.

    Column index is the x coordinate and row index is the y coordinate, so
    the flat view is indexed ``row * width + col``.
    """

    def __init__(self, values: NDArray[np.float64]):
        if values.ndim != 2:
            raise GridShapeError(f"Grid values must be 2D, got shape {values.shape}")
        self.values = values

    @classmethod
    def zeros(cls, options: GenerationOptions) -> "Grid":
        """Create an empty grid sized for the given options."""
        return cls(np.zeros((options.rows, options.cols), dtype=np.float64))

    @classmethod
    def from_flat(cls, flat: NDArray, width: int, height: int) -> "Grid":
        """Build a grid from a flat row-major sequence of elevations."""
        flat = np.asarray(flat, dtype=np.float64)
        if flat.size != width * height:
            raise GridShapeError(
                f"Expected {width * height} elevations for {width}x{height}, got {flat.size}"
            )
        return cls(flat.reshape(height, width).copy())

    @property
    def width(self) -> int:
        return self.values.shape[1]

    @property
    def height(self) -> int:
        return self.values.shape[0]

    @property
    def flat(self) -> NDArray[np.float64]:
        """Row-major 1D view sharing memory with the grid."""
        return self.values.reshape(-1)

    def get(self, row: int, col: int) -> float:
        return float(self.values[row, col])

    def set(self, row: int, col: int, value: float) -> None:
        self.values[row, col] = value

    def copy(self) -> "Grid":
        return Grid(self.values.copy())

    def check_shape(self, options: GenerationOptions) -> None:
        """Raise GridShapeError if this grid doesn't match the options."""
        if self.values.shape != (options.rows, options.cols):
            raise GridShapeError(
                f"Grid is {self.width}x{self.height} but options describe "
                f"{options.cols}x{options.rows}"
            )

    def __len__(self) -> int:
        return self.values.size

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"
