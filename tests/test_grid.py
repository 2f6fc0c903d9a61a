"""Tests for the row-major vertex grid."""

import numpy as np
import pytest

from heightfield.config import GenerationOptions
from heightfield.exceptions import GridShapeError
from heightfield.grid import Grid


class TestGridConstruction:
    """Tests for creating grids."""

    def test_zeros_shape_from_options(self) -> None:
        """Grid has (y_segments + 1) rows and (x_segments + 1) columns."""
        options = GenerationOptions(x_segments=4, y_segments=2)
        grid = Grid.zeros(options)
        assert grid.width == 5
        assert grid.height == 3
        assert len(grid) == 15
        assert np.all(grid.values == 0)

    def test_from_flat_row_major(self) -> None:
        """Flat sequences are read row by row."""
        grid = Grid.from_flat(range(6), width=3, height=2)
        assert grid.get(0, 2) == 2
        assert grid.get(1, 0) == 3

    def test_from_flat_wrong_size_raises(self) -> None:
        with pytest.raises(GridShapeError):
            Grid.from_flat([1.0, 2.0, 3.0], width=2, height=2)

    def test_non_2d_raises(self) -> None:
        with pytest.raises(GridShapeError):
            Grid(np.zeros(5))


class TestGridAccess:
    """Tests for element access and views."""

    def test_flat_index_matches_row_major(self) -> None:
        """Flat index is row * width + col."""
        grid = Grid(np.zeros((3, 4)))
        grid.set(2, 1, 7.5)
        assert grid.flat[2 * grid.width + 1] == 7.5

    def test_flat_view_shares_memory(self) -> None:
        grid = Grid(np.zeros((2, 2)))
        grid.flat[3] = 1.0
        assert grid.get(1, 1) == 1.0

    def test_copy_is_independent(self) -> None:
        grid = Grid(np.zeros((2, 2)))
        clone = grid.copy()
        clone.set(0, 0, 5.0)
        assert grid.get(0, 0) == 0.0

    def test_check_shape_passes_for_matching_options(self) -> None:
        options = GenerationOptions(x_segments=3, y_segments=5)
        Grid.zeros(options).check_shape(options)

    def test_check_shape_raises_on_mismatch(self) -> None:
        options = GenerationOptions(x_segments=3, y_segments=5)
        grid = Grid(np.zeros((4, 6)))
        with pytest.raises(GridShapeError):
            grid.check_shape(options)
