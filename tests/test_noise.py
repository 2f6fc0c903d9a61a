"""Tests for the Perlin, Simplex and Corner generators."""

import numpy as np
import pytest

from heightfield.config import GenerationOptions
from heightfield.exceptions import GridShapeError
from heightfield.grid import Grid
from heightfield.noise import corner, perlin, perlin_noise_2d, permutation_table, simplex


class TestPerlinNoise2D:
    """Tests for the raw gradient noise function."""

    def test_zero_on_lattice(self, rng: np.random.Generator) -> None:
        perm = permutation_table(rng)
        xs, ys = np.meshgrid(np.arange(10.0), np.arange(10.0))
        np.testing.assert_allclose(perlin_noise_2d(xs, ys, perm), 0.0)

    def test_bounded(self, rng: np.random.Generator) -> None:
        perm = permutation_table(rng)
        xs, ys = np.meshgrid(np.linspace(0, 20, 200), np.linspace(0, 20, 200))
        noise = perlin_noise_2d(xs, ys, perm)
        assert np.abs(noise).max() <= 1.0 + 1e-9

    def test_continuous(self, rng: np.random.Generator) -> None:
        perm = permutation_table(rng)
        xs = np.linspace(0, 4, 2000)
        noise = perlin_noise_2d(xs, np.full_like(xs, 0.37), perm)
        assert np.abs(np.diff(noise)).max() < 0.01

    def test_permutation_table_repeats(self, rng: np.random.Generator) -> None:
        perm = permutation_table(rng)
        assert len(perm) == 512
        np.testing.assert_array_equal(perm[:256], perm[256:])
        assert sorted(perm[:256]) == list(range(256))


@pytest.mark.parametrize("method", [perlin, simplex, corner])
class TestNoiseGenerators:
    """Behaviour shared by all three noise generators."""

    def test_deterministic(self, method, small_options: GenerationOptions) -> None:
        first = Grid.zeros(small_options)
        second = Grid.zeros(small_options)
        method(first, small_options, np.random.default_rng(11))
        method(second, small_options, np.random.default_rng(11))
        np.testing.assert_array_equal(first.values, second.values)

    def test_within_height_range(self, method, small_options: GenerationOptions) -> None:
        grid = Grid.zeros(small_options)
        method(grid, small_options, np.random.default_rng(11))
        assert grid.values.min() >= small_options.min_height
        assert grid.values.max() <= small_options.max_height
        assert np.count_nonzero(grid.values) > 0

    def test_non_square_grid(self, method) -> None:
        options = GenerationOptions(x_segments=20, y_segments=9)
        grid = Grid.zeros(options)
        method(grid, options, np.random.default_rng(11))
        assert grid.values.shape == (10, 21)

    def test_rejects_mismatched_grid(self, method, small_options: GenerationOptions) -> None:
        with pytest.raises(GridShapeError):
            method(Grid(np.zeros((4, 4))), small_options, np.random.default_rng(11))


class TestPerlin:
    """Tests specific to the Perlin generator."""

    def test_origin_on_lattice(self, small_options: GenerationOptions) -> None:
        grid = Grid.zeros(small_options)
        perlin(grid, small_options, np.random.default_rng(5))
        assert grid.get(0, 0) == pytest.approx(0.0)

    def test_adds_to_existing_values(self, small_options: GenerationOptions) -> None:
        base = Grid.zeros(small_options)
        perlin(base, small_options, np.random.default_rng(5))

        layered = Grid(np.full((small_options.rows, small_options.cols), 5.0))
        perlin(layered, small_options, np.random.default_rng(5))

        np.testing.assert_allclose(layered.values, base.values + 5.0)

    def test_frequency_controls_roughness(self) -> None:
        def roughness(frequency: float) -> float:
            options = GenerationOptions(x_segments=32, y_segments=32, frequency=frequency)
            grid = Grid.zeros(options)
            perlin(grid, options, np.random.default_rng(5))
            return float(np.abs(np.diff(grid.values, axis=1)).mean())

        assert roughness(8.0) > roughness(1.0)


class TestSimplex:
    """Tests specific to the Simplex generator."""

    def test_smooth_surface(self, small_options: GenerationOptions) -> None:
        grid = Grid.zeros(small_options)
        simplex(grid, small_options, np.random.default_rng(5))
        # Features span many vertices, so neighbours stay close
        assert np.abs(np.diff(grid.values, axis=1)).max() < small_options.height_range / 4


class TestCorner:
    """Tests specific to the Corner generator."""

    def test_zero_variation_stays_flat(self) -> None:
        options = GenerationOptions(x_segments=8, y_segments=8, max_variation=0.0)
        grid = Grid.zeros(options)
        corner(grid, options, np.random.default_rng(5))
        np.testing.assert_array_equal(grid.values, 0.0)

    def test_variation_bounds_first_vertex(self) -> None:
        options = GenerationOptions(x_segments=8, y_segments=8, max_variation=10.0)
        grid = Grid.zeros(options)
        corner(grid, options, np.random.default_rng(5))
        # The first vertex has no earlier neighbours, only the disturbance
        assert -5.0 <= grid.get(0, 0) < 5.0
