"""Tests for multi-pass generator composition."""

import numpy as np
import pytest

from heightfield.composition import Pass, multi_pass, perlin_diamond, simplex_corner
from heightfield.config import GenerationOptions
from heightfield.grid import Grid


class _Recorder:
    """Generator stand-in that records the band it was given."""

    def __init__(self) -> None:
        self.bands: list[tuple[float, float]] = []

    def __call__(self, grid, options, rng) -> None:
        self.bands.append((options.min_height, options.max_height))
        grid.values += 1


class TestMultiPass:
    """Tests for band narrowing between passes."""

    def test_bands_narrow_cumulatively(
        self, small_options: GenerationOptions, small_grid: Grid, rng: np.random.Generator
    ) -> None:
        recorder = _Recorder()
        passes = [Pass(recorder), Pass(recorder), Pass(recorder, granularity=-2)]
        multi_pass(small_grid, small_options, passes, rng)

        assert recorder.bands[0] == (-100, 100)
        assert recorder.bands[1] == (pytest.approx(-90), pytest.approx(90))
        assert recorder.bands[2] == (pytest.approx(-108), pytest.approx(108))

    def test_first_granularity_ignored(
        self, small_options: GenerationOptions, small_grid: Grid, rng: np.random.Generator
    ) -> None:
        recorder = _Recorder()
        multi_pass(small_grid, small_options, [Pass(recorder, granularity=5)], rng)
        assert recorder.bands == [(-100, 100)]

    def test_caller_options_unchanged(
        self, small_options: GenerationOptions, small_grid: Grid, rng: np.random.Generator
    ) -> None:
        recorder = _Recorder()
        multi_pass(small_grid, small_options, [Pass(recorder), Pass(recorder, 3)], rng)
        assert small_options.min_height == -100
        assert small_options.max_height == 100

    def test_passes_share_grid(
        self, small_options: GenerationOptions, small_grid: Grid, rng: np.random.Generator
    ) -> None:
        recorder = _Recorder()
        multi_pass(small_grid, small_options, [Pass(recorder)] * 3, rng)
        np.testing.assert_array_equal(small_grid.values, 3.0)

    def test_band_may_invert(
        self, small_options: GenerationOptions, small_grid: Grid, rng: np.random.Generator
    ) -> None:
        recorder = _Recorder()
        multi_pass(small_grid, small_options, [Pass(recorder), Pass(recorder, 15)], rng)
        low, high = recorder.bands[1]
        assert low > high


class TestCompositeGenerators:
    """Tests for the built-in composite recipes."""

    @pytest.mark.parametrize("method", [perlin_diamond, simplex_corner])
    def test_runs_and_is_deterministic(
        self, method, small_options: GenerationOptions
    ) -> None:
        first = Grid.zeros(small_options)
        second = Grid.zeros(small_options)
        method(first, small_options, np.random.default_rng(3))
        method(second, small_options, np.random.default_rng(3))

        np.testing.assert_array_equal(first.values, second.values)
        assert np.count_nonzero(first.values) > 0

    def test_perlin_diamond_adds_detail(self, small_options: GenerationOptions) -> None:
        from heightfield.noise import perlin

        perlin_only = Grid.zeros(small_options)
        perlin(perlin_only, small_options, np.random.default_rng(3))

        layered = Grid.zeros(small_options)
        perlin_diamond(layered, small_options, np.random.default_rng(3))

        assert not np.allclose(perlin_only.values, layered.values)
