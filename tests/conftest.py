"""Shared test fixtures for heightfield tests."""

import numpy as np
import pytest

from heightfield.config import GenerationOptions
from heightfield.grid import Grid


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random number generator."""
    return np.random.default_rng(1234)


@pytest.fixture
def small_options() -> GenerationOptions:
    """17x17 vertex grid with a [-100, 100] height range."""
    return GenerationOptions(x_segments=16, y_segments=16, seed=7)


@pytest.fixture
def small_grid(small_options: GenerationOptions) -> Grid:
    """Zeroed grid matching small_options."""
    return Grid.zeros(small_options)


@pytest.fixture
def linear_grid() -> Grid:
    """11x11 grid whose values rise linearly from 0 to 100 in row-major order."""
    return Grid(np.linspace(0.0, 100.0, 121).reshape(11, 11))
